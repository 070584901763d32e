"""
CORS (Cross-Origin Resource Sharing) middleware configuration.

The league setup and trade results pages run on a separate dev server, so
the API must accept their origin.
"""

from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


def setup_cors(app: FastAPI, allowed_origins: Optional[List[str]] = None):
    """
    Configure CORS middleware for the FastAPI application.

    Args:
        app: FastAPI application instance
        allowed_origins: List of allowed origins. Defaults to common dev origins.
    """

    if allowed_origins is None:
        allowed_origins = [
            "http://localhost:3000",    # Next/React dev server
            "http://localhost:8080",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:8080",
        ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Process-Time"],
    )
