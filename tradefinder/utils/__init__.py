"""
Small numeric helpers shared by the valuation and scoring code.
"""

from .rounding import round_half_up

__all__ = [
    "round_half_up"
]
