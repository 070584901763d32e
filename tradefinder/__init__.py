"""
Fantasy football trade finder.

Values players from season-to-date and projected production, then scores and
ranks the players other teams could send back for a player you want to move.
"""

__version__ = "1.0.0"
