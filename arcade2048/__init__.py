"""
Arcade 2048 - The arcade's 2048 game engine and score service.

A deterministic, presentation-agnostic 2048 engine with:
- Board model and slide/merge algorithm
- Injectable tile spawning for reproducible games
- Win/loss evaluation and report-once scoring
- Leaderboards and play analytics
- A REST API for the browser front end
"""

__version__ = "0.1.0"
