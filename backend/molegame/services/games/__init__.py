"""Game domain services: round rules and tick scheduling.

This package contains the game loop logic that socket handlers and HTTP
routes drive, keeping transport concerns separated from core game
mechanics.
"""
