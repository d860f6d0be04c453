"""
NoteKeeper Backend - note and user management API

Notes reference users, titles are kept unique and every note read carries
the owning user's username.
"""

__version__ = "1.0.0"
