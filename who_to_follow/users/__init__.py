"""
Social network store module.

This module provides UserManager for users, follow edges, posts,
engagement and sign-in sessions.
"""

from who_to_follow.users.manager import UserManager

__all__ = ["UserManager"]
