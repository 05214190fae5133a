"""
Who To Follow - Follow suggestions for a social network.

This package provides a modular system for:
- Storing the social graph, posts and engagement (likes, comments)
- Generating follow suggestions from several independent strategies
- Fusing strategy signals into a single ranked list of users
"""

__version__ = "0.1.0"
