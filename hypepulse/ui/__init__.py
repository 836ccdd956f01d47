"""
UI Module - Discord UI Components

Available components:
- PaginatorView: Previous/Next navigation through the pages of one reply
- PageCursor: the clamped, expiring page index behind PaginatorView
"""
