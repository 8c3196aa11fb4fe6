"""EHDS Explorer public data gateway.

Read-only HTTP access to EHDS Regulation content with a persisted per-client rate limit.
"""

__version__ = "1.0.0"
