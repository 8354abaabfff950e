"""
community_hub.auth

Authentication/authorization package.

Responsibilities:
- JWT helpers and validation.
- Password hashing.
- FastAPI auth dependencies (Principal + admin gate).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Resource-level authorization (ownership, field allow-lists) lives in
# `community_hub.access`; this package only answers "who is calling".
