"""
community_hub.db.repositories

Repository package.

Responsibilities:
- Group data-access repositories for the persistence layer, one per resource.
"""

# Package marker; repositories are imported directly from submodules.


# --- Module Notes -----------------------------------------------------------
# Repositories are intentionally thin; authorization and transactions belong in services.
