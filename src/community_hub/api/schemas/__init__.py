"""
community_hub.api.schemas

Request/response models (pydantic) for every resource.

Responsibilities:
- Validate request bodies strictly (camelCase keys, unknown keys rejected).
- Shape ORM rows into wire responses without leaking private columns.
"""

# Package marker; schemas are imported directly from submodules.
