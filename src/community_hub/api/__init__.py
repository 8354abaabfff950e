"""
community_hub.api

HTTP surface of the community service.

Responsibilities:
- FastAPI app factory, routers and error translation.
- Request/response schemas and API-layer dependency wiring.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Routers validate, resolve the caller and delegate; rules live in services/access.
