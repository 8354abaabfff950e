"""
community_hub.client

Python client for the community API.

Responsibilities:
- Typed HTTP boundary over httpx (`api.CommunityApiClient`).
- Explicit authenticated session value (`session.ClientSession`).
- List orchestration with debounce and last-request-wins (`listing.ListController`).
- Create/edit form orchestration with shared validation (`forms.ResourceForm`).
"""

from community_hub.client.api import ApiError, CommunityApiClient, ListPage, list_fetcher
from community_hub.client.forms import ResourceForm
from community_hub.client.listing import ListController
from community_hub.client.session import ClientSession

__all__ = [
    "ApiError",
    "ClientSession",
    "CommunityApiClient",
    "ListController",
    "ListPage",
    "ResourceForm",
    "list_fetcher",
]
