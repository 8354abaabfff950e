"""
community_hub.access

Role-scoped access control for every resource.

Responsibilities:
- Declare per-resource rules as data (`policy.POLICIES`).
- Enforce them uniformly through one component (`filter.AccessFilter`).
"""

from community_hub.access.filter import AccessFilter
from community_hub.access.policy import POLICIES, ResourcePolicy

__all__ = ["POLICIES", "AccessFilter", "ResourcePolicy"]
