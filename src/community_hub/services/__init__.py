"""
community_hub.services

Service layer: transaction ownership and authorization around the repositories.
"""

# Package marker.
