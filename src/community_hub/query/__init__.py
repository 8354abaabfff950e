"""
community_hub.query

List-query handling shared by the API and the client.

Responsibilities:
- Normalize loosely-typed filter input into a canonical `FilterQuery`.
- Compile a `FilterQuery` into SQL predicates/ordering per resource (`ListSpec`).
"""

from community_hub.query.normalizer import FilterQuery, format_local_date, normalize_filters

__all__ = ["FilterQuery", "format_local_date", "normalize_filters"]
