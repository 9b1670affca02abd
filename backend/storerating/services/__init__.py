"""
Services Module

Domain logic shared by the routers:
- listing: allow-listed search and sort for list endpoints
- ratings: rating aggregates and the per-store rating upsert
- users: user serialization and uniqueness checks
"""
from .listing import apply_search, apply_sort
from .ratings import (
    format_average,
    ratings_summary,
    upsert_rating,
    with_rating_stats,
)
from .users import email_taken, user_to_dict

__all__ = [
    # Listing
    "apply_search",
    "apply_sort",
    # Ratings
    "format_average",
    "ratings_summary",
    "upsert_rating",
    "with_rating_stats",
    # Users
    "email_taken",
    "user_to_dict",
]
