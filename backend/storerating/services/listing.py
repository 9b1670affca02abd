"""
Search and sort helpers for list endpoints.

Query parameters name columns, so they are looked up in an explicit
allow-list mapping (public name -> ORM field) before touching a queryset.
Anything not in the mapping is ignored instead of failing the request.
"""
from typing import Mapping, Optional

from tortoise.queryset import QuerySet

SORT_ORDERS = {"asc": "", "desc": "-"}

# Searchable text columns shared by users and stores
TEXT_SEARCH_FIELDS = {
    "name": "name",
    "email": "email",
    "address": "address",
}

USER_SORT_FIELDS = {
    "name": "name",
    "email": "email",
    "address": "address",
    "role": "role",
    "created_at": "created_at",
}

STORE_SORT_FIELDS = {
    "name": "name",
    "email": "email",
    "address": "address",
    "average_rating": "average_rating",  # annotation, see services.ratings
    "total_ratings": "total_ratings",    # annotation, see services.ratings
    "created_at": "created_at",
}


def apply_search(
    qs: QuerySet,
    term: Optional[str],
    field: Optional[str],
    allowed: Mapping[str, str] = TEXT_SEARCH_FIELDS,
) -> QuerySet:
    """
    Case-insensitive substring match of `term` on the allow-listed `field`.
    An empty term or an unknown field leaves the queryset untouched.
    """
    if not term or not field:
        return qs
    column = allowed.get(field)
    if column is None:
        return qs
    return qs.filter(**{f"{column}__icontains": term})


def apply_sort(
    qs: QuerySet,
    sort_by: Optional[str],
    sort_order: Optional[str],
    allowed: Mapping[str, str],
) -> QuerySet:
    """
    Order by an allow-listed column. Unknown column or direction means no
    ORDER BY at all (the list comes back in storage order).
    """
    column = allowed.get(sort_by or "")
    direction = SORT_ORDERS.get(sort_order or "")
    if column is None or direction is None:
        return qs
    return qs.order_by(f"{direction}{column}")
