# storerating/schemas/rating.py
"""
Pydantic schemas for rating submission.
"""
from pydantic import BaseModel

from .fields import Stars, StoreId


class RatingIn(BaseModel):
    """
    Request model for submitting (or re-submitting) a store rating.
    """
    storeId: StoreId  # Store being rated
    rating: Stars  # 1-5 inclusive
