# storerating/models/__init__.py
"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- User: Account, credentials and role
- Role: Closed enumeration of account roles
- Store: A rateable store, optionally owned by a store_owner
- Rating: A user's 1-5 star rating of a store (one per user and store)
"""
from .user import User, Role
from .store import Store
from .rating import Rating
