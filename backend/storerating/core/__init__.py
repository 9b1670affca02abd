# storerating/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Application initialization and default admin creation
- db: Database configuration and connection management
- errors: JSON error envelope and exception handlers
- security: Password hashing and JWT access tokens
"""
