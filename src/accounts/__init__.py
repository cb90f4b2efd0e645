"""
Accounts Module
===============

Bounded Context for user identity, credentials and roles.

Responsibilities:
- Register accounts and hash their passwords (bcrypt via passlib)
- Issue and verify JWT access tokens
- Resolve the current user for every protected route
- Self-service profile and password changes

Roles: user, staff, admin. Role and active-flag changes are made by
admins through the admin module.
"""

__version__ = "1.0.0"
