"""
Admin Module
============

Bounded Context for the administrator console.

Responsibilities:
- Dashboard analytics over complaints and users
- User directory with role changes, activation toggles and deletion
- Staff directory used when assigning complaints

Every route requires the admin role.
"""

__version__ = "1.0.0"
