"""
Admin Interfaces Layer
======================

Contains:
- Controllers: FastAPI admin routes
"""

from src.admin.interfaces.controllers import admin_router

__all__ = ["admin_router"]
