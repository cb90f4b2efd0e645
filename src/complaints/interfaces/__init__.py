"""
Complaints Interfaces Layer
===========================

Contains:
- Controllers: FastAPI complaint routes
"""

from src.complaints.interfaces.controllers import complaint_router, get_complaint_service

__all__ = ["complaint_router", "get_complaint_service"]
