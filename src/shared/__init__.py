"""
Shared Kernel Module
====================

This module contains shared infrastructure used across all bounded
contexts (Accounts, Complaints and Admin).

Architecture Pattern: Modular Monolith
- Each module (accounts, complaints, admin) is a bounded context
- Shared kernel contains only generic infrastructure: logging, HTTP
  middleware, response envelope, rate limiting

DO NOT add complaint or account business logic to the shared kernel.
"""

__version__ = "1.0.0"
