"""
Complaints Module
=================

Bounded Context for filing and working complaints.

Responsibilities:
- File complaints (title, category, description, priority, attachments)
- Move complaints through pending / in-progress / resolved / rejected
- Keep an append-only timeline of status changes and assignments
- Enforce who may read, list, work and delete each complaint
"""

__version__ = "1.0.0"
