"""
Complaint Access Rules
======================

Applies the access policy table to complaint records.
"""

from typing import Optional

from src.accounts.domain.policy import Action, Resource, Scope, authorize, scope_for
from src.complaints.domain.entities import Complaint


def authorize_complaint(actor, action: Action, complaint: Optional[Complaint] = None) -> None:
    """
    Raise AuthorizationException unless `actor` may perform `action` on `complaint`.

    Without a complaint only the role-level permission is checked.
    """
    if complaint is None:
        if scope_for(actor.role, Resource.COMPLAINT, action) == Scope.DENY:
            authorize(actor, Resource.COMPLAINT, action)
        return

    authorize(
        actor,
        Resource.COMPLAINT,
        action,
        owner_id=complaint.user_id,
        assignee_id=complaint.assigned_to,
    )


def list_filters_for(actor, action: Action, requested: dict) -> dict:
    """
    Narrow list filters to the caller's scope.

    The scope always wins over caller-supplied filters, so a staff member's
    `assigned_to` filter cannot reach complaints assigned to someone else.
    """
    scope = scope_for(actor.role, Resource.COMPLAINT, action)
    filters = dict(requested)

    if scope == Scope.OWN:
        filters["user_id"] = actor.id
    elif scope == Scope.ASSIGNED:
        filters["assigned_to"] = actor.id
    elif scope == Scope.DENY:
        authorize(actor, Resource.COMPLAINT, action)

    return filters
