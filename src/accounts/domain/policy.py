"""
Access Policy
=============

Role-based access as a single lookup table:

    (role, resource, action) -> scope

The scope says which records of the resource the role may act on:

- ANY:      every record
- OWN:      records the caller authored
- ASSIGNED: records currently assigned to the caller
- DENY:     none (the default for any combination not listed)
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from src.config import Role
from src.core import AuthorizationException


class Resource(str, Enum):
    COMPLAINT = "complaint"
    USER = "user"
    ANALYTICS = "analytics"


class Action(str, Enum):
    CREATE = "create"
    LIST_OWN = "list_own"
    LIST = "list"
    READ = "read"
    UPDATE_STATUS = "update_status"
    ASSIGN = "assign"
    UPDATE_PRIORITY = "update_priority"
    DELETE = "delete"
    MANAGE = "manage"


class Scope(str, Enum):
    ANY = "any"
    OWN = "own"
    ASSIGNED = "assigned"
    DENY = "deny"


POLICY: Dict[Tuple[Role, Resource, Action], Scope] = {
    # Filing and tracking one's own complaints
    (Role.USER, Resource.COMPLAINT, Action.CREATE): Scope.ANY,
    (Role.STAFF, Resource.COMPLAINT, Action.CREATE): Scope.ANY,
    (Role.ADMIN, Resource.COMPLAINT, Action.CREATE): Scope.ANY,
    (Role.USER, Resource.COMPLAINT, Action.LIST_OWN): Scope.OWN,
    (Role.STAFF, Resource.COMPLAINT, Action.LIST_OWN): Scope.OWN,
    (Role.ADMIN, Resource.COMPLAINT, Action.LIST_OWN): Scope.OWN,

    # Reading a single complaint
    (Role.USER, Resource.COMPLAINT, Action.READ): Scope.OWN,
    (Role.STAFF, Resource.COMPLAINT, Action.READ): Scope.ASSIGNED,
    (Role.ADMIN, Resource.COMPLAINT, Action.READ): Scope.ANY,

    # Triage
    (Role.STAFF, Resource.COMPLAINT, Action.LIST): Scope.ASSIGNED,
    (Role.ADMIN, Resource.COMPLAINT, Action.LIST): Scope.ANY,
    (Role.STAFF, Resource.COMPLAINT, Action.UPDATE_STATUS): Scope.ASSIGNED,
    (Role.ADMIN, Resource.COMPLAINT, Action.UPDATE_STATUS): Scope.ANY,
    (Role.ADMIN, Resource.COMPLAINT, Action.ASSIGN): Scope.ANY,
    (Role.ADMIN, Resource.COMPLAINT, Action.UPDATE_PRIORITY): Scope.ANY,
    (Role.ADMIN, Resource.COMPLAINT, Action.DELETE): Scope.ANY,

    # Administration
    (Role.ADMIN, Resource.USER, Action.MANAGE): Scope.ANY,
    (Role.ADMIN, Resource.ANALYTICS, Action.READ): Scope.ANY,
}


def scope_for(role: Role, resource: Resource, action: Action) -> Scope:
    return POLICY.get((Role(role), Resource(resource), Action(action)), Scope.DENY)


def scope_permits(
    scope: Scope,
    actor_id: str,
    owner_id: Optional[str] = None,
    assignee_id: Optional[str] = None,
) -> bool:
    """Whether `scope` covers a record with the given author and assignee."""
    if scope == Scope.ANY:
        return True
    if scope == Scope.OWN:
        return owner_id is not None and owner_id == actor_id
    if scope == Scope.ASSIGNED:
        return assignee_id is not None and assignee_id == actor_id
    return False


def is_allowed(
    role: Role,
    actor_id: str,
    resource: Resource,
    action: Action,
    owner_id: Optional[str] = None,
    assignee_id: Optional[str] = None,
) -> bool:
    return scope_permits(scope_for(role, resource, action), actor_id, owner_id, assignee_id)


def authorize(
    actor,
    resource: Resource,
    action: Action,
    owner_id: Optional[str] = None,
    assignee_id: Optional[str] = None,
) -> None:
    """
    Raise unless `actor` (anything with `id` and `role`) may perform the action.

    Raises:
        AuthorizationException: When the policy denies the action
    """
    if not is_allowed(actor.role, actor.id, resource, action, owner_id, assignee_id):
        raise AuthorizationException(
            f"Not authorized to {action.value.replace('_', ' ')} this {resource.value}",
            details={"role": Role(actor.role).value, "resource": resource.value, "action": action.value},
        )
