"""
Unit tests for the role/resource/action access table and its application
to complaint records.
"""

from dataclasses import dataclass

import pytest

from src.accounts.domain import Action, Resource, Scope, is_allowed, scope_for
from src.complaints.domain import authorize_complaint, list_filters_for, open_complaint
from src.complaints.domain.lifecycle import assign_complaint
from src.config import Role
from src.core import AuthorizationException


@dataclass
class Actor:
    id: str
    role: Role


AUTHOR = Actor("u-1", Role.USER)
STRANGER = Actor("u-2", Role.USER)
ASSIGNEE = Actor("s-1", Role.STAFF)
OTHER_STAFF = Actor("s-2", Role.STAFF)
ADMIN = Actor("a-1", Role.ADMIN)


@pytest.fixture
def complaint():
    filed = open_complaint(AUTHOR.id, "Leaking tap in hostel", "Hostel", "The tap in room 12 leaks all night long.")
    return assign_complaint(filed, ASSIGNEE.id, ADMIN.id)


class TestPolicyTable:
    @pytest.mark.parametrize("role", list(Role))
    def test_every_role_may_file_and_list_own(self, role):
        assert scope_for(role, Resource.COMPLAINT, Action.CREATE) == Scope.ANY
        assert scope_for(role, Resource.COMPLAINT, Action.LIST_OWN) == Scope.OWN

    def test_read_scopes(self):
        assert scope_for(Role.USER, Resource.COMPLAINT, Action.READ) == Scope.OWN
        assert scope_for(Role.STAFF, Resource.COMPLAINT, Action.READ) == Scope.ASSIGNED
        assert scope_for(Role.ADMIN, Resource.COMPLAINT, Action.READ) == Scope.ANY

    @pytest.mark.parametrize("action", [Action.ASSIGN, Action.UPDATE_PRIORITY, Action.DELETE])
    def test_admin_only_actions(self, action):
        assert scope_for(Role.USER, Resource.COMPLAINT, action) == Scope.DENY
        assert scope_for(Role.STAFF, Resource.COMPLAINT, action) == Scope.DENY
        assert scope_for(Role.ADMIN, Resource.COMPLAINT, action) == Scope.ANY

    def test_users_cannot_triage(self):
        assert scope_for(Role.USER, Resource.COMPLAINT, Action.LIST) == Scope.DENY
        assert scope_for(Role.USER, Resource.COMPLAINT, Action.UPDATE_STATUS) == Scope.DENY

    def test_administration_is_admin_only(self):
        for role in (Role.USER, Role.STAFF):
            assert scope_for(role, Resource.USER, Action.MANAGE) == Scope.DENY
            assert scope_for(role, Resource.ANALYTICS, Action.READ) == Scope.DENY
        assert scope_for(Role.ADMIN, Resource.USER, Action.MANAGE) == Scope.ANY

    def test_is_allowed_respects_record_scope(self):
        assert is_allowed(Role.USER, "u-1", Resource.COMPLAINT, Action.READ, owner_id="u-1")
        assert not is_allowed(Role.USER, "u-1", Resource.COMPLAINT, Action.READ, owner_id="u-2")
        assert not is_allowed(Role.STAFF, "s-1", Resource.COMPLAINT, Action.READ, owner_id="x", assignee_id=None)


class TestComplaintAccess:
    def test_author_reads_own_complaint(self, complaint):
        authorize_complaint(AUTHOR, Action.READ, complaint)

    def test_other_user_denied(self, complaint):
        with pytest.raises(AuthorizationException):
            authorize_complaint(STRANGER, Action.READ, complaint)

    def test_assignee_reads_and_updates(self, complaint):
        authorize_complaint(ASSIGNEE, Action.READ, complaint)
        authorize_complaint(ASSIGNEE, Action.UPDATE_STATUS, complaint)

    def test_unassigned_staff_denied(self, complaint):
        with pytest.raises(AuthorizationException):
            authorize_complaint(OTHER_STAFF, Action.READ, complaint)
        with pytest.raises(AuthorizationException):
            authorize_complaint(OTHER_STAFF, Action.UPDATE_STATUS, complaint)

    def test_author_cannot_change_status(self, complaint):
        with pytest.raises(AuthorizationException):
            authorize_complaint(AUTHOR, Action.UPDATE_STATUS, complaint)

    @pytest.mark.parametrize("action", [
        Action.READ, Action.LIST, Action.UPDATE_STATUS, Action.ASSIGN, Action.UPDATE_PRIORITY, Action.DELETE,
    ])
    def test_admin_never_denied_on_complaints(self, complaint, action):
        authorize_complaint(ADMIN, action, complaint)

    def test_role_level_check_without_record(self):
        authorize_complaint(AUTHOR, Action.CREATE)
        with pytest.raises(AuthorizationException):
            authorize_complaint(AUTHOR, Action.DELETE)


class TestListFilters:
    def test_user_listing_is_forced_to_own(self):
        filters = list_filters_for(AUTHOR, Action.LIST_OWN, {"user_id": "someone-else", "status": "pending"})
        assert filters == {"user_id": AUTHOR.id, "status": "pending"}

    def test_staff_assigned_filter_cannot_widen_scope(self):
        filters = list_filters_for(ASSIGNEE, Action.LIST, {"assigned_to": OTHER_STAFF.id})
        assert filters["assigned_to"] == ASSIGNEE.id

    def test_admin_filters_pass_through(self):
        requested = {"assigned_to": ASSIGNEE.id, "category": "IT"}
        assert list_filters_for(ADMIN, Action.LIST, requested) == requested

    def test_user_cannot_list_all(self):
        with pytest.raises(AuthorizationException):
            list_filters_for(AUTHOR, Action.LIST, {})
