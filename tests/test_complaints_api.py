"""
Complaint API tests: filing, listing, status lifecycle, assignment and
per-role access.
"""

import uuid

import pytest

from tests.conftest import file_complaint

pytestmark = pytest.mark.asyncio


async def assign(client, admin, complaint_id, assignee_id):
    resp = await client.put(
        f"/api/complaints/{complaint_id}/assign",
        json={"assigned_to": assignee_id},
        headers=admin.headers,
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]["complaint"]


async def set_status(client, account, complaint_id, status, note=None):
    return await client.put(
        f"/api/complaints/{complaint_id}/status",
        json={"status": status, "note": note},
        headers=account.headers,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# FILING
# ═══════════════════════════════════════════════════════════════════════════════

class TestCreateComplaint:
    async def test_create(self, client, user):
        complaint = await file_complaint(client, user, priority="high", attachments=["uploads/photo.jpg"])

        assert complaint["status"] == "pending"
        assert complaint["priority"] == "high"
        assert complaint["category"] == "IT"
        assert complaint["attachments"] == ["uploads/photo.jpg"]
        assert complaint["user_id"] == user.id
        assert complaint["user"]["email"] == user.email
        assert complaint["assigned_to"] is None
        assert complaint["resolved_at"] is None
        assert complaint["resolution_time"] is None

        assert len(complaint["timeline"]) == 1
        entry = complaint["timeline"][0]
        assert entry["status"] == "pending"
        assert entry["note"] == "Complaint submitted"
        assert entry["updated_by_id"] == user.id

    async def test_priority_defaults_to_medium(self, client, user):
        complaint = await file_complaint(client, user)
        assert complaint["priority"] == "medium"

    async def test_requires_authentication(self, client):
        resp = await client.post("/api/complaints", json={
            "title": "No token here", "category": "IT", "description": "Should be rejected outright.",
        })
        assert resp.status_code == 401

    @pytest.mark.parametrize("overrides, field", [
        ({"title": "abc"}, "title"),
        ({"category": "Parking"}, "category"),
        ({"description": "short"}, "description"),
        ({"priority": "urgent"}, "priority"),
        ({"attachments": [f"file{i}.png" for i in range(6)]}, "attachments"),
    ])
    async def test_validation(self, client, user, overrides, field):
        payload = {
            "title": "Valid title here",
            "category": "IT",
            "description": "A description that is long enough.",
            **overrides,
        }
        resp = await client.post("/api/complaints", json=payload, headers=user.headers)
        assert resp.status_code == 400
        assert field in [error["field"] for error in resp.json()["errors"]]


# ═══════════════════════════════════════════════════════════════════════════════
# LISTING
# ═══════════════════════════════════════════════════════════════════════════════

class TestListComplaints:
    async def test_my_complaints_only_returns_own(self, client, user, other_user):
        await file_complaint(client, user, title="First complaint")
        await file_complaint(client, user, title="Second complaint")
        await file_complaint(client, other_user, title="Not mine at all")

        resp = await client.get("/api/complaints/my", headers=user.headers)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert [c["title"] for c in data["complaints"]] == ["Second complaint", "First complaint"]
        assert data["pagination"] == {"total": 2, "page": 1, "pages": 1, "limit": 10}

    async def test_my_complaints_filters(self, client, user):
        await file_complaint(client, user, category="Hostel")
        await file_complaint(client, user, category="IT")

        resp = await client.get("/api/complaints/my", params={"category": "Hostel"}, headers=user.headers)
        complaints = resp.json()["data"]["complaints"]
        assert [c["category"] for c in complaints] == ["Hostel"]

    async def test_pagination(self, client, user):
        for i in range(3):
            await file_complaint(client, user, title=f"Complaint number {i}")

        resp = await client.get("/api/complaints/my", params={"page": 2, "limit": 2}, headers=user.headers)
        data = resp.json()["data"]
        assert len(data["complaints"]) == 1
        assert data["pagination"] == {"total": 3, "page": 2, "pages": 2, "limit": 2}

    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 101}])
    async def test_bad_pagination_rejected(self, client, user, params):
        resp = await client.get("/api/complaints/my", params=params, headers=user.headers)
        assert resp.status_code == 400

    async def test_user_cannot_list_all(self, client, user):
        resp = await client.get("/api/complaints/all", headers=user.headers)
        assert resp.status_code == 403

    async def test_admin_sees_everything(self, client, user, other_user, admin):
        await file_complaint(client, user)
        await file_complaint(client, other_user)

        resp = await client.get("/api/complaints/all", headers=admin.headers)
        assert resp.json()["data"]["pagination"]["total"] == 2

    async def test_admin_search_and_filters(self, client, user, admin):
        await file_complaint(client, user, title="Broken projector", priority="high")
        await file_complaint(client, user, title="Cold food served", category="Canteen")

        resp = await client.get("/api/complaints/all", params={"search": "PROJECTOR"}, headers=admin.headers)
        assert [c["title"] for c in resp.json()["data"]["complaints"]] == ["Broken projector"]

        resp = await client.get("/api/complaints/all", params={"priority": "high"}, headers=admin.headers)
        assert [c["title"] for c in resp.json()["data"]["complaints"]] == ["Broken projector"]

    async def test_staff_only_sees_assigned(self, client, user, staff, other_staff, admin):
        mine = await file_complaint(client, user, title="For the first staff")
        theirs = await file_complaint(client, user, title="For the other staff")
        await file_complaint(client, user, title="Nobody has this one")
        await assign(client, admin, mine["id"], staff.id)
        await assign(client, admin, theirs["id"], other_staff.id)

        resp = await client.get("/api/complaints/all", headers=staff.headers)
        assert [c["id"] for c in resp.json()["data"]["complaints"]] == [mine["id"]]

        # Asking for someone else's queue does not widen the view
        resp = await client.get("/api/complaints/all", params={"assigned_to": other_staff.id}, headers=staff.headers)
        assert [c["id"] for c in resp.json()["data"]["complaints"]] == [mine["id"]]

    async def test_admin_filters_by_assignee(self, client, user, staff, admin):
        assigned = await file_complaint(client, user)
        await file_complaint(client, user)
        await assign(client, admin, assigned["id"], staff.id)

        resp = await client.get("/api/complaints/all", params={"assigned_to": staff.id}, headers=admin.headers)
        assert [c["id"] for c in resp.json()["data"]["complaints"]] == [assigned["id"]]


# ═══════════════════════════════════════════════════════════════════════════════
# READ ACCESS
# ═══════════════════════════════════════════════════════════════════════════════

class TestGetComplaint:
    async def test_author_can_read(self, client, user):
        complaint = await file_complaint(client, user)
        resp = await client.get(f"/api/complaints/{complaint['id']}", headers=user.headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["complaint"]["id"] == complaint["id"]

    async def test_other_user_forbidden(self, client, user, other_user):
        complaint = await file_complaint(client, user)
        resp = await client.get(f"/api/complaints/{complaint['id']}", headers=other_user.headers)
        assert resp.status_code == 403
        assert resp.json()["success"] is False

    async def test_unassigned_staff_forbidden(self, client, user, staff, other_staff, admin):
        complaint = await file_complaint(client, user)
        await assign(client, admin, complaint["id"], staff.id)

        assert (await client.get(f"/api/complaints/{complaint['id']}", headers=staff.headers)).status_code == 200
        assert (await client.get(f"/api/complaints/{complaint['id']}", headers=other_staff.headers)).status_code == 403

    async def test_admin_always_allowed(self, client, user, admin):
        complaint = await file_complaint(client, user)
        resp = await client.get(f"/api/complaints/{complaint['id']}", headers=admin.headers)
        assert resp.status_code == 200

    @pytest.mark.parametrize("complaint_id", [str(uuid.uuid4()), "not-a-uuid"])
    async def test_unknown_id_is_404(self, client, admin, complaint_id):
        resp = await client.get(f"/api/complaints/{complaint_id}", headers=admin.headers)
        assert resp.status_code == 404


# ═══════════════════════════════════════════════════════════════════════════════
# STATUS LIFECYCLE
# ═══════════════════════════════════════════════════════════════════════════════

class TestStatusLifecycle:
    async def test_progress_then_resolve(self, client, user, admin):
        complaint = await file_complaint(client, user)

        resp = await set_status(client, admin, complaint["id"], "in-progress", "Assigned")
        assert resp.status_code == 200
        updated = resp.json()["data"]["complaint"]
        assert len(updated["timeline"]) == 2
        assert updated["timeline"][-1]["note"] == "Assigned"
        assert updated["resolved_at"] is None

        resp = await set_status(client, admin, complaint["id"], "resolved", "Fixed")
        resolved = resp.json()["data"]["complaint"]
        assert len(resolved["timeline"]) == 3
        assert resolved["resolved_at"] is not None
        assert resolved["resolution_note"] == "Fixed"
        assert resolved["resolution_time"] > 0

    async def test_unchanged_status_adds_no_entry(self, client, user, admin):
        complaint = await file_complaint(client, user)
        await set_status(client, admin, complaint["id"], "in-progress")
        resp = await set_status(client, admin, complaint["id"], "in-progress")

        assert resp.status_code == 200
        assert [e["status"] for e in resp.json()["data"]["complaint"]["timeline"]] == ["pending", "in-progress"]

    async def test_resolved_at_survives_later_saves(self, client, user, admin):
        complaint = await file_complaint(client, user)
        first = (await set_status(client, admin, complaint["id"], "resolved")).json()["data"]["complaint"]
        again = (await set_status(client, admin, complaint["id"], "resolved", "Note added later")).json()["data"]["complaint"]
        reopened = (await set_status(client, admin, complaint["id"], "pending")).json()["data"]["complaint"]

        assert again["resolved_at"] == first["resolved_at"]
        assert again["resolution_note"] == "Note added later"
        assert len(again["timeline"]) == len(first["timeline"])
        assert reopened["resolved_at"] == first["resolved_at"]

    async def test_assigned_staff_can_update(self, client, user, staff, admin):
        complaint = await file_complaint(client, user)
        await assign(client, admin, complaint["id"], staff.id)

        resp = await set_status(client, staff, complaint["id"], "in-progress", "On it")
        assert resp.status_code == 200
        entry = resp.json()["data"]["complaint"]["timeline"][-1]
        assert entry["updated_by_id"] == staff.id
        assert entry["updated_by"]["email"] == staff.email

    async def test_unassigned_staff_cannot_update(self, client, user, staff):
        complaint = await file_complaint(client, user)
        resp = await set_status(client, staff, complaint["id"], "in-progress")
        assert resp.status_code == 403

    async def test_author_cannot_update(self, client, user):
        complaint = await file_complaint(client, user)
        resp = await set_status(client, user, complaint["id"], "resolved")
        assert resp.status_code == 403

    async def test_invalid_status_rejected(self, client, user, admin):
        complaint = await file_complaint(client, user)
        resp = await set_status(client, admin, complaint["id"], "closed")
        assert resp.status_code == 400

    async def test_long_note_allowed_on_non_resolved_transition(self, client, user, admin):
        complaint = await file_complaint(client, user)
        resp = await set_status(client, admin, complaint["id"], "in-progress", note="x" * 1500)
        assert resp.status_code == 200
        assert len(resp.json()["data"]["complaint"]["timeline"][-1]["note"]) == 1500

    async def test_long_resolution_note_rejected(self, client, user, admin):
        complaint = await file_complaint(client, user)
        resp = await set_status(client, admin, complaint["id"], "resolved", note="x" * 1001)
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["field"] == "note"

    async def test_status_is_required(self, client, user, admin):
        complaint = await file_complaint(client, user)
        resp = await client.put(f"/api/complaints/{complaint['id']}/status", json={"note": "no status"},
                                headers=admin.headers)
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["field"] == "status"


# ═══════════════════════════════════════════════════════════════════════════════
# ASSIGNMENT, PRIORITY, DELETION
# ═══════════════════════════════════════════════════════════════════════════════

class TestAdminActions:
    async def test_assign_records_timeline_entry(self, client, user, staff, admin):
        complaint = await file_complaint(client, user)
        assigned = await assign(client, admin, complaint["id"], staff.id)

        assert assigned["assigned_to_id"] == staff.id
        assert assigned["assigned_to"]["email"] == staff.email
        entry = assigned["timeline"][-1]
        assert entry["status"] == "pending"
        assert entry["note"] == "Complaint assigned"
        assert entry["updated_by_id"] == admin.id

    async def test_cannot_assign_to_regular_user(self, client, user, other_user, admin):
        complaint = await file_complaint(client, user)
        resp = await client.put(f"/api/complaints/{complaint['id']}/assign",
                                json={"assigned_to": other_user.id}, headers=admin.headers)
        assert resp.status_code == 400

    async def test_cannot_assign_to_unknown_user(self, client, user, admin):
        complaint = await file_complaint(client, user)
        resp = await client.put(f"/api/complaints/{complaint['id']}/assign",
                                json={"assigned_to": str(uuid.uuid4())}, headers=admin.headers)
        assert resp.status_code == 404

    async def test_cannot_assign_to_deactivated_staff(self, client, user, staff, admin):
        complaint = await file_complaint(client, user)
        await client.put(f"/api/admin/users/{staff.id}/toggle-status", headers=admin.headers)
        resp = await client.put(f"/api/complaints/{complaint['id']}/assign",
                                json={"assigned_to": staff.id}, headers=admin.headers)
        assert resp.status_code == 400

    async def test_staff_cannot_assign(self, client, user, staff):
        complaint = await file_complaint(client, user)
        resp = await client.put(f"/api/complaints/{complaint['id']}/assign",
                                json={"assigned_to": staff.id}, headers=staff.headers)
        assert resp.status_code == 403

    async def test_update_priority(self, client, user, admin):
        complaint = await file_complaint(client, user)
        resp = await client.put(f"/api/complaints/{complaint['id']}/priority",
                                json={"priority": "critical"}, headers=admin.headers)
        assert resp.status_code == 200
        updated = resp.json()["data"]["complaint"]
        assert updated["priority"] == "critical"
        assert len(updated["timeline"]) == 1

    async def test_assigned_staff_cannot_change_priority(self, client, user, staff, admin):
        complaint = await file_complaint(client, user)
        await assign(client, admin, complaint["id"], staff.id)
        resp = await client.put(f"/api/complaints/{complaint['id']}/priority",
                                json={"priority": "low"}, headers=staff.headers)
        assert resp.status_code == 403

    async def test_delete(self, client, user, admin):
        complaint = await file_complaint(client, user)
        await set_status(client, admin, complaint["id"], "rejected", "Duplicate")

        resp = await client.delete(f"/api/complaints/{complaint['id']}", headers=admin.headers)
        assert resp.status_code == 200
        assert (await client.get(f"/api/complaints/{complaint['id']}", headers=admin.headers)).status_code == 404

    async def test_author_cannot_delete(self, client, user):
        complaint = await file_complaint(client, user)
        resp = await client.delete(f"/api/complaints/{complaint['id']}", headers=user.headers)
        assert resp.status_code == 403


# ═══════════════════════════════════════════════════════════════════════════════
# ORPHANED COMPLAINTS
# ═══════════════════════════════════════════════════════════════════════════════

class TestOrphanedComplaints:
    async def test_complaint_survives_author_deletion(self, client, user, admin):
        complaint = await file_complaint(client, user)

        resp = await client.delete(f"/api/admin/users/{user.id}", headers=admin.headers)
        assert resp.status_code == 200

        resp = await client.get(f"/api/complaints/{complaint['id']}", headers=admin.headers)
        assert resp.status_code == 200
        orphan = resp.json()["data"]["complaint"]
        assert orphan["user_id"] == user.id
        assert orphan["user"] is None
        assert orphan["timeline"][0]["updated_by"] is None

        resp = await client.get("/api/complaints/all", headers=admin.headers)
        assert resp.json()["data"]["pagination"]["total"] == 1
