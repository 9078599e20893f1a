"""
End-to-end tests through the FastAPI app: routing, auth, mediator, handlers,
repositories and the response envelope.

Everything a test needs is created through the API itself, so each request
commits its own unit of work exactly as in production.
"""
import uuid
from datetime import datetime, timedelta

import pytest

from crm.api.v1.routes import ID_MISMATCH_MESSAGE
from crm.database.base import utcnow
from crm.validators.rules import NIL_UUID

pytestmark = pytest.mark.asyncio


def future(days: int = 3) -> str:
    return (utcnow() + timedelta(days=days)).replace(microsecond=0).isoformat()


async def post_ok(client, headers, path: str, body: dict) -> dict:
    response = await client.post(path, json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def create_lookup(client, headers, feature: str, label: str, position: int = 1) -> str:
    data = await post_ok(client, headers, f"/api/{feature}", {"label": label, "ordinalPosition": position})
    return data["lookup"]["id"]


@pytest.fixture
async def activity_body(client, auth_headers):
    type_id = await create_lookup(client, auth_headers, "activity-types", "Call")
    status_id = await create_lookup(client, auth_headers, "activity-statuses", "Open")

    def _build(**overrides) -> dict:
        body = {
            "activityTypeId": type_id,
            "activityStatusId": status_id,
            "subject": "Follow up",
            "dueDate": future(),
        }
        body.update(overrides)
        return body

    return _build


class TestHealthAndAuth:

    async def test_health_needs_no_token(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "healthy"

    async def test_missing_token_is_401_envelope(self, client):
        response = await client.get("/api/activities")

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Unauthorized access", "data": None, "errors": None}

    async def test_garbage_token_is_401(self, client):
        response = await client.get("/api/activities", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    async def test_request_id_is_echoed(self, client, auth_headers):
        response = await client.get("/api/activities", headers={**auth_headers, "X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    async def test_forged_request_id_is_replaced(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "bad id!"})
        assert response.headers["X-Request-ID"] != "bad id!"
        uuid.UUID(response.headers["X-Request-ID"])


class TestActivityLifecycle:

    async def test_create_get_update_delete(self, client, auth_headers, user_id, activity_body):
        """
        Behavior:
          - POST returns 201 with details; created_by comes from the token.
          - PUT without an id in the body uses the URL id.
          - DELETE soft-deletes; the entity then answers 404.
        """
        created = await post_ok(client, auth_headers, "/api/activities", activity_body())
        activity_id = created["activity"]["activityId"]
        assert created["activityTypeName"] == "Call"
        assert created["audit"]["createdBy"] == str(user_id)

        response = await client.get(f"/api/activities/{activity_id}", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Operation completed successfully"
        assert body["errors"] is None
        assert body["data"]["activity"]["subject"] == "Follow up"

        response = await client.put(
            f"/api/activities/{activity_id}", json=activity_body(subject="Call again"), headers=auth_headers
        )
        assert response.status_code == 200, response.text
        updated = response.json()["data"]
        assert updated["activity"]["subject"] == "Call again"
        assert updated["audit"]["modifiedBy"] == str(user_id)
        audit = updated["audit"]
        assert datetime.fromisoformat(audit["modifiedDate"]) > datetime.fromisoformat(audit["createdDate"])

        response = await client.get("/api/activities", headers=auth_headers)
        assert [a["activity"]["activityId"] for a in response.json()["data"]] == [activity_id]

        response = await client.delete(f"/api/activities/{activity_id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"] is True

        response = await client.get(f"/api/activities/{activity_id}", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["message"] == f"Activity with ID {activity_id} not found"

        response = await client.delete(f"/api/activities/{activity_id}", headers=auth_headers)
        assert response.status_code == 404

    async def test_nil_id_on_create_is_400(self, client, auth_headers, activity_body):
        response = await client.post(
            "/api/activities", json=activity_body(activityId=str(NIL_UUID)), headers=auth_headers
        )

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert body["errors"] == ["Activity ID is required."]

    async def test_empty_body_lists_every_error(self, client, auth_headers):
        response = await client.post("/api/activities", json={}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["errors"] == [
            "Activity type is required.",
            "Activity status is required.",
            "Subject is required.",
        ]

    async def test_id_mismatch_on_update(self, client, auth_headers, activity_body):
        created = await post_ok(client, auth_headers, "/api/activities", activity_body())
        activity_id = created["activity"]["activityId"]

        response = await client.put(
            f"/api/activities/{activity_id}",
            json=activity_body(activityId=str(uuid.uuid4())),
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == ID_MISMATCH_MESSAGE

    async def test_update_missing_is_404(self, client, auth_headers, activity_body):
        missing = uuid.uuid4()
        response = await client.put(f"/api/activities/{missing}", json=activity_body(), headers=auth_headers)
        assert response.status_code == 404

    async def test_malformed_id_is_400(self, client, auth_headers):
        response = await client.get("/api/activities/not-a-guid", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["errors"][0].startswith("path.id: ")

    async def test_extension_routes(self, client, auth_headers, activity_body):
        await post_ok(client, auth_headers, "/api/activities", activity_body(subject="Open one"))

        response = await client.get("/api/activities/incomplete", headers=auth_headers)
        assert [a["activity"]["subject"] for a in response.json()["data"]] == ["Open one"]

        response = await client.get("/api/activities/completed", headers=auth_headers)
        assert response.json()["data"] == []

        response = await client.get(
            "/api/activities/by-due-date-range",
            params={"start": utcnow().isoformat(), "end": future(10)},
            headers=auth_headers,
        )
        assert len(response.json()["data"]) == 1

    async def test_offset_aware_due_date_is_stored_as_utc(self, client, auth_headers, activity_body):
        created = await post_ok(
            client, auth_headers, "/api/activities", activity_body(dueDate="2099-01-01T05:00:00+05:00")
        )
        activity_id = created["activity"]["activityId"]

        response = await client.get(f"/api/activities/{activity_id}", headers=auth_headers)
        assert datetime.fromisoformat(response.json()["data"]["activity"]["dueDate"]) == datetime(2099, 1, 1)

        created = await post_ok(client, auth_headers, "/api/activities", activity_body(dueDate="2099-01-01T00:00:00Z"))
        assert datetime.fromisoformat(created["activity"]["dueDate"]) == datetime(2099, 1, 1)

    async def test_mixed_offsets_are_validated_not_crashed(self, client, auth_headers, activity_body):
        response = await client.post(
            "/api/activities",
            json=activity_body(startDate="2099-01-02T11:00:00+02:00", dueDate="2099-01-02T08:00:00"),
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["errors"] == ["Start date must be before or equal to due date."]

        response = await client.post(
            "/api/activities",
            json=activity_body(startDate="2099-01-02T09:00:00+02:00", dueDate="2099-01-02T08:00:00"),
            headers=auth_headers,
        )
        assert response.status_code == 201, response.text

    async def test_date_range_with_offsets(self, client, auth_headers, activity_body):
        await post_ok(client, auth_headers, "/api/activities", activity_body(dueDate="2099-06-01T12:00:00"))

        def window(start: str, end: str):
            return client.get(
                "/api/activities/by-due-date-range", params={"start": start, "end": end}, headers=auth_headers
            )

        # 13:00+02:00 is 11:00 UTC; 15:00+02:00 is 13:00 UTC
        response = await window("2099-06-01T13:00:00+02:00", "2099-06-01T15:00:00+02:00")
        assert response.status_code == 200
        assert len(response.json()["data"]) == 1

        response = await window("2099-06-01T12:30:00Z", "2099-06-01T14:00:00Z")
        assert response.json()["data"] == []

    async def test_paged(self, client, auth_headers, activity_body):
        for i in range(3):
            await post_ok(client, auth_headers, "/api/activities", activity_body(subject=f"Task {i}"))

        response = await client.get("/api/activities/paged?pageNumber=2&pageSize=2", headers=auth_headers)

        assert response.status_code == 200
        page = response.json()["data"]
        assert len(page["items"]) == 1
        assert page["pageNumber"] == 2
        assert page["pageSize"] == 2
        assert page["totalCount"] == 3
        assert page["totalPages"] == 2
        assert page["hasPreviousPage"] is True
        assert page["hasNextPage"] is False

        response = await client.get("/api/activities/paged?pageNumber=0", headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["errors"] == ["Page number must be greater than zero."]


class TestLookupAndSalesRoutes:

    async def test_lookup_default(self, client, auth_headers):
        response = await client.get("/api/invoice-statuses/default", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "No default InvoiceStatus found"

        await create_lookup(client, auth_headers, "invoice-statuses", "Paid", position=2)
        await create_lookup(client, auth_headers, "invoice-statuses", "Draft", position=1)

        response = await client.get("/api/invoice-statuses/default", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["lookup"]["label"] == "Draft"

        response = await client.get("/api/invoice-statuses/by-ordinal-position", headers=auth_headers)
        assert [s["label"] for s in response.json()["data"]] == ["Draft", "Paid"]

    async def test_duplicate_invoice_number_is_409(self, client, auth_headers):
        await post_ok(client, auth_headers, "/api/invoices", {"number": "INV-1"})

        response = await client.post("/api/invoices", json={"number": "INV-1"}, headers=auth_headers)

        assert response.status_code == 409
        body = response.json()
        assert body["message"] == "Invoice already exists for field(s): number"
        assert body["errors"] == ["number"]

    async def test_find_by_number(self, client, auth_headers):
        created = await post_ok(client, auth_headers, "/api/invoices", {"number": "INV-7"})

        response = await client.get("/api/invoices/by-number/INV-7", headers=auth_headers)
        assert response.json()["data"]["invoice"]["invoiceId"] == created["invoice"]["invoiceId"]

        response = await client.get("/api/invoices/by-number/INV-404", headers=auth_headers)
        assert response.status_code == 404

    async def test_quote_total_is_a_number(self, client, auth_headers):
        status_id = await create_lookup(client, auth_headers, "quote-statuses", "Pending")
        quote = await post_ok(client, auth_headers, "/api/quotes", {"quoteStatusId": status_id, "number": "Q-1"})
        quote_id = quote["quote"]["quoteId"]

        await post_ok(
            client, auth_headers, "/api/quote-line-items",
            {"quoteId": quote_id, "description": "Seats", "quantity": 3, "unitPrice": 10.5, "lineNumber": 1},
        )

        response = await client.get(f"/api/quote-line-items/total-for-quote/{quote_id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"] == 31.5


class TestJunctionRoutes:

    async def test_link_list_unlink(self, client, auth_headers):
        team = await post_ok(client, auth_headers, "/api/teams", {"name": "Support"})
        user = await post_ok(
            client, auth_headers, "/api/users", {"loginName": "amy", "loginPassword": "correct-horse"}
        )
        team_id, user_id = team["team"]["teamId"], user["user"]["userId"]

        response = await client.post(f"/api/teams/{team_id}/users/{user_id}", headers=auth_headers)
        assert response.status_code == 201
        assert response.json()["data"] is True

        response = await client.get(f"/api/teams/{team_id}/users", headers=auth_headers)
        assert response.json()["data"] == [user_id]

        response = await client.get(f"/api/users/{user_id}/teams", headers=auth_headers)
        assert response.json()["data"] == [team_id]

        response = await client.get(f"/api/users/by-team/{team_id}", headers=auth_headers)
        assert [u["user"]["loginName"] for u in response.json()["data"]] == ["amy"]

        response = await client.delete(f"/api/teams/{team_id}/users/{user_id}", headers=auth_headers)
        assert response.status_code == 200

        response = await client.delete(f"/api/teams/{team_id}/users/{user_id}", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["message"] == f"TeamUser with ID {team_id}/{user_id} not found"

    async def test_link_nil_ids(self, client, auth_headers):
        response = await client.post(f"/api/users/{NIL_UUID}/roles/{NIL_UUID}", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["errors"] == ["User ID is required.", "Role ID is required."]
