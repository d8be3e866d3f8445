"""API endpoint tests"""
from html import escape

import pytest

from dashboard.services.notifications import MockNotificationService


def _open_draft(client, headers, **body):
    response = client.post("/api/drafts", json=body, headers=headers)
    assert response.status_code == 201
    return response.json()["draft_id"]


def _ready_draft(client, headers):
    draft_id = _open_draft(client, headers)
    client.patch(
        f"/api/drafts/{draft_id}",
        json={"selected_table": "5", "selected_waiter": "Sarah Elizabeth"},
        headers=headers,
    )
    client.post(f"/api/drafts/{draft_id}/items", json={"menu_item_id": "1"}, headers=headers)
    client.post(f"/api/drafts/{draft_id}/items", json={"menu_item_id": "1"}, headers=headers)
    client.post(f"/api/drafts/{draft_id}/items", json={"menu_item_id": "18"}, headers=headers)
    return draft_id


class TestRootAndHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["health"] == "/health"

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "operational"
        assert data["notification_service"] == "healthy"
        assert data["open_drafts"] == 0


class TestAuthEndpoints:
    def test_sign_up_and_sign_in(self, client):
        response = client.post(
            "/api/auth/sign-up",
            json={"email": "lisa@restaurant.com", "password": "secret123", "full_name": "Lisa Marie"},
        )
        assert response.status_code == 201
        assert response.json()["full_name"] == "Lisa Marie"

        response = client.post("/api/auth/sign-in", json={"email": "lisa@restaurant.com", "password": "secret123"})
        assert response.status_code == 200
        assert response.json()["access_token"]

    def test_sign_up_short_password(self, client):
        response = client.post("/api/auth/sign-up", json={"email": "a@b.com", "password": "123"})
        assert response.status_code == 400
        assert "at least 6" in response.json()["detail"]

    def test_sign_up_invalid_email(self, client):
        response = client.post("/api/auth/sign-up", json={"email": "not-an-email", "password": "secret123"})
        assert response.status_code == 422

    def test_sign_in_bad_credentials(self, client):
        response = client.post("/api/auth/sign-in", json={"email": "a@b.com", "password": "secret123"})
        assert response.status_code == 401

    def test_sign_out_invalidates_token(self, client, auth_headers):
        assert client.post("/api/auth/sign-out", headers=auth_headers).status_code == 200
        assert client.get("/api/menu", headers=auth_headers).status_code == 401

    def test_reset_password(self, client, identity, auth_headers):
        response = client.post("/api/auth/reset-password", json={"email": "sarah@restaurant.com"})

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert "sarah@restaurant.com" in identity.recovery_links

    def test_set_new_password(self, client, auth_headers):
        response = client.post(
            "/api/auth/set-new-password",
            json={"new_password": "brandnew1", "confirm_password": "brandnew1"},
            headers=auth_headers,
        )
        assert response.status_code == 200

        response = client.post("/api/auth/sign-in", json={"email": "sarah@restaurant.com", "password": "brandnew1"})
        assert response.status_code == 200

    def test_set_new_password_mismatch(self, client, auth_headers):
        response = client.post(
            "/api/auth/set-new-password",
            json={"new_password": "brandnew1", "confirm_password": "different"},
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_set_new_password_requires_token(self, client):
        response = client.post(
            "/api/auth/set-new-password",
            json={"new_password": "brandnew1", "confirm_password": "brandnew1"},
        )
        assert response.status_code == 401


class TestEmailEndpoints:
    def test_send_password_reset(self, client, notifications):
        response = client.post(
            "/api/send-password-reset",
            json={"email": "emma@restaurant.com", "reset_link": "https://app.test/reset"},
        )

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert "Hello emma," in notifications.outbox[0]["html"]

    def test_send_password_reset_requires_link(self, client):
        response = client.post("/api/send-password-reset", json={"email": "emma@restaurant.com", "reset_link": " "})
        assert response.status_code == 422

    def test_send_signup_link(self, client, identity, notifications):
        response = client.post(
            "/api/send-signup-link",
            json={"email": "new@restaurant.com", "customer_name": "New Hire"},
        )

        assert response.status_code == 200
        assert escape(identity.signup_links["new@restaurant.com"]) in notifications.outbox[0]["html"]

    def test_send_test_email_to_many(self, client, notifications):
        response = client.post(
            "/api/send-test-email",
            json={"to": ["a@b.com", "c@d.com"], "subject": "Ping", "html": "<p>Ping</p>"},
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Test email sent successfully"
        assert notifications.outbox[0]["to"] == ["a@b.com", "c@d.com"]

    def test_send_test_email_missing_fields(self, client):
        response = client.post("/api/send-test-email", json={"to": "a@b.com", "subject": "", "html": "x"})
        assert response.status_code == 422

    def test_email_failure_returns_500(self, client):
        from dashboard.main import app
        from dashboard.services.notifications import get_notification_service

        failing = MockNotificationService(failure_rate=1.0, max_latency=0)
        app.dependency_overrides[get_notification_service] = lambda: failing

        response = client.post(
            "/api/send-password-reset",
            json={"email": "emma@restaurant.com", "reset_link": "https://app.test/reset"},
        )

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Failed to send email"
        assert data["detail"] == "Simulated email failure"


class TestMenuEndpoints:
    def test_requires_auth(self, client):
        assert client.get("/api/menu").status_code == 401

    def test_list_menu(self, client, auth_headers):
        response = client.get("/api/menu", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert len(data["items"]) == 19
        assert data["categories"] == ["all", "appetizer", "main", "dessert", "beverage"]

    def test_search_and_category(self, client, auth_headers):
        response = client.get("/api/menu", params={"search": "parmesan", "category": "main"}, headers=auth_headers)

        assert [item["name"] for item in response.json()["items"]] == ["Chicken Parmesan"]

    def test_categories(self, client, auth_headers):
        response = client.get("/api/menu/categories", headers=auth_headers)
        assert response.json()[0] == "all"


class TestDraftEndpoints:
    def test_open_empty_draft(self, client, auth_headers):
        response = client.post("/api/drafts", headers=auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["order_items"] == []
        assert data["is_valid"] is False

    def test_open_with_initial_values(self, client, auth_headers):
        response = client.post(
            "/api/drafts",
            json={
                "initial_table": "9",
                "initial_items": [{"menu_item_id": "4", "quantity": 2, "price": 7.99}],
            },
            headers=auth_headers,
        )

        data = response.json()
        assert data["selected_table"] == "9"
        assert data["total_amount"] == pytest.approx(15.98)

    def test_add_items_and_totals(self, client, auth_headers):
        draft_id = _ready_draft(client, auth_headers)

        data = client.get(f"/api/drafts/{draft_id}", headers=auth_headers).json()

        assert data["is_valid"] is True
        assert [(i["menu_item_id"], i["quantity"]) for i in data["order_items"]] == [("1", 2), ("18", 1)]
        assert data["total_amount"] == pytest.approx(12.99 * 2 + 3.99)

    def test_item_quantity(self, client, auth_headers):
        draft_id = _ready_draft(client, auth_headers)

        response = client.get(f"/api/drafts/{draft_id}/items/1", headers=auth_headers)
        assert response.json() == {"menu_item_id": "1", "quantity": 2}

        response = client.get(f"/api/drafts/{draft_id}/items/2", headers=auth_headers)
        assert response.json()["quantity"] == 0

    def test_remove_item(self, client, auth_headers):
        draft_id = _ready_draft(client, auth_headers)

        client.delete(f"/api/drafts/{draft_id}/items/18", headers=auth_headers)
        data = client.delete(f"/api/drafts/{draft_id}/items/1", headers=auth_headers).json()

        assert data["order_items"] == [
            {"menu_item_id": "1", "quantity": 1, "price": 12.99, "special_instructions": ""}
        ]

    def test_remove_unknown_item_is_noop(self, client, auth_headers):
        draft_id = _ready_draft(client, auth_headers)

        response = client.delete(f"/api/drafts/{draft_id}/items/unknown", headers=auth_headers)

        assert response.status_code == 200
        assert len(response.json()["order_items"]) == 2

    def test_add_unknown_menu_item(self, client, auth_headers):
        draft_id = _open_draft(client, auth_headers)

        response = client.post(f"/api/drafts/{draft_id}/items", json={"menu_item_id": "999"}, headers=auth_headers)

        assert response.status_code == 404

    def test_unknown_draft(self, client, auth_headers):
        response = client.get("/api/drafts/missing", headers=auth_headers)
        assert response.status_code == 404

    def test_reset(self, client, auth_headers):
        draft_id = _ready_draft(client, auth_headers)

        data = client.post(f"/api/drafts/{draft_id}/reset", headers=auth_headers).json()

        assert data["selected_table"] == ""
        assert data["order_items"] == []
        assert data["total_amount"] == 0

    def test_submit(self, client, auth_headers):
        draft_id = _ready_draft(client, auth_headers)

        response = client.post(f"/api/drafts/{draft_id}/submit", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Order placed successfully!"
        assert data["table"] == "5"
        assert data["status"] == "pending"
        assert data["confirmation_sent"] is False

        draft = client.get(f"/api/drafts/{draft_id}", headers=auth_headers).json()
        assert draft["order_items"] == []

    def test_submit_sends_confirmation(self, client, auth_headers, notifications):
        draft_id = _ready_draft(client, auth_headers)

        response = client.post(
            f"/api/drafts/{draft_id}/submit",
            json={"customer_email": "guest@example.com"},
            headers=auth_headers,
        )

        assert response.json()["confirmation_sent"] is True
        html = notifications.outbox[0]["html"]
        assert "Hello guest," in html
        assert "<td>Caesar Salad</td><td>2</td><td>$12.99</td><td>$25.98</td>" in html

    def test_submit_succeeds_when_email_fails(self, client, auth_headers):
        from dashboard.main import app
        from dashboard.services.notifications import get_notification_service

        app.dependency_overrides[get_notification_service] = lambda: MockNotificationService(
            failure_rate=1.0, max_latency=0
        )
        draft_id = _ready_draft(client, auth_headers)

        response = client.post(
            f"/api/drafts/{draft_id}/submit",
            json={"customer_email": "guest@example.com"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["confirmation_sent"] is False

    def test_submit_invalid_draft(self, client, auth_headers):
        draft_id = _open_draft(client, auth_headers, initial_table="5")

        response = client.post(f"/api/drafts/{draft_id}/submit", headers=auth_headers)

        assert response.status_code == 400
        assert "select a table, waiter" in response.json()["detail"]

    def test_close(self, client, auth_headers, registry):
        draft_id = _open_draft(client, auth_headers)

        response = client.delete(f"/api/drafts/{draft_id}", headers=auth_headers)

        assert response.status_code == 204
        assert len(registry) == 0

    def test_submitted_draft_stays_open_until_closed(self, client, auth_headers, registry):
        draft_id = _ready_draft(client, auth_headers)

        client.post(f"/api/drafts/{draft_id}/submit", headers=auth_headers)
        assert len(registry) == 1

        client.delete(f"/api/drafts/{draft_id}", headers=auth_headers)
        assert len(registry) == 0
        assert client.get(f"/api/drafts/{draft_id}", headers=auth_headers).status_code == 404


class TestStaffEndpoints:
    def test_list_staff(self, client, auth_headers):
        response = client.get("/api/staff", headers=auth_headers)

        assert response.status_code == 200
        assert [member["id"] for member in response.json()] == ["4", "5", "6"]

    def test_update_shift(self, client, auth_headers):
        response = client.put(
            "/api/staff/4/shift",
            json={"shift_start": "09:30", "shift_end": "24:00"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["shift_start"] == "09:30"

    @pytest.mark.parametrize("value", ["9:00", "25:00", "12:60", "24:30", "noon"])
    def test_update_shift_rejects_bad_times(self, client, auth_headers, value):
        response = client.put(
            "/api/staff/4/shift",
            json={"shift_start": value, "shift_end": "17:00"},
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_update_unknown_staff(self, client, auth_headers):
        response = client.put(
            "/api/staff/99/shift",
            json={"shift_start": "09:00", "shift_end": "17:00"},
            headers=auth_headers,
        )
        assert response.status_code == 404
