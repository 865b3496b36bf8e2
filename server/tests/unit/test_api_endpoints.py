"""Integration tests for API endpoints."""

import pytest


@pytest.mark.asyncio
async def test_register_and_me(test_client, auth_headers, sample_registration):
    response = await test_client.post("/v1/auth/me", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["phone"] == sample_registration["phone"]
    assert data["language"] == "ar"
    assert "password_hash" not in data


@pytest.mark.asyncio
async def test_register_duplicate_phone(test_client, auth_headers, sample_registration):
    response = await test_client.post("/v1/auth/register", json=sample_registration)

    assert response.status_code == 409
    assert response.json()["status"] == 409


@pytest.mark.asyncio
async def test_login(test_client, auth_headers, sample_registration):
    response = await test_client.post("/v1/auth/login", json={
        "phone": sample_registration["phone"],
        "password": sample_registration["password"],
    })

    assert response.status_code == 200
    token = response.json()["access_token"]

    me = await test_client.post("/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200


@pytest.mark.asyncio
async def test_login_wrong_password(test_client, auth_headers, sample_registration):
    response = await test_client.post("/v1/auth/login", json={
        "phone": sample_registration["phone"],
        "password": "wrong-password",
    })

    assert response.status_code == 401
    data = response.json()
    assert data["code"] == "INVALID_CREDENTIALS"
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_demo_login_rejects_short_password(test_client):
    response = await test_client.post("/v1/auth/login", json={
        "phone": "0999999999",
        "password": "abc",
    })

    assert response.status_code == 400
    assert response.json()["status"] == 400


@pytest.mark.asyncio
async def test_logout(test_client, auth_headers):
    response = await test_client.post("/v1/auth/logout", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["success"] is True


@pytest.mark.asyncio
@pytest.mark.parametrize("headers", [
    {},
    {"Authorization": "Bearer not-a-token"},
    {"Authorization": "Basic abc"},
])
async def test_missing_or_invalid_auth(test_client, headers):
    response = await test_client.post("/v1/booking/list", json={}, headers=headers)

    assert response.status_code == 401
    data = response.json()
    assert data["status"] == 401
    assert "authorization" in data["title"].lower()


@pytest.mark.asyncio
async def test_invalid_request_returns_violations(test_client, auth_headers):
    response = await test_client.post(
        "/v1/booking/create",
        json={"event_id": "1", "ticket_count": 0},
        headers=auth_headers
    )

    assert response.status_code == 422
    data = response.json()
    assert data["status"] == 422
    assert any(v["path"].endswith("ticket_count") for v in data["violations"])


@pytest.mark.asyncio
async def test_event_endpoints_are_public(test_client):
    featured = await test_client.post("/v1/event/featured")
    assert featured.status_code == 200
    assert {e["id"] for e in featured.json()["items"]} == {"1", "2", "4", "6"}

    event = await test_client.post("/v1/event/get", json={"event_id": "4"})
    assert event.status_code == 200
    assert event.json()["available_tickets"] == 23

    search = await test_client.post("/v1/event/search", json={"query": "comedy"})
    assert [e["id"] for e in search.json()["items"]] == ["5"]

    category = await test_client.post("/v1/event/category", json={"category": "schools"})
    assert [e["id"] for e in category.json()["items"]] == ["2"]

    nearby = await test_client.post(
        "/v1/event/nearby",
        json={"latitude": 32.1244, "longitude": 20.0707, "radius_km": 5}
    )
    assert [e["id"] for e in nearby.json()["items"]] == ["2"]


@pytest.mark.asyncio
async def test_get_unknown_event(test_client):
    response = await test_client.post("/v1/event/get", json={"event_id": "999"})

    assert response.status_code == 404
    assert response.json()["resource_type"] == "event"


@pytest.mark.asyncio
async def test_booking_flow(test_client, auth_headers):
    created = await test_client.post(
        "/v1/booking/create",
        json={"event_id": "2", "ticket_count": 2},
        headers=auth_headers
    )
    assert created.status_code == 201
    booking = created.json()
    assert booking["status"] == "confirmed"
    assert booking["total_price"] == 10
    assert booking["qr_code"].startswith("MI3AD-")

    event = await test_client.post("/v1/event/get", json={"event_id": "2"})
    assert event.json()["current_attendees"] == 158

    listed = await test_client.post("/v1/booking/list", json={}, headers=auth_headers)
    assert [b["id"] for b in listed.json()["items"]] == [booking["id"]]

    ticket_pass = await test_client.post(
        "/v1/booking/pass",
        json={"booking_id": booking["id"]},
        headers=auth_headers
    )
    assert ticket_pass.status_code == 200
    assert ticket_pass.json()["pass_data"]["qr_code"] == booking["qr_code"]

    cancelled = await test_client.post(
        "/v1/booking/cancel",
        json={"booking_id": booking["id"]},
        headers=auth_headers
    )
    assert cancelled.json()["status"] == "cancelled"

    event = await test_client.post("/v1/event/get", json={"event_id": "2"})
    assert event.json()["current_attendees"] == 156


@pytest.mark.asyncio
async def test_booking_sold_out(test_client, auth_headers):
    response = await test_client.post(
        "/v1/booking/create",
        json={"event_id": "4", "ticket_count": 24},
        headers=auth_headers
    )

    assert response.status_code == 409
    data = response.json()
    assert data["code"] == "SOLD_OUT"
    assert data["available_tickets"] == 23


@pytest.mark.asyncio
async def test_scan_and_admit(test_client, auth_headers):
    booking = (await test_client.post(
        "/v1/booking/create",
        json={"event_id": "3", "ticket_count": 1},
        headers=auth_headers
    )).json()

    scan = await test_client.post("/v1/ticket/scan", json={"qr_code": booking["qr_code"]}, headers=auth_headers)
    assert scan.status_code == 200
    assert scan.json()["type"] == "success"

    admit = await test_client.post("/v1/ticket/admit", json={"qr_code": booking["qr_code"]}, headers=auth_headers)
    assert admit.status_code == 200
    assert admit.json()["status"] == "used"

    rescan = await test_client.post("/v1/ticket/scan", json={"qr_code": booking["qr_code"]}, headers=auth_headers)
    assert rescan.json()["type"] == "warning"

    readmit = await test_client.post("/v1/ticket/admit", json={"qr_code": booking["qr_code"]}, headers=auth_headers)
    assert readmit.status_code == 409
    assert readmit.json()["code"] == "INVALID_BOOKING_STATE"


@pytest.mark.asyncio
async def test_scan_garbage_code(test_client, auth_headers):
    response = await test_client.post("/v1/ticket/scan", json={"qr_code": "hello"}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["type"] == "error"
    assert response.json()["booking"] is None


@pytest.mark.asyncio
async def test_profile_and_preferences(test_client, auth_headers):
    updated = await test_client.post("/v1/profile/update", json={"bio": "hello"}, headers=auth_headers)
    assert updated.status_code == 200
    assert updated.json()["bio"] == "hello"

    account = await test_client.post("/v1/profile/account-type", headers=auth_headers)
    assert account.json() == {"account_type": "personal", "is_business": False}

    preferences = await test_client.post(
        "/v1/profile/preferences/update",
        json={"language": "en", "is_dark_mode": True},
        headers=auth_headers
    )
    assert preferences.json() == {"is_dark_mode": True, "language": "en", "text_direction": "ltr"}

    current = await test_client.post("/v1/profile/preferences/get", headers=auth_headers)
    assert current.json()["language"] == "en"


@pytest.mark.asyncio
async def test_schools(test_client):
    schools = await test_client.post("/v1/school/list")
    assert len(schools.json()["items"]) == 4

    school = await test_client.post("/v1/school/get", json={"school_id": "2"})
    assert school.json()["is_online"] is False

    search = await test_client.post("/v1/school/search", json={"query": "academy"})
    assert [s["id"] for s in search.json()["items"]] == ["3"]


@pytest.mark.asyncio
async def test_chat_flow(test_client, auth_headers):
    chat = (await test_client.post("/v1/chat/create", json={"school_id": "1"}, headers=auth_headers)).json()
    assert chat["school_id"] == "1"

    sent = await test_client.post(
        "/v1/chat/send",
        json={"chat_id": chat["id"], "content": "مرحبا"},
        headers=auth_headers
    )
    assert sent.status_code == 200
    assert sent.json()["sender_type"] == "user"

    messages = await test_client.post("/v1/chat/messages", json={"chat_id": chat["id"]}, headers=auth_headers)
    assert [m["content"] for m in messages.json()["items"]] == ["مرحبا"]

    chats = await test_client.post("/v1/chat/list", headers=auth_headers)
    assert chats.json()["items"][0]["last_message"]["content"] == "مرحبا"

    unread = await test_client.post("/v1/chat/unread", headers=auth_headers)
    assert unread.json() == {"count": 0}

    deleted = await test_client.post("/v1/chat/delete", json={"chat_id": chat["id"]}, headers=auth_headers)
    assert deleted.json()["success"] is True

    missing = await test_client.post("/v1/chat/messages", json={"chat_id": chat["id"]}, headers=auth_headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_notifications(test_client, auth_headers):
    listed = await test_client.post("/v1/notification/list", json={}, headers=auth_headers)
    items = listed.json()["items"]
    assert len(items) == 5

    unread = await test_client.post("/v1/notification/unread", headers=auth_headers)
    assert unread.json() == {"count": 3}

    read = await test_client.post(
        "/v1/notification/read",
        json={"notification_id": items[0]["id"]},
        headers=auth_headers
    )
    assert read.json()["is_read"] is True

    added = await test_client.post(
        "/v1/notification/add",
        json={"type": "system", "title": "صيانة", "message": "صيانة مجدولة الليلة"},
        headers=auth_headers
    )
    assert added.status_code == 201

    by_type = await test_client.post("/v1/notification/by-type", json={"type": "system"}, headers=auth_headers)
    assert len(by_type.json()["items"]) == 2

    read_all = await test_client.post("/v1/notification/read-all", headers=auth_headers)
    assert read_all.json()["affected"] == 3

    missing = await test_client.post(
        "/v1/notification/delete",
        json={"notification_id": "missing"},
        headers=auth_headers
    )
    assert missing.status_code == 404

    cleared = await test_client.post("/v1/notification/clear", headers=auth_headers)
    assert cleared.json()["affected"] == 6


@pytest.mark.asyncio
async def test_favorites(test_client, auth_headers):
    saved = await test_client.post("/v1/favorites/events/save", json={"event_id": "6"}, headers=auth_headers)
    assert saved.json()["event_id"] == "6"

    status = await test_client.post("/v1/favorites/events/status", json={"event_id": "6"}, headers=auth_headers)
    assert status.json() == {"is_saved": True}

    post = await test_client.post(
        "/v1/favorites/posts/save",
        json={"id": "post-1", "title": "Opening night"},
        headers=auth_headers
    )
    assert post.json()["id"] == "post-1"

    counts = await test_client.post("/v1/favorites/counts", headers=auth_headers)
    assert counts.json() == {"saved_posts": 1, "saved_events": 1}

    await test_client.post("/v1/favorites/posts/unsave", json={"post_id": "post-1"}, headers=auth_headers)
    posts = await test_client.post("/v1/favorites/posts/list", headers=auth_headers)
    assert posts.json()["items"] == []


@pytest.mark.asyncio
async def test_security_lock_blocks_export(test_client, auth_headers):
    for _ in range(3):
        result = await test_client.post(
            "/v1/security/auth/password",
            json={"password": "wrong-password"},
            headers=auth_headers
        )
    assert result.json()["is_locked"] is True

    export = await test_client.post("/v1/security/export", json={}, headers=auth_headers)
    assert export.status_code == 423
    assert export.json()["code"] == "SESSION_LOCKED"

    unlocked = await test_client.post("/v1/security/unlock", json={}, headers=auth_headers)
    assert unlocked.json()["success"] is True

    export = await test_client.post("/v1/security/export", json={}, headers=auth_headers)
    assert export.status_code == 200


@pytest.mark.asyncio
async def test_security_export_import(test_client, auth_headers):
    exported = await test_client.post("/v1/security/export", json={"password": "pw-123"}, headers=auth_headers)
    assert exported.json()["encrypted"] is True

    wrong = await test_client.post(
        "/v1/security/import",
        json={"data": exported.json()["data"], "password": "nope"},
        headers=auth_headers
    )
    assert wrong.status_code == 400
    assert wrong.json()["code"] == "IMPORT_FAILED"

    imported = await test_client.post(
        "/v1/security/import",
        json={"data": exported.json()["data"], "password": "pw-123"},
        headers=auth_headers
    )
    assert imported.status_code == 200

    logs = await test_client.post("/v1/security/audit/list", headers=auth_headers)
    actions = [entry["action"] for entry in logs.json()["items"]]
    assert "data_import_success" in actions
    assert "data_import_error" in actions


@pytest.mark.asyncio
async def test_security_settings_and_scan(test_client, auth_headers):
    updated = await test_client.post(
        "/v1/security/settings/update",
        json={"session_timeout": 10, "biometric": {"max_failed_attempts": 5}},
        headers=auth_headers
    )
    assert updated.json()["session_timeout"] == 10
    assert updated.json()["biometric"]["max_failed_attempts"] == 5

    scan = await test_client.post("/v1/security/scan", headers=auth_headers)
    assert scan.json()["overall_score"] == 65

    added = await test_client.post(
        "/v1/security/audit/add",
        json={"action": "screenshot_blocked"},
        headers={**auth_headers, "X-Forwarded-For": "203.0.113.9"}
    )
    assert added.json()["success"] is True

    logs = await test_client.post("/v1/security/audit/list", headers=auth_headers)
    assert logs.json()["items"][0]["ip_address"] == "203.0.113.9"


@pytest.mark.asyncio
async def test_clear_all_data(test_client, auth_headers):
    await test_client.post("/v1/booking/create", json={"event_id": "1", "ticket_count": 1}, headers=auth_headers)

    cleared = await test_client.post("/v1/security/clear", headers=auth_headers)
    assert cleared.json()["success"] is True

    bookings = await test_client.post("/v1/booking/list", json={}, headers=auth_headers)
    assert bookings.json()["items"] == []
    event = await test_client.post("/v1/event/get", json={"event_id": "1"})
    assert event.json()["current_attendees"] == 245


@pytest.mark.asyncio
async def test_metrics_endpoint(test_client):
    """Test the Prometheus metrics endpoint."""
    response = await test_client.get("/metrics")

    assert response.status_code == 200
    assert "text/plain" in response.headers["content-type"]
