import asyncio
from datetime import datetime, timedelta, timezone

import jwt

from dmchat.config.settings import TestingConfig
from dmchat.domain.exceptions import StorageError
from dmchat.domain.value_objects.user_id import UserId


def _seed(store, sender, receiver, texts, start=None):
    """Append messages straight into the in-memory store, one second apart."""
    start = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
    for n, text in enumerate(texts):
        asyncio.run(
            store.append(UserId(sender), UserId(receiver), text, start + timedelta(seconds=n))
        )


# ==================== HEALTH / METRICS ====================


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").status_code == 200


def test_metrics_exposes_prometheus_text(client):
    res = client.get("/metrics")
    assert res.status_code == 200
    assert "dm_messages_persisted_total" in res.text


def test_correlation_id_is_echoed(client):
    res = client.get("/health", headers={"X-Correlation-ID": "abc-123"})
    assert res.headers["X-Correlation-ID"] == "abc-123"


# ==================== AUTH ====================


def test_register_returns_token_and_user(client):
    res = client.post("/api/register", json={"username": "  alice ", "password": "secret123"})

    assert res.status_code == 200
    body = res.json()
    assert body["token"]
    assert body["user"] == {"id": 1, "username": "alice"}


def test_tokens_are_signed_with_the_selected_config(client, register):
    user, _, token = register("alice")

    claims = jwt.decode(
        token,
        TestingConfig.JWT_SECRET,
        algorithms=["HS256"],
        audience=TestingConfig.JWT_AUDIENCE,
        issuer=TestingConfig.JWT_ISSUER,
    )

    assert claims["sub"] == str(user["id"])


def test_register_truncates_long_username(client):
    res = client.post("/api/register", json={"username": "b" * 30, "password": "secret123"})
    assert res.json()["user"]["username"] == "b" * 20


def test_register_rejects_short_password_and_blank_username(client):
    assert client.post("/api/register", json={"username": "alice", "password": "12345"}).status_code == 400
    assert client.post("/api/register", json={"username": "   ", "password": "secret123"}).status_code == 400
    assert client.post("/api/register", json={}).status_code == 400


def test_register_rejects_duplicate_username(client, register):
    register("alice")

    res = client.post("/api/register", json={"username": "alice", "password": "other-pass"})

    assert res.status_code == 400
    assert res.json() == {"error": "Username already taken"}


def test_login(client, register):
    register("alice")

    ok = client.post("/api/login", json={"username": "alice", "password": "secret123"})
    wrong = client.post("/api/login", json={"username": "alice", "password": "nope-nope"})
    unknown = client.post("/api/login", json={"username": "mallory", "password": "secret123"})

    assert ok.status_code == 200
    assert ok.json()["user"]["username"] == "alice"
    assert (wrong.status_code, wrong.json()) == (400, {"error": "Wrong password"})
    assert (unknown.status_code, unknown.json()) == (400, {"error": "User not found"})


def test_me(client, register):
    user, headers, _ = register("alice")

    res = client.get("/api/me", headers=headers)

    assert res.status_code == 200
    assert res.json() == {"user": user}


def test_protected_routes_require_a_valid_token(client):
    for method, path in [
        ("get", "/api/me"),
        ("get", "/api/users"),
        ("get", "/api/messages/2"),
        ("delete", "/api/messages/2"),
        ("delete", "/api/contacts/2"),
    ]:
        missing = getattr(client, method)(path)
        forged = getattr(client, method)(path, headers={"Authorization": "Bearer forged"})
        assert missing.status_code == 401, path
        assert missing.json() == {"error": "Missing token"}
        assert forged.status_code == 401, path


# ==================== USERS ====================


def test_users_lists_everyone_else_by_username(client, register):
    _, headers, _ = register("mike")
    register("zoe")
    register("anna")

    res = client.get("/api/users", headers=headers)

    assert res.status_code == 200
    assert [u["username"] for u in res.json()["users"]] == ["anna", "zoe"]


# ==================== MESSAGES ====================


def test_history_returns_both_directions_oldest_first(client, register, store):
    alice, headers, _ = register("alice")
    bob, _, _ = register("bob")
    carol, _, _ = register("carol")
    _seed(store, alice["id"], bob["id"], ["a1"])
    _seed(store, bob["id"], alice["id"], ["b1"], start=datetime(2024, 1, 2, tzinfo=timezone.utc))
    _seed(store, alice["id"], carol["id"], ["not for bob"])

    res = client.get(f"/api/messages/{bob['id']}", headers=headers)

    assert res.status_code == 200
    messages = res.json()["messages"]
    assert [m["text"] for m in messages] == ["a1", "b1"]
    assert messages[0]["sender_id"] == alice["id"]
    assert messages[1]["receiver_id"] == alice["id"]
    assert set(messages[0]) == {"id", "sender_id", "receiver_id", "text", "created_at"}


def test_history_respects_limit(client, register, store):
    alice, headers, _ = register("alice")
    bob, _, _ = register("bob")
    _seed(store, alice["id"], bob["id"], [f"m{n}" for n in range(5)])

    res = client.get(f"/api/messages/{bob['id']}?limit=2", headers=headers)

    assert [m["text"] for m in res.json()["messages"]] == ["m0", "m1"]


def test_history_validates_parameters(client, register):
    _, headers, _ = register("alice")

    bad_id = client.get("/api/messages/abc", headers=headers)
    too_many = client.get("/api/messages/2?limit=1000", headers=headers)

    assert (bad_id.status_code, bad_id.json()) == (400, {"error": "otherId invalid"})
    assert too_many.status_code == 400
    assert too_many.json()["error"] == "Validation error"


def test_delete_conversation_is_scoped_and_idempotent(client, register, store):
    alice, headers, _ = register("alice")
    bob, bob_headers, _ = register("bob")
    carol, _, _ = register("carol")
    _seed(store, alice["id"], bob["id"], ["one", "two"])
    _seed(store, bob["id"], alice["id"], ["three"])
    _seed(store, alice["id"], carol["id"], ["keep me"])

    first = client.delete(f"/api/messages/{bob['id']}", headers=headers)
    second = client.delete(f"/api/messages/{bob['id']}", headers=headers)

    assert first.json() == {"success": True, "deleted": 3}
    assert second.json() == {"success": True, "deleted": 0}
    assert client.get(f"/api/messages/{alice['id']}", headers=bob_headers).json() == {"messages": []}
    assert [m.text for m in store.messages] == ["keep me"]


def test_delete_contact_is_a_noop(client, register, store):
    alice, headers, _ = register("alice")
    bob, _, _ = register("bob")
    _seed(store, alice["id"], bob["id"], ["still here"])

    res = client.delete(f"/api/contacts/{bob['id']}", headers=headers)
    bad = client.delete("/api/contacts/nope", headers=headers)

    assert res.json() == {"success": True}
    assert bad.status_code == 400
    assert len(store.messages) == 1


def test_storage_failure_maps_to_503(client, register, store):
    _, headers, _ = register("alice")
    store.fail_with = StorageError("database is locked")

    res = client.get("/api/messages/2", headers=headers)

    assert res.status_code == 503
    assert res.json() == {"error": "Storage unavailable"}
