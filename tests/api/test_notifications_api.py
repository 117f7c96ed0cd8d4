"""Notification endpoint tests over in-memory stores."""

BASE = "/api/v1/notifications"


async def test_create_list_read_delete(client, backend) -> None:
    created = await client.post(
        BASE,
        json={"assigned_to": "bob", "message": "Heads up", "type": "task_updated"},
        headers=backend.headers("alice"),
    )
    assert created.status_code == 201
    notification = created.json()["payload"]
    assert notification["assigned_to"] == ["bob"]
    assert notification["created_by"] == "alice"

    listed = await client.get(f"{BASE}/user/bob", headers=backend.headers("bob"))
    assert [n["id"] for n in listed.json()["payload"]] == [notification["id"]]

    read = await client.get(f"{BASE}/{notification['id']}", headers=backend.headers("bob"))
    assert read.json()["payload"]["is_read"] is True

    deleted = await client.delete(f"{BASE}/{notification['id']}", headers=backend.headers("bob"))
    assert deleted.status_code == 200
    missing = await client.get(f"{BASE}/{notification['id']}", headers=backend.headers("bob"))
    assert missing.status_code == 404


async def test_other_users_inbox_is_forbidden(client, backend) -> None:
    response = await client.get(f"{BASE}/user/bob", headers=backend.headers("carol"))
    assert response.status_code == 403


async def test_delete_all_for_user(client, backend) -> None:
    for text in ("a", "b"):
        await client.post(
            BASE,
            json={"assigned_to": "bob", "message": text, "type": "task_updated"},
            headers=backend.headers("alice"),
        )
    response = await client.delete(f"{BASE}/user/bob", headers=backend.headers("admin1"))
    assert response.json() == {"status": "success", "payload": {"deleted": 2}}


async def test_unknown_related_task_is_404(client, backend) -> None:
    response = await client.post(
        BASE,
        json={
            "assigned_to": "bob",
            "message": "x",
            "type": "task_updated",
            "related_task": "nope",
        },
        headers=backend.headers("alice"),
    )
    assert response.status_code == 404
