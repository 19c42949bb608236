import uuid

import pytest

pytestmark = pytest.mark.anyio


async def befriend(client, a, b) -> dict:
    r = await client.post(
        "/friendships",
        json={"user_one_id": str(a.id), "user_two_id": str(b.id)},
    )
    assert r.status_code == 201, r.text
    return r.json()


async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


async def test_create_friendship_embeds_both_users(client, user_factory):
    a = await user_factory(display_name="A")
    b = await user_factory(display_name="B")

    data = await befriend(client, a, b)

    assert data["user_one_id"] == str(a.id)
    assert data["user_two_id"] == str(b.id)
    assert data["date_created"]
    assert data["user_one"]["username"] == a.username
    assert data["user_two"]["display_name"] == "B"

    r = await client.get(f"/friendships/{data['id']}")
    assert r.status_code == 200, r.text
    fetched = r.json()
    assert fetched["id"] == data["id"]
    assert fetched["user_one"] is None


async def test_create_friendship_rejects_malformed_ids(client):
    r = await client.post("/friendships", json={"user_one_id": "x", "user_two_id": "y"})
    assert r.status_code == 422


async def test_create_friendship_with_unknown_user_is_404(client, user_factory):
    a = await user_factory()

    r = await client.post(
        "/friendships",
        json={"user_one_id": str(a.id), "user_two_id": str(uuid.uuid4())},
    )
    assert r.status_code == 404, r.text
    assert r.json()["detail"] == "User not found"

    # The session was rolled back, so later requests still work.
    r = await client.get("/friendships")
    assert r.status_code == 200
    assert r.json() == []


async def test_get_unknown_friendship_is_404(client):
    r = await client.get(f"/friendships/{uuid.uuid4()}")
    assert r.status_code == 404
    assert r.json()["detail"] == "Friendship not found"


async def test_list_friendships(client, user_factory):
    a = await user_factory()
    b = await user_factory()
    c = await user_factory()

    first = await befriend(client, a, b)
    second = await befriend(client, b, c)

    r = await client.get("/friendships")
    assert r.status_code == 200
    ids = {f["id"] for f in r.json()}
    assert ids == {first["id"], second["id"]}


async def test_user_friendships_flow(client, user_factory):
    a = await user_factory()
    b = await user_factory()
    c = await user_factory()

    ab = await befriend(client, a, b)
    await befriend(client, b, c)

    r = await client.get(f"/users/{a.username}/friendships")
    assert r.status_code == 200
    assert [f["id"] for f in r.json()] == [ab["id"]]

    r = await client.get(f"/users/{b.username}/friendships")
    assert len(r.json()) == 2

    r = await client.delete(f"/users/{a.username}/friendships")
    assert r.status_code == 200, r.text
    assert r.json() == {"ok": True, "removed": 1}

    r = await client.get(f"/users/{b.username}/friendships")
    assert len(r.json()) == 1


async def test_unknown_user_is_404(client):
    r = await client.get("/users/no_such_user/friendships")
    assert r.status_code == 404
    assert r.json()["detail"] == "User not found"

    r = await client.delete("/users/no_such_user/friendships")
    assert r.status_code == 404


async def test_delete_friendship(client, user_factory):
    a = await user_factory()
    b = await user_factory()
    data = await befriend(client, a, b)

    r = await client.delete(f"/friendships/{data['id']}")
    assert r.status_code == 200
    assert r.json() == {"ok": True, "removed": 1}

    r = await client.get(f"/friendships/{data['id']}")
    assert r.status_code == 404

    r = await client.delete(f"/friendships/{data['id']}")
    assert r.status_code == 404
