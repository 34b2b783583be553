"""Integration tests for the demo registration endpoints (/users, /register)."""

import pytest
from httpx import AsyncClient


async def _register(client: AsyncClient, username: str, email: str):
    return await client.post("/register", json={"username": username, "email": email})


async def _user_id(client: AsyncClient, email: str) -> int:
    users = (await client.get("/users")).json()
    return next(u["id"] for u in users if u["email"] == email)


@pytest.mark.asyncio
async def test_register_then_duplicate_email(client: AsyncClient):
    first = await _register(client, "ada", "a@x.com")
    assert first.status_code == 201
    assert first.json() == "User registered successfully"

    second = await _register(client, "someone", "a@x.com")
    assert second.status_code == 400
    assert second.json() == {"error": "Email already exists"}


@pytest.mark.asyncio
async def test_register_with_email_only(client: AsyncClient):
    response = await client.post("/register", json={"email": "a@x.com"})

    assert response.status_code == 201
    assert response.json() == "User registered successfully"
    users = (await client.get("/users")).json()
    assert users == [{"id": users[0]["id"], "username": None, "email": "a@x.com"}]


@pytest.mark.asyncio
async def test_register_validates_body(client: AsyncClient):
    response = await _register(client, "ada", "not-an-email")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_users_sorted(client: AsyncClient):
    await _register(client, "zoe", "a@x.com")
    await _register(client, "ada", "b@x.com")

    unsorted = await client.get("/users")
    by_username = await client.get("/users", params={"sortBy": "username"})
    by_email = await client.get("/users", params={"sortBy": "email"})

    assert [u["username"] for u in unsorted.json()] == ["zoe", "ada"]
    assert [u["username"] for u in by_username.json()] == ["ada", "zoe"]
    assert [u["username"] for u in by_email.json()] == ["zoe", "ada"]


@pytest.mark.asyncio
async def test_list_users_invalid_sort(client: AsyncClient):
    response = await client.get("/users", params={"sortBy": "password"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid sort parameter"}


@pytest.mark.asyncio
async def test_edit_user(client: AsyncClient):
    await _register(client, "ada", "a@x.com")
    user_id = await _user_id(client, "a@x.com")

    response = await client.put(f"/users/{user_id}/edit", json={"username": "ada l"})

    assert response.status_code == 200
    assert response.json() == "User updated successfully"
    assert [u["username"] for u in (await client.get("/users")).json()] == ["ada l"]


@pytest.mark.asyncio
async def test_edit_missing_user(client: AsyncClient):
    response = await client.put("/users/999/edit", json={"username": "ghost"})

    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


@pytest.mark.asyncio
async def test_edit_user_to_taken_email(client: AsyncClient):
    await _register(client, "ada", "a@x.com")
    await _register(client, "bob", "b@x.com")
    bob_id = await _user_id(client, "b@x.com")

    response = await client.put(f"/users/{bob_id}/edit", json={"email": "a@x.com"})

    assert response.status_code == 400
    assert response.json() == {"error": "Email already exists"}


@pytest.mark.asyncio
async def test_delete_user(client: AsyncClient):
    await _register(client, "ada", "a@x.com")
    user_id = await _user_id(client, "a@x.com")

    deleted = await client.delete(f"/users/{user_id}")
    missing = await client.delete(f"/users/{user_id}")

    assert deleted.status_code == 200
    assert deleted.json() == "User deleted successfully."
    assert missing.status_code == 404
    assert missing.json() == {"error": "User not found"}
