# tests/test_categories.py
import pytest
from httpx import AsyncClient

from app.core.security import create_access_token
from app.models.user import User

BASE = "/api/v1/categories"


async def _create(client: AsyncClient, headers: dict, owner: User, name: str = "Groceries", **extra) -> dict:
    resp = await client.post(
        BASE,
        json={"name": name, "type": 0, "description": "For food", "created_by": owner.id},
        headers=headers,
        **extra,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.asyncio
async def test_requires_bearer_token(client: AsyncClient):
    resp = await client.get(BASE)
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_rejects_invalid_token(client: AsyncClient):
    resp = await client.get(BASE, headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Could not validate credentials"


@pytest.mark.asyncio
async def test_rejects_token_signed_with_other_secret(client: AsyncClient):
    from jose import jwt

    forged = jwt.encode({"sub": "1", "type": "access"}, "another-secret-key-value", algorithm="HS256")
    resp = await client.get(BASE, headers={"Authorization": f"Bearer {forged}"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_create_category(client: AsyncClient, auth_headers: dict, owner: User):
    data = await _create(client, auth_headers, owner)

    assert data["message"] == "Category created successfully"
    assert data["category"]["name"] == "Groceries"
    assert data["category"]["type"] == 0
    assert data["category"]["created_by"] == owner.id
    assert isinstance(data["category"]["id"], int)


@pytest.mark.asyncio
async def test_create_category_localized(client: AsyncClient, auth_headers: dict, owner: User):
    data = await _create(client, auth_headers, owner, params={"lang": "es"})
    assert data["message"] == "Categoría creada correctamente"


@pytest.mark.asyncio
async def test_create_category_invalid_body(client: AsyncClient, auth_headers: dict):
    resp = await client.post(BASE, json={"name": 123, "type": "x", "created_by": "y"}, headers=auth_headers)
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_list_categories_paginates(client: AsyncClient, auth_headers: dict, owner: User):
    for i in range(12):
        await _create(client, auth_headers, owner, name=f"Cat {i}")

    resp = await client.get(BASE, headers=auth_headers)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["currentPage"] == 1
    assert data["limit"] == 5
    assert data["totalPages"] == 3
    assert len(data["categories"]) == 5
    assert data["t"]["title"] == "Categories"

    last = (await client.get(BASE, params={"page": 3, "limit": 5}, headers=auth_headers)).json()
    assert len(last["categories"]) == 2


@pytest.mark.asyncio
async def test_list_categories_coerces_bad_pagination(client: AsyncClient, auth_headers: dict, owner: User):
    await _create(client, auth_headers, owner)

    resp = await client.get(BASE, params={"page": "abc", "limit": "0"}, headers=auth_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["currentPage"] == 1
    assert data["limit"] == 1
    assert data["totalPages"] == 1


@pytest.mark.asyncio
async def test_get_category(client: AsyncClient, auth_headers: dict, owner: User):
    created = (await _create(client, auth_headers, owner))["category"]

    resp = await client.get(f"{BASE}/{created['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Groceries"


@pytest.mark.asyncio
@pytest.mark.parametrize("category_id", ["999", "abc"])
async def test_get_category_not_found(client: AsyncClient, auth_headers: dict, category_id: str):
    resp = await client.get(f"{BASE}/{category_id}", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Category not found"


@pytest.mark.asyncio
async def test_update_category(client: AsyncClient, auth_headers: dict, owner: User):
    created = (await _create(client, auth_headers, owner))["category"]

    resp = await client.patch(
        f"{BASE}/{created['id']}",
        json={"name": "Updated Groceries", "description": "Updated description"},
        headers=auth_headers,
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["message"] == "Category updated successfully"
    assert data["category"]["id"] == created["id"]
    assert data["category"]["name"] == "Updated Groceries"


@pytest.mark.asyncio
async def test_update_category_null_name_is_bad_request(client: AsyncClient, auth_headers: dict, owner: User):
    created = (await _create(client, auth_headers, owner))["category"]

    resp = await client.patch(f"{BASE}/{created['id']}", json={"name": None}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Failed to update category"


@pytest.mark.asyncio
async def test_update_missing_category(client: AsyncClient, auth_headers: dict):
    resp = await client.patch(f"{BASE}/999", json={"name": "X"}, headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Category to update not found"


@pytest.mark.asyncio
async def test_delete_category(client: AsyncClient, auth_headers: dict, owner: User):
    created = (await _create(client, auth_headers, owner))["category"]

    resp = await client.delete(f"{BASE}/{created['id']}", headers={**auth_headers, "x-lang": "es"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "Categoría eliminada correctamente"}

    gone = await client.get(f"{BASE}/{created['id']}", headers=auth_headers)
    assert gone.status_code == 404


@pytest.mark.asyncio
async def test_delete_missing_category(client: AsyncClient, auth_headers: dict):
    resp = await client.delete(f"{BASE}/999", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Category to delete not found"


@pytest.mark.asyncio
async def test_responses_carry_request_id(client: AsyncClient):
    token = create_access_token(1)
    resp = await client.get(BASE, headers={"Authorization": f"Bearer {token}", "x-request-id": "abc123"})
    assert resp.headers["x-request-id"] == "abc123"


@pytest.mark.asyncio
async def test_metrics_endpoint(client: AsyncClient):
    resp = await client.get("/metrics")
    assert resp.status_code == 200
    assert "categories_http_requests_total" in resp.text


@pytest.mark.asyncio
@pytest.mark.parametrize("category_id", ["1000000000000000000000000000000", "9" * 5000])
async def test_out_of_range_id_is_not_found(client: AsyncClient, auth_headers: dict, category_id: str):
    resp = await client.get(f"{BASE}/{category_id}", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Category not found"

    resp = await client.delete(f"{BASE}/{category_id}", headers=auth_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_list_far_page_is_empty(client: AsyncClient, auth_headers: dict, owner: User):
    await _create(client, auth_headers, owner)

    resp = await client.get(BASE, params={"page": "1000000000000000000000000000000"}, headers=auth_headers)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["categories"] == []
    assert data["currentPage"] == 10**30
    assert data["totalPages"] == 1
