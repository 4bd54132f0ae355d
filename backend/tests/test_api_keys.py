"""
Tests for company API keys (admin only).
"""
import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.models.company_api_key import CompanyApiKey
from careers.models.user import User, UserRole
from careers.services.api_keys import hash_secret, mask_secret_key


@pytest.mark.asyncio
async def test_generate_key_returns_secret_once(client: AsyncClient, db: AsyncSession, admin_user: User):
    """The plain secret is in the creation response only; the database keeps a hash."""
    response = await client.post("/company-api-keys", json={"name": "Careers site", "description": "Website"})

    assert response.status_code == 201
    created = response.json()
    assert created["key"].startswith("ck_")
    assert created["secret_key"].startswith("sk_")
    assert created["is_active"] is True

    stored = (await db.execute(select(CompanyApiKey).where(CompanyApiKey.key == created["key"]))).scalar_one()
    assert stored.secret_hash == hash_secret(created["secret_key"])
    assert stored.created_by == admin_user.id

    listed = (await client.get("/company-api-keys")).json()
    assert listed[0]["secret_key"] == mask_secret_key(created["secret_key"])
    assert created["secret_key"] not in str(listed)


@pytest.mark.asyncio
async def test_key_name_validation(client: AsyncClient):
    response = await client.post("/company-api-keys", json={"name": "ab"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_toggle_and_delete(client: AsyncClient):
    key_id = (await client.post("/company-api-keys", json={"name": "Careers site"})).json()["id"]

    toggled = await client.patch(f"/company-api-keys/{key_id}/toggle")
    assert toggled.json()["is_active"] is False
    toggled = await client.patch(f"/company-api-keys/{key_id}/toggle")
    assert toggled.json()["is_active"] is True

    assert (await client.delete(f"/company-api-keys/{key_id}")).status_code == 204
    assert (await client.get(f"/company-api-keys/{key_id}")).status_code == 404


@pytest.mark.asyncio
async def test_api_keys_admin_only(client_for, make_user):
    director = await make_user(UserRole.DIRECTOR)
    response = await client_for(director).get("/company-api-keys")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_api_keys_tenant_scoped(client: AsyncClient, client_for, other_company_admin: User):
    key_id = (await client.post("/company-api-keys", json={"name": "Careers site"})).json()["id"]

    other = client_for(other_company_admin)
    assert (await other.get(f"/company-api-keys/{key_id}")).status_code == 404
    assert (await other.delete(f"/company-api-keys/{key_id}")).status_code == 404


def test_mask_secret_key():
    assert mask_secret_key("sk_0123456789abcdef") == "sk_01234••••••••cdef"
    assert mask_secret_key("short") == "•••••"
