"""
Tests for the public careers-site API.

Read endpoints are open; only published jobs of active boards are exposed.
Submitting an application needs a valid, active company API key pair.
"""
import pytest
from httpx import AsyncClient

from careers.models.user import User


async def _published_job(client: AsyncClient, board_id: str, title: str = "Engineer") -> dict:
    job = (await client.post("/jobs", json={"title": title, "job_board_id": board_id})).json()
    for action in ("submit-for-approval", "approve", "publish"):
        await client.put(f"/jobs/{job['id']}/{action}")
    return job


async def _api_key(client: AsyncClient) -> dict:
    created = (await client.post("/company-api-keys", json={"name": "Careers site"})).json()
    return {"X-API-Key": created["key"], "X-API-Secret": created["secret_key"], "id": created["id"]}


def _headers(key: dict) -> dict:
    return {"X-API-Key": key["X-API-Key"], "X-API-Secret": key["X-API-Secret"]}


# ============================================================
# READ ENDPOINTS
# ============================================================

@pytest.mark.asyncio
async def test_public_company_hides_settings(async_client: AsyncClient, client: AsyncClient, admin_user: User):
    await client.post("/company", json={"name": "Acme", "slogan": "We make everything"})

    response = await async_client.get(f"/public-api/company/{admin_user.company_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["slogan"] == "We make everything"
    assert "settings" not in data
    assert "allowed_domains" not in data


@pytest.mark.asyncio
async def test_board_lookup_by_slug_and_domain(async_client: AsyncClient, client: AsyncClient):
    board = (await client.post("/job-boards", json={"title": "Acme Careers", "custom_domain": "jobs.acme.com"})).json()

    by_slug = await async_client.get("/public-api/job-boards/slug/acme-careers")
    by_domain = await async_client.get("/public-api/job-boards/domain/JOBS.acme.com")

    assert by_slug.json()["id"] == board["id"]
    assert by_domain.json()["id"] == board["id"]

    await client.patch(f"/job-boards/{board['id']}", json={"is_active": False})
    assert (await async_client.get("/public-api/job-boards/slug/acme-careers")).status_code == 404


@pytest.mark.asyncio
async def test_only_published_jobs_are_listed(async_client: AsyncClient, client: AsyncClient):
    board = (await client.post("/job-boards", json={"title": "Main"})).json()
    live = await _published_job(client, board["id"])
    draft = (await client.post("/jobs", json={"title": "Secret", "job_board_id": board["id"]})).json()

    listed = await async_client.get(f"/public-api/jobs/job-board/{board['id']}")

    assert [j["id"] for j in listed.json()] == [live["id"]]
    assert (await async_client.get(f"/public-api/jobs/{live['id']}")).status_code == 200
    assert (await async_client.get(f"/public-api/jobs/{draft['id']}")).status_code == 404


# ============================================================
# APPLICATIONS
# ============================================================

@pytest.mark.asyncio
async def test_submit_application_with_api_key(async_client: AsyncClient, client: AsyncClient):
    board = (await client.post("/job-boards", json={"title": "Main"})).json()
    job = await _published_job(client, board["id"])
    key = await _api_key(client)

    response = await async_client.post(
        "/public-api/job-applications",
        headers=_headers(key),
        json={"job_id": job["id"], "first_name": "Linus", "last_name": "T", "email": "linus@example.com"}
    )

    assert response.status_code == 201
    assert response.json()["status"] == "applied"

    applications = (await client.get("/job-applications", params={"job_id": job["id"]})).json()
    assert [a["email"] for a in applications] == ["linus@example.com"]
    assert applications[0]["source"] == "careers-site"

    used = (await client.get(f"/company-api-keys/{key['id']}")).json()
    assert used["last_used_at"] is not None


@pytest.mark.asyncio
async def test_submit_application_bad_credentials(async_client: AsyncClient, client: AsyncClient):
    board = (await client.post("/job-boards", json={"title": "Main"})).json()
    job = await _published_job(client, board["id"])
    key = await _api_key(client)
    body = {"job_id": job["id"], "first_name": "A", "last_name": "B", "email": "a@example.com"}

    wrong_secret = {**_headers(key), "X-API-Secret": "sk_wrong"}
    assert (await async_client.post("/public-api/job-applications", headers=wrong_secret, json=body)).status_code == 401

    await client.patch(f"/company-api-keys/{key['id']}/toggle")
    inactive = await async_client.post("/public-api/job-applications", headers=_headers(key), json=body)
    assert inactive.status_code == 401

    missing = await async_client.post("/public-api/job-applications", json=body)
    assert missing.status_code == 422


@pytest.mark.asyncio
async def test_cannot_apply_to_unpublished_or_foreign_job(
    async_client: AsyncClient, client: AsyncClient, client_for, other_company_admin: User
):
    key = await _api_key(client)
    draft = (await client.post("/jobs", json={"title": "Draft"})).json()

    other = client_for(other_company_admin)
    foreign_board = (await other.post("/job-boards", json={"title": "Globex"})).json()
    foreign_job = await _published_job(other, foreign_board["id"])

    for job_id in (draft["id"], foreign_job["id"]):
        response = await async_client.post(
            "/public-api/job-applications",
            headers=_headers(key),
            json={"job_id": job_id, "first_name": "A", "last_name": "B", "email": "a@example.com"}
        )
        assert response.status_code == 404
