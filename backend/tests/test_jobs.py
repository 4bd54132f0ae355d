"""
Tests for job opening endpoints.

Covers:
- CRUD with department/office links and content sanitizing
- Filtering by status, department, office and job board
- The approval workflow over HTTP (submit, approve, reject, publish, archive)
- Role checks on workflow actions and tenant isolation
"""
import pytest
from httpx import AsyncClient

from careers.models.user import User, UserRole


async def _create_job(client: AsyncClient, **fields) -> dict:
    payload = {"title": "Backend Engineer", **fields}
    response = await client.post("/jobs", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def _publish(client: AsyncClient, job_id: str) -> dict:
    for action in ("submit-for-approval", "approve", "publish"):
        response = await client.put(f"/jobs/{job_id}/{action}")
        assert response.status_code == 200, response.text
    return response.json()


# ============================================================
# CRUD
# ============================================================

@pytest.mark.asyncio
async def test_create_job_starts_as_draft(client: AsyncClient, admin_user: User):
    job = await _create_job(client, location="Remote", content="<p>Hi</p><script>x()</script>")

    assert job["status"] == "draft"
    assert job["content"] == "<p>Hi</p>"
    assert job["created_by"] == str(admin_user.id)


@pytest.mark.asyncio
async def test_create_job_with_departments_and_offices(client: AsyncClient):
    department = (await client.post("/company/departments", json={"title": "Engineering"})).json()
    office = (await client.post("/company/offices", json={"name": "HQ", "address": "1 Main St"})).json()

    job = await _create_job(client, department_ids=[department["id"]], office_ids=[office["id"]])

    assert [d["title"] for d in job["departments"]] == ["Engineering"]
    assert [o["name"] for o in job["offices"]] == ["HQ"]

    by_department = await client.get(f"/jobs/department/{department['id']}")
    by_office = await client.get(f"/jobs/office/{office['id']}")
    assert [j["id"] for j in by_department.json()] == [job["id"]]
    assert [j["id"] for j in by_office.json()] == [job["id"]]


@pytest.mark.asyncio
async def test_create_job_unknown_department(client: AsyncClient):
    response = await client.post(
        "/jobs",
        json={"title": "Ghost", "department_ids": ["00000000-0000-0000-0000-000000000001"]}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_job_partial(client: AsyncClient):
    job = await _create_job(client, location="Berlin")

    response = await client.put(f"/jobs/{job['id']}", json={"title": "Staff Engineer"})

    assert response.status_code == 200
    assert response.json()["title"] == "Staff Engineer"
    assert response.json()["location"] == "Berlin"
    assert response.json()["status"] == "draft"


@pytest.mark.asyncio
async def test_list_jobs_filtered_by_status(client: AsyncClient):
    draft = await _create_job(client, title="Draft")
    published = await _create_job(client, title="Live")
    await _publish(client, published["id"])

    response = await client.get("/jobs", params={"status": "published"})

    assert [j["title"] for j in response.json()] == ["Live"]
    assert len((await client.get("/jobs")).json()) == 2
    assert draft["id"] in [j["id"] for j in (await client.get("/jobs", params={"status": "draft"})).json()]


@pytest.mark.asyncio
async def test_delete_job(client: AsyncClient):
    job = await _create_job(client)
    assert (await client.delete(f"/jobs/{job['id']}")).status_code == 204
    assert (await client.get(f"/jobs/{job['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_published_job_must_be_archived_before_delete(client: AsyncClient):
    job = await _create_job(client)
    await _publish(client, job["id"])

    assert (await client.delete(f"/jobs/{job['id']}")).status_code == 409
    assert (await client.put(f"/jobs/{job['id']}/archive")).status_code == 200
    assert (await client.put(f"/jobs/{job['id']}", json={"title": "Too late"})).status_code == 409
    assert (await client.delete(f"/jobs/{job['id']}")).status_code == 204


# ============================================================
# WORKFLOW
# ============================================================

@pytest.mark.asyncio
async def test_full_publish_flow(client: AsyncClient, admin_user: User):
    job = await _create_job(client)

    published = await _publish(client, job["id"])

    assert published["status"] == "published"
    assert published["approved_by"] == str(admin_user.id)
    assert published["published_date"] is not None


@pytest.mark.asyncio
async def test_reject_and_resubmit(client: AsyncClient):
    job = await _create_job(client)
    await client.put(f"/jobs/{job['id']}/submit-for-approval")

    pending = await client.get("/jobs/pending-approval")
    assert [j["id"] for j in pending.json()] == [job["id"]]

    rejected = await client.put(f"/jobs/{job['id']}/reject", json={"rejection_reason": "Needs salary range"})
    assert rejected.json()["status"] == "rejected"
    assert rejected.json()["rejection_reason"] == "Needs salary range"

    resubmitted = await client.put(f"/jobs/{job['id']}/submit-for-approval")
    assert resubmitted.json()["status"] == "pending_approval"
    assert resubmitted.json()["rejection_reason"] is None


@pytest.mark.asyncio
async def test_reject_requires_reason(client: AsyncClient):
    job = await _create_job(client)
    await client.put(f"/jobs/{job['id']}/submit-for-approval")

    response = await client.put(f"/jobs/{job['id']}/reject", json={"rejection_reason": ""})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_invalid_transition_conflicts(client: AsyncClient):
    """Publishing a draft skips approval and is refused."""
    job = await _create_job(client)

    response = await client.put(f"/jobs/{job['id']}/publish")

    assert response.status_code == 409
    assert (await client.get(f"/jobs/{job['id']}")).json()["status"] == "draft"


@pytest.mark.asyncio
async def test_manager_cannot_approve(client: AsyncClient, client_for, make_user):
    manager = await make_user(UserRole.MANAGER)
    manager_client = client_for(manager)

    job = await _create_job(manager_client)
    assert (await manager_client.put(f"/jobs/{job['id']}/submit-for-approval")).status_code == 200
    assert (await manager_client.put(f"/jobs/{job['id']}/approve")).status_code == 403
    assert (await manager_client.get("/jobs/pending-approval")).status_code == 403

    assert (await client.put(f"/jobs/{job['id']}/approve")).status_code == 200
    assert (await manager_client.put(f"/jobs/{job['id']}/publish")).status_code == 403


@pytest.mark.asyncio
async def test_director_can_approve(client: AsyncClient, client_for, make_user):
    director = await make_user(UserRole.DIRECTOR)
    job = await _create_job(client)
    await client.put(f"/jobs/{job['id']}/submit-for-approval")

    response = await client_for(director).put(f"/jobs/{job['id']}/approve")

    assert response.status_code == 200
    assert response.json()["approved_by"] == str(director.id)


@pytest.mark.asyncio
async def test_plain_user_cannot_create_jobs(client_for, make_user):
    user = await make_user(UserRole.USER)
    response = await client_for(user).post("/jobs", json={"title": "Sneaky"})
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_jobs_are_tenant_scoped(client: AsyncClient, client_for, other_company_admin: User):
    job = await _create_job(client)
    other = client_for(other_company_admin)

    assert (await other.get(f"/jobs/{job['id']}")).status_code == 404
    assert (await other.put(f"/jobs/{job['id']}/submit-for-approval")).status_code == 404
    assert (await other.get("/jobs")).json() == []
