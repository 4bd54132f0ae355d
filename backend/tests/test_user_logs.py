"""
Tests for the audit trail of console changes.
"""
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from careers.models.user import User, UserRole
from careers.services.user_logs import REDACTED, record_action, redact


async def _logs(client: AsyncClient, **params) -> dict:
    response = await client.get("/user-logs", params=params)
    assert response.status_code == 200, response.text
    return response.json()


@pytest.mark.asyncio
async def test_job_workflow_is_logged(client: AsyncClient, admin_user: User):
    job = (await client.post("/jobs", json={"title": "Engineer"})).json()
    await client.put(f"/jobs/{job['id']}/submit-for-approval")
    await client.put(f"/jobs/{job['id']}/reject", json={"rejection_reason": "Budget"})

    page = await _logs(client)

    assert page["total"] == 3
    assert [(log["action"], log["resource_type"]) for log in page["logs"]] == [
        ("reject", "job"),
        ("submit", "job"),
        ("create", "job"),
    ]
    newest = page["logs"][0]
    assert newest["resource_id"] == job["id"]
    assert newest["details"] == {"rejection_reason": "Budget"}
    assert newest["user_id"] == str(admin_user.id)
    assert newest["user_email"] == "admin@acme.com"
    assert newest["user_name"] == "Ada Admin"


@pytest.mark.asyncio
async def test_reads_and_failed_changes_are_not_logged(client: AsyncClient):
    job = (await client.post("/jobs", json={"title": "Engineer"})).json()
    await client.get(f"/jobs/{job['id']}")
    illegal = await client.put(f"/jobs/{job['id']}/publish")
    assert illegal.status_code == 409

    assert (await _logs(client))["total"] == 1


@pytest.mark.asyncio
async def test_pagination(client: AsyncClient):
    for n in range(5):
        await client.post("/company-api-keys", json={"name": f"key {n}"})

    first = await _logs(client, page=1, limit=3)
    second = await _logs(client, page=2, limit=3)
    last = await _logs(client, page=4, limit=3)

    assert first["total"] == 5
    assert len(first["logs"]) == 3
    assert len(second["logs"]) == 2
    assert last["logs"] == []
    assert {log["id"] for log in first["logs"]}.isdisjoint(log["id"] for log in second["logs"])


@pytest.mark.asyncio
async def test_logs_by_user_and_resource(client: AsyncClient, client_for, make_user):
    recruiter = await make_user(UserRole.RECRUITER)
    recruiter_client = client_for(recruiter)
    job = (await recruiter_client.post("/jobs", json={"title": "Engineer"})).json()
    await client.put(f"/jobs/{job['id']}", json={"title": "Senior Engineer"})
    await client.post("/company-api-keys", json={"name": "Careers site"})

    by_user = (await client.get(f"/user-logs/user/{recruiter.id}")).json()
    assert [log["action"] for log in by_user] == ["create"]

    by_resource = (await client.get(f"/user-logs/resource/job/{job['id']}")).json()
    assert [(log["action"], log["user_email"]) for log in by_resource] == [
        ("update", "admin@acme.com"),
        ("create", recruiter.email),
    ]
    assert by_resource[0]["details"] == {"fields": ["title"]}


@pytest.mark.asyncio
async def test_logs_are_admin_only_and_tenant_scoped(client: AsyncClient, client_for, make_user, other_company_admin: User):
    await client.post("/company-api-keys", json={"name": "Careers site"})
    director = client_for(await make_user(UserRole.DIRECTOR))

    assert (await director.get("/user-logs")).status_code == 403
    assert (await client_for(other_company_admin).get("/user-logs")).json() == {"logs": [], "total": 0}


@pytest.mark.asyncio
async def test_request_metadata_is_recorded(client: AsyncClient):
    await client.post(
        "/users",
        json={"email": "new@acme.com", "role": "recruiter"},
        headers={"User-Agent": "admin-console/1.0", "X-Forwarded-For": "203.0.113.9, 10.0.0.1"},
    )

    log = (await _logs(client))["logs"][0]
    assert (log["action"], log["resource_type"]) == ("create", "user")
    assert log["details"] == {"email": "new@acme.com", "role": "recruiter"}
    assert log["user_agent"] == "admin-console/1.0"
    assert log["ip_address"] == "203.0.113.9"


@pytest.mark.asyncio
async def test_api_key_secret_never_reaches_the_log(client: AsyncClient):
    await client.post("/company-api-keys", json={"name": "Careers site"})

    log = (await _logs(client))["logs"][0]
    assert log["details"] == {"name": "Careers site"}


def test_redact_masks_credentials_at_any_depth():
    body = {
        "name": "Site",
        "secret_key": "s3cret",
        "nested": {"Password": "hunter2", "items": [{"token": "abc", "keep": 1}]},
    }

    assert redact(body) == {
        "name": "Site",
        "secret_key": REDACTED,
        "nested": {"Password": REDACTED, "items": [{"token": REDACTED, "keep": 1}]},
    }
    assert body["secret_key"] == "s3cret"


@pytest.mark.asyncio
async def test_record_action_redacts_details(db: AsyncSession, admin_user: User):
    entry = record_action(db, admin_user, "update", "company", "c-1", {"api_key": "k", "name": "Acme"})
    await db.commit()

    assert entry.details == {"api_key": REDACTED, "name": "Acme"}
    assert entry.company_id == admin_user.company_id
