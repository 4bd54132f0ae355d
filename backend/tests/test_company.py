"""
Tests for company structure endpoints.

Covers:
- Company profile save/update and settings (approval type, allowed domains)
- Offices (single main office)
- Departments (hierarchy, cycle detection, leaf-only deletion)
- Job functions and job roles
- User management (admin only)
- Tenant isolation: other companies' rows are 404
"""
import pytest
from httpx import AsyncClient

from careers.models.user import User, UserRole


# ============================================================
# COMPANY PROFILE
# ============================================================

@pytest.mark.asyncio
async def test_get_company(client: AsyncClient, admin_user: User):
    """The signup company has default settings and the admin's domain allowed."""
    response = await client.get("/company")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Acme"
    assert data["settings"]["approval_type"] == "headcount"
    assert data["allowed_domains"] == ["acme.com"]
    assert data["values"] == []


@pytest.mark.asyncio
async def test_save_company_details(client: AsyncClient):
    """Saving the profile replaces the editable fields."""
    details = {
        "name": "Acme Corp",
        "website": "https://acme.example",
        "founded_year": 1999,
        "values": [{"text": "Ship it", "icon": "rocket"}],
        "social_links": {"linkedin": "https://linkedin.com/company/acme"},
    }
    response = await client.post("/company", json=details)

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Acme Corp"
    assert data["values"] == [{"text": "Ship it", "icon": "rocket"}]
    assert data["social_links"]["linkedin"] == "https://linkedin.com/company/acme"

    response = await client.put("/company", json={"name": "Acme Inc"})
    assert response.json()["name"] == "Acme Inc"
    assert response.json()["values"] == []


@pytest.mark.asyncio
async def test_company_details_validation(client: AsyncClient):
    """Empty names and impossible founding years are rejected."""
    assert (await client.post("/company", json={"name": ""})).status_code == 422
    assert (await client.post("/company", json={"name": "A", "founded_year": 1200})).status_code == 422


@pytest.mark.asyncio
async def test_update_settings_merges_and_normalizes_domains(client: AsyncClient):
    """Settings updates keep omitted values; domains are lower-cased and de-duplicated."""
    response = await client.put(
        "/company/settings",
        json={"approval_type": "job-opening", "allowed_domains": ["Acme.com", "acme.com ", "", "labs.acme.com"]}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["settings"] == {"approval_type": "job-opening", "email_calendar_provider": "other"}
    assert data["allowed_domains"] == ["acme.com", "labs.acme.com"]

    response = await client.put("/company/settings", json={"email_calendar_provider": "google"})
    assert response.json()["settings"]["approval_type"] == "job-opening"
    assert response.json()["settings"]["email_calendar_provider"] == "google"


@pytest.mark.asyncio
async def test_non_admin_cannot_edit_company(client_for, make_user):
    """Only admins change the company profile."""
    recruiter = await make_user(UserRole.RECRUITER)
    response = await client_for(recruiter).post("/company", json={"name": "Hijacked"})
    assert response.status_code == 403


# ============================================================
# OFFICES
# ============================================================

@pytest.mark.asyncio
async def test_only_one_main_office(client: AsyncClient):
    """Marking an office as main unmarks the previous one."""
    first = await client.post("/company/offices", json={"name": "HQ", "address": "1 Main St", "is_main": True})
    second = await client.post("/company/offices", json={"name": "Berlin", "address": "Unter den Linden 1"})
    assert first.status_code == 201
    assert second.status_code == 201

    response = await client.get("/company/offices/main")
    assert response.json()["name"] == "HQ"

    await client.patch(f"/company/offices/{second.json()['id']}", json={"is_main": True})

    offices = (await client.get("/company/offices")).json()
    assert [o["name"] for o in offices if o["is_main"]] == ["Berlin"]
    assert offices[0]["name"] == "Berlin"


@pytest.mark.asyncio
async def test_main_office_missing(client: AsyncClient):
    """No main office configured is a 404."""
    response = await client.get("/company/offices/main")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_office(client: AsyncClient):
    created = await client.post("/company/offices", json={"name": "Remote", "address": "Anywhere"})
    office_id = created.json()["id"]

    assert (await client.delete(f"/company/offices/{office_id}")).status_code == 204
    assert (await client.get(f"/company/offices/{office_id}")).status_code == 404


@pytest.mark.asyncio
async def test_other_tenant_office_is_hidden(client: AsyncClient, client_for, other_company_admin: User):
    """Offices of another company are not visible."""
    created = await client.post("/company/offices", json={"name": "HQ", "address": "1 Main St"})
    office_id = created.json()["id"]

    other = client_for(other_company_admin)
    assert (await other.get(f"/company/offices/{office_id}")).status_code == 404
    assert (await other.patch(f"/company/offices/{office_id}", json={"name": "Mine"})).status_code == 404
    assert (await other.get("/company/offices")).json() == []


# ============================================================
# DEPARTMENTS
# ============================================================

async def _department(client: AsyncClient, title: str, parent_id=None) -> dict:
    response = await client.post(
        "/company/departments",
        json={"title": title, "parent_department_id": parent_id}
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_department_hierarchy(client: AsyncClient):
    """Sub-departments nest under their parent in the hierarchy view."""
    engineering = await _department(client, "Engineering")
    platform = await _department(client, "Platform", engineering["id"])
    await _department(client, "Infra", platform["id"])
    await _department(client, "Sales")

    response = await client.get("/company/departments/hierarchy")

    assert response.status_code == 200
    roots = response.json()
    assert sorted(r["title"] for r in roots) == ["Engineering", "Sales"]
    eng = next(r for r in roots if r["title"] == "Engineering")
    assert eng["children"][0]["title"] == "Platform"
    assert eng["children"][0]["children"][0]["title"] == "Infra"


@pytest.mark.asyncio
async def test_department_cycle_rejected(client: AsyncClient):
    """A department cannot be moved under itself or its descendants."""
    root = await _department(client, "Engineering")
    child = await _department(client, "Platform", root["id"])

    response = await client.patch(f"/company/departments/{root['id']}", json={"parent_department_id": child["id"]})
    assert response.status_code == 400

    response = await client.patch(f"/company/departments/{root['id']}", json={"parent_department_id": root["id"]})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_department_detach_parent(client: AsyncClient):
    """Sending parent_department_id=null moves a department to the top level."""
    root = await _department(client, "Engineering")
    child = await _department(client, "Platform", root["id"])

    response = await client.patch(f"/company/departments/{child['id']}", json={"parent_department_id": None})

    assert response.status_code == 200
    assert response.json()["parent_department_id"] is None


@pytest.mark.asyncio
async def test_delete_department_with_children_rejected(client: AsyncClient):
    """Only leaf departments can be deleted."""
    root = await _department(client, "Engineering")
    child = await _department(client, "Platform", root["id"])

    assert (await client.delete(f"/company/departments/{root['id']}")).status_code == 400
    assert (await client.delete(f"/company/departments/{child['id']}")).status_code == 204
    assert (await client.delete(f"/company/departments/{root['id']}")).status_code == 204


@pytest.mark.asyncio
async def test_department_job_roles(client: AsyncClient):
    """Departments link to job roles of the same company."""
    function = (await client.get("/job-functions")).json()[0]
    role = await client.post("/job-roles", json={"title": "Backend Engineer", "job_function_id": function["id"]})

    response = await client.post(
        "/company/departments",
        json={"title": "Engineering", "job_role_ids": [role.json()["id"]]}
    )

    assert response.status_code == 201
    assert [r["title"] for r in response.json()["job_roles"]] == ["Backend Engineer"]

    bogus = await client.post(
        "/company/departments",
        json={"title": "Ghost", "job_role_ids": ["00000000-0000-0000-0000-000000000001"]}
    )
    assert bogus.status_code == 400


# ============================================================
# JOB FUNCTIONS AND ROLES
# ============================================================

@pytest.mark.asyncio
async def test_job_roles_filtered_by_function(client: AsyncClient):
    """Job roles can be listed per job function."""
    functions = (await client.get("/job-functions")).json()
    first, second = functions[0], functions[1]
    await client.post("/job-roles", json={"title": "A", "job_function_id": first["id"]})
    await client.post("/job-roles", json={"title": "B", "job_function_id": second["id"]})

    response = await client.get("/job-roles", params={"job_function_id": first["id"]})

    assert response.status_code == 200
    assert [r["title"] for r in response.json()] == ["A"]
    assert response.json()[0]["job_function"]["title"] == first["title"]


@pytest.mark.asyncio
async def test_job_function_in_use_cannot_be_deleted(client: AsyncClient):
    created = await client.post("/job-functions", json={"title": "Research"})
    function_id = created.json()["id"]
    role = await client.post("/job-roles", json={"title": "Scientist", "job_function_id": function_id})

    assert (await client.delete(f"/job-functions/{function_id}")).status_code == 400
    assert (await client.delete(f"/job-roles/{role.json()['id']}")).status_code == 204
    assert (await client.delete(f"/job-functions/{function_id}")).status_code == 204


@pytest.mark.asyncio
async def test_job_role_requires_own_function(client: AsyncClient, client_for, other_company_admin: User):
    """Roles cannot point at another company's job function."""
    foreign_function = (await client_for(other_company_admin).get("/job-functions")).json()[0]

    response = await client.post("/job-roles", json={"title": "X", "job_function_id": foreign_function["id"]})
    assert response.status_code == 404


# ============================================================
# USERS
# ============================================================

@pytest.mark.asyncio
async def test_admin_manages_users(client: AsyncClient):
    """Admins invite, update and delete users in their company."""
    created = await client.post("/users", json={"email": "Rita@Acme.com", "role": "recruiter"})
    assert created.status_code == 201
    user = created.json()
    assert user["email"] == "rita@acme.com"
    assert user["role"] == "recruiter"

    duplicate = await client.post("/users", json={"email": "rita@acme.com"})
    assert duplicate.status_code == 409

    updated = await client.patch(f"/users/{user['id']}", json={"role": "director", "full_name": "Rita"})
    assert updated.json()["role"] == "director"
    assert updated.json()["full_name"] == "Rita"

    assert (await client.delete(f"/users/{user['id']}")).status_code == 204
    emails = [u["email"] for u in (await client.get("/users")).json()]
    assert emails == ["admin@acme.com"]


@pytest.mark.asyncio
async def test_admin_cannot_demote_or_delete_self(client: AsyncClient, admin_user: User):
    assert (await client.patch(f"/users/{admin_user.id}", json={"role": "user"})).status_code == 400
    assert (await client.delete(f"/users/{admin_user.id}")).status_code == 400


@pytest.mark.asyncio
async def test_users_endpoint_admin_only(client_for, make_user):
    manager = await make_user(UserRole.MANAGER)
    response = await client_for(manager).get("/users")
    assert response.status_code == 403
