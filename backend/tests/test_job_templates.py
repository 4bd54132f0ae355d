"""
Tests for job templates.
"""
import pytest
from httpx import AsyncClient

from careers.models.user import User, UserRole


async def _role(client: AsyncClient, title: str = "Backend Engineer") -> dict:
    function = (await client.get("/job-functions")).json()[0]
    response = await client.post("/job-roles", json={"title": title, "job_function_id": function["id"]})
    return response.json()


async def _template(client: AsyncClient, role_id: str, **fields) -> dict:
    payload = {"name": "Backend", "content": "<p>Build APIs</p>", "job_role_id": role_id, **fields}
    response = await client.post("/job-templates", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_template_sanitizes_content(client: AsyncClient):
    role = await _role(client)
    department = (await client.post("/company/departments", json={"title": "Engineering"})).json()

    template = await _template(
        client,
        role["id"],
        content='<p onclick="x()">Build APIs</p><script>alert(1)</script>',
        department_id=department["id"],
    )

    assert template["content"] == "<p>Build APIs</p>"
    assert template["job_role"]["title"] == "Backend Engineer"
    assert template["department"] == {"id": department["id"], "title": "Engineering"}


@pytest.mark.asyncio
async def test_list_and_filter_by_role(client: AsyncClient):
    backend = await _role(client, "Backend Engineer")
    designer = await _role(client, "Designer")
    await _template(client, backend["id"], name="Senior backend")
    await _template(client, backend["id"], name="Backend")
    await _template(client, designer["id"], name="Product designer")

    everything = await client.get("/job-templates")
    assert [t["name"] for t in everything.json()] == ["Backend", "Product designer", "Senior backend"]

    for_role = await client.get(f"/job-templates/role/{backend['id']}")
    assert [t["name"] for t in for_role.json()] == ["Backend", "Senior backend"]


@pytest.mark.asyncio
async def test_update_template(client: AsyncClient):
    role = await _role(client)
    department = (await client.post("/company/departments", json={"title": "Engineering"})).json()
    template = await _template(client, role["id"], department_id=department["id"])
    url = f"/job-templates/{template['id']}"

    renamed = await client.patch(url, json={"name": "Platform", "content": "<div><p>Run infra</p></div>"})
    assert renamed.status_code == 200
    assert renamed.json()["name"] == "Platform"
    assert renamed.json()["content"] == "<p>Run infra</p>"
    assert renamed.json()["department_id"] == department["id"]

    detached = await client.patch(url, json={"department_id": None})
    assert detached.json()["department_id"] is None
    assert detached.json()["name"] == "Platform"


@pytest.mark.asyncio
async def test_delete_template(client: AsyncClient):
    template = await _template(client, (await _role(client))["id"])
    url = f"/job-templates/{template['id']}"

    assert (await client.delete(url)).status_code == 204
    assert (await client.get(url)).status_code == 404


@pytest.mark.asyncio
async def test_template_references_must_belong_to_company(client: AsyncClient, client_for, other_company_admin: User):
    other = client_for(other_company_admin)
    foreign_role = await _role(other)
    foreign_department = (await other.post("/company/departments", json={"title": "Sales"})).json()
    own_role = await _role(client)

    bad_role = await client.post(
        "/job-templates", json={"name": "X", "content": "<p>x</p>", "job_role_id": foreign_role["id"]}
    )
    assert bad_role.status_code == 404

    bad_department = await client.post(
        "/job-templates",
        json={"name": "X", "content": "<p>x</p>", "job_role_id": own_role["id"], "department_id": foreign_department["id"]}
    )
    assert bad_department.status_code == 404

    template = await _template(client, own_role["id"])
    assert (await other.get(f"/job-templates/{template['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_members_cannot_edit_templates(client: AsyncClient, client_for, make_user):
    role = await _role(client)
    template = await _template(client, role["id"])
    member = client_for(await make_user(UserRole.USER))

    assert (await member.get(f"/job-templates/{template['id']}")).status_code == 200
    assert (await member.patch(f"/job-templates/{template['id']}", json={"name": "Mine"})).status_code == 403
    assert (await member.delete(f"/job-templates/{template['id']}")).status_code == 403


@pytest.mark.asyncio
async def test_template_validation(client: AsyncClient):
    role = await _role(client)
    missing_content = await client.post("/job-templates", json={"name": "X", "job_role_id": role["id"]})
    assert missing_content.status_code == 422
    empty_name = await client.post("/job-templates", json={"name": "", "content": "<p>x</p>", "job_role_id": role["id"]})
    assert empty_name.status_code == 422
