"""
Tests for interview processes and scheduling interviews from them.
"""
import pytest
from httpx import AsyncClient

from careers.models.user import User, UserRole


async def _role(client: AsyncClient, title: str = "Backend Engineer") -> dict:
    function = (await client.get("/job-functions")).json()[0]
    response = await client.post("/job-roles", json={"title": title, "job_function_id": function["id"]})
    return response.json()


async def _process(client: AsyncClient, role_id: str, stages: list) -> dict:
    response = await client.post("/interview-processes", json={"job_role_id": role_id, "stages": stages})
    assert response.status_code == 201, response.text
    return response.json()


STAGES = [
    {"title": "Phone screen", "duration_minutes": 30},
    {
        "title": "Technical",
        "description": "Pair on a small service",
        "considerations": [{"title": "Testing", "description": "Writes tests first?"}],
        "duration_minutes": 90,
    },
    {"title": "Culture"},
]


@pytest.mark.asyncio
async def test_create_process(client: AsyncClient, admin_user: User):
    role = await _role(client)

    process = await _process(client, role["id"], STAGES)

    assert process["job_role"] == {"id": role["id"], "title": "Backend Engineer"}
    assert process["created_by"]["email"] == admin_user.email
    assert [s["title"] for s in process["stages"]] == ["Phone screen", "Technical", "Culture"]
    assert [s["order"] for s in process["stages"]] == [0, 1, 2]
    assert [s["duration_minutes"] for s in process["stages"]] == [30, 90, 60]
    assert process["stages"][1]["considerations"] == [{"title": "Testing", "description": "Writes tests first?"}]


@pytest.mark.asyncio
async def test_explicit_order_sorts_stages(client: AsyncClient):
    role = await _role(client)

    process = await _process(client, role["id"], [
        {"title": "Onsite", "order": 5},
        {"title": "Screen", "order": 1},
    ])

    assert [(s["title"], s["order"]) for s in process["stages"]] == [("Screen", 1), ("Onsite", 5)]


@pytest.mark.asyncio
@pytest.mark.parametrize("stages", [
    [],
    [{"title": "Screen", "duration_minutes": 20}],
    [{"title": "Screen", "duration_minutes": 0}],
    [{"title": ""}],
])
async def test_process_validation(client: AsyncClient, stages):
    role = await _role(client)
    response = await client.post("/interview-processes", json={"job_role_id": role["id"], "stages": stages})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_and_filter_by_role(client: AsyncClient):
    backend = await _role(client, "Backend Engineer")
    designer = await _role(client, "Designer")
    first = await _process(client, backend["id"], STAGES)
    await _process(client, designer["id"], [{"title": "Portfolio review"}])

    everything = await client.get("/interview-processes")
    assert len(everything.json()) == 2

    for_role = await client.get(f"/interview-processes/job-role/{backend['id']}")
    assert [p["id"] for p in for_role.json()] == [first["id"]]


@pytest.mark.asyncio
async def test_update_and_delete(client: AsyncClient):
    role = await _role(client)
    process = await _process(client, role["id"], STAGES)
    url = f"/interview-processes/{process['id']}"

    updated = await client.put(url, json={"stages": [{"title": "Only round", "duration_minutes": 45}]})
    assert updated.status_code == 200
    assert [(s["title"], s["duration_minutes"]) for s in updated.json()["stages"]] == [("Only round", 45)]
    assert updated.json()["job_role_id"] == role["id"]

    assert (await client.delete(url)).status_code == 204
    assert (await client.get(url)).status_code == 404


@pytest.mark.asyncio
async def test_processes_are_tenant_scoped(client: AsyncClient, client_for, other_company_admin: User):
    role = await _role(client)
    process = await _process(client, role["id"], STAGES)
    other = client_for(other_company_admin)

    assert (await other.get(f"/interview-processes/{process['id']}")).status_code == 404
    assert (await other.get(f"/interview-processes/job-role/{role['id']}")).status_code == 404
    assert (await other.get("/interview-processes")).json() == []

    foreign_role = await other.post("/interview-processes", json={"job_role_id": role["id"], "stages": STAGES})
    assert foreign_role.status_code == 404


@pytest.mark.asyncio
async def test_members_read_but_cannot_edit(client: AsyncClient, client_for, make_user):
    role = await _role(client)
    await _process(client, role["id"], STAGES)
    member = client_for(await make_user(UserRole.USER))
    recruiter = client_for(await make_user(UserRole.RECRUITER))

    assert len((await member.get("/interview-processes")).json()) == 1
    denied = await member.post("/interview-processes", json={"job_role_id": role["id"], "stages": STAGES})
    assert denied.status_code == 403

    allowed = await recruiter.post("/interview-processes", json={"job_role_id": role["id"], "stages": STAGES})
    assert allowed.status_code == 201


# ============================================================
# SCHEDULING FROM A PROCESS
# ============================================================

async def _application(client: AsyncClient) -> dict:
    job = (await client.post("/jobs", json={"title": "Engineer"})).json()
    payload = {"job_id": job["id"], "first_name": "Grace", "last_name": "Hopper", "email": "grace@example.com"}
    return (await client.post("/job-applications", json=payload)).json()


@pytest.mark.asyncio
async def test_interview_takes_label_and_duration_from_process_stage(client: AsyncClient):
    process = await _process(client, (await _role(client))["id"], STAGES)
    application = await _application(client)

    response = await client.post(
        f"/job-applications/{application['id']}/interviews",
        json={
            "interview_process_id": process["id"],
            "stage_order": 2,
            "interviewer_name": "Ada",
            "scheduled_date": "2024-05-01T10:00:00",
        }
    )

    assert response.status_code == 201, response.text
    interview = response.json()
    assert interview["stage"] == "Technical"
    assert interview["duration_minutes"] == 90
    assert interview["interview_process_id"] == process["id"]


@pytest.mark.asyncio
async def test_explicit_stage_fields_win_over_process(client: AsyncClient):
    process = await _process(client, (await _role(client))["id"], STAGES)
    application = await _application(client)

    response = await client.post(
        f"/job-applications/{application['id']}/interviews",
        json={
            "interview_process_id": process["id"],
            "stage": "Interview - Technical",
            "duration_minutes": 50,
            "interviewer_name": "Ada",
            "scheduled_date": "2024-05-01T10:00:00",
        }
    )

    assert response.json()["stage"] == "Interview - Technical"
    assert response.json()["duration_minutes"] == 50


@pytest.mark.asyncio
async def test_interview_stage_must_exist(client: AsyncClient, client_for, other_company_admin: User):
    process = await _process(client, (await _role(client))["id"], STAGES)
    application = await _application(client)
    url = f"/job-applications/{application['id']}/interviews"
    base = {"interviewer_name": "Ada", "scheduled_date": "2024-05-01T10:00:00"}

    past_end = await client.post(url, json={**base, "interview_process_id": process["id"], "stage_order": 4})
    assert past_end.status_code == 400

    no_stage = await client.post(url, json=base)
    assert no_stage.status_code == 422

    other = client_for(other_company_admin)
    foreign_process = await _process(other, (await _role(other))["id"], STAGES)
    foreign = await client.post(url, json={**base, "interview_process_id": foreign_process["id"]})
    assert foreign.status_code == 404
