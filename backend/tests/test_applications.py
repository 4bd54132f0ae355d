"""
Tests for candidate applications and interviews.
"""
import pytest
from httpx import AsyncClient

from careers.models.user import User, UserRole


async def _job(client: AsyncClient) -> dict:
    return (await client.post("/jobs", json={"title": "Engineer"})).json()


async def _apply(client: AsyncClient, job_id: str, **fields) -> dict:
    payload = {"job_id": job_id, "first_name": "Grace", "last_name": "Hopper", "email": "grace@example.com", **fields}
    response = await client.post("/job-applications", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def _interview(**fields) -> dict:
    return {
        "stage": "Interview - Technical",
        "interviewer_name": "Ada",
        "scheduled_date": "2024-05-01T10:00:00",
        **fields,
    }


@pytest.mark.asyncio
async def test_create_and_filter_applications(client: AsyncClient):
    first_job = await _job(client)
    second_job = await _job(client)
    application = await _apply(client, first_job["id"], source="linkedin")
    await _apply(client, second_job["id"])

    assert application["status"] == "applied"
    assert application["source"] == "linkedin"
    assert application["interviews"] == []

    by_job = await client.get("/job-applications", params={"job_id": first_job["id"]})
    assert [a["id"] for a in by_job.json()] == [application["id"]]

    by_status = await client.get("/job-applications", params={"status": "hired"})
    assert by_status.json() == []


@pytest.mark.asyncio
async def test_referral_defaults_to_current_user(client: AsyncClient, admin_user: User):
    job = await _job(client)
    application = await _apply(client, job["id"], is_referral=True, source="referral")
    assert application["referred_by"] == str(admin_user.id)


@pytest.mark.asyncio
async def test_application_for_foreign_job(client: AsyncClient, client_for, other_company_admin: User):
    job = await _job(client_for(other_company_admin))
    response = await client.post(
        "/job-applications",
        json={"job_id": job["id"], "first_name": "A", "last_name": "B", "email": "a@b.com"}
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_hiring_stamps_hired_at(client: AsyncClient):
    application = await _apply(client, (await _job(client))["id"])

    hired = await client.patch(f"/job-applications/{application['id']}/status", json={"status": "hired"})
    assert hired.json()["status"] == "hired"
    hired_at = hired.json()["hired_at"]
    assert hired_at is not None

    again = await client.patch(f"/job-applications/{application['id']}/status", json={"status": "hired"})
    assert again.json()["hired_at"] == hired_at

    withdrawn = await client.patch(f"/job-applications/{application['id']}/status", json={"status": "withdrawn"})
    assert withdrawn.json()["hired_at"] is None


@pytest.mark.asyncio
async def test_invalid_status_rejected(client: AsyncClient):
    application = await _apply(client, (await _job(client))["id"])
    response = await client.patch(f"/job-applications/{application['id']}/status", json={"status": "ghosted"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_scheduling_interview_moves_to_interviewing(client: AsyncClient, admin_user: User):
    application = await _apply(client, (await _job(client))["id"])

    response = await client.post(
        f"/job-applications/{application['id']}/interviews",
        json=_interview(interviewer_id=str(admin_user.id), score=8.5, outcome="pass", duration_minutes=45)
    )

    assert response.status_code == 201
    assert response.json()["application_id"] == application["id"]
    assert response.json()["interviewer_id"] == str(admin_user.id)

    refreshed = (await client.get(f"/job-applications/{application['id']}")).json()
    assert refreshed["status"] == "interviewing"
    assert [i["stage"] for i in refreshed["interviews"]] == ["Interview - Technical"]


@pytest.mark.asyncio
async def test_interview_keeps_later_status(client: AsyncClient):
    application = await _apply(client, (await _job(client))["id"])
    await client.patch(f"/job-applications/{application['id']}/status", json={"status": "offer"})

    await client.post(f"/job-applications/{application['id']}/interviews", json=_interview(stage="Final"))

    refreshed = (await client.get(f"/job-applications/{application['id']}")).json()
    assert refreshed["status"] == "offer"


@pytest.mark.asyncio
async def test_interview_validation(client: AsyncClient, client_for, other_company_admin: User):
    application = await _apply(client, (await _job(client))["id"])
    url = f"/job-applications/{application['id']}/interviews"

    assert (await client.post(url, json=_interview(score=11))).status_code == 422
    assert (await client.post(url, json=_interview(outcome="maybe"))).status_code == 422
    foreign = await client.post(url, json=_interview(interviewer_id=str(other_company_admin.id)))
    assert foreign.status_code == 404


@pytest.mark.asyncio
async def test_any_member_can_view_applications(client: AsyncClient, client_for, make_user):
    application = await _apply(client, (await _job(client))["id"])
    member = await make_user(UserRole.USER)

    response = await client_for(member).get(f"/job-applications/{application['id']}")
    assert response.status_code == 200
