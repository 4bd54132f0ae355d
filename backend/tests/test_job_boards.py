"""
Tests for job boards and ATS sync.

Covers:
- Custom boards: unique slugs, custom domain conflicts, deletion detaching jobs
- External Greenhouse/Ashby boards: get-or-create and board token updates
- Refresh: creates, updates and archives mirrored jobs (feed is stubbed)
- Feed normalizers for both ATS formats
"""
import pytest
from httpx import AsyncClient

from careers.models.user import User, UserRole
from careers.schemas.job_board import ExternalPosting
from careers.services import ats_sync


def stub_feed(monkeypatch, postings):
    calls = []

    async def fake_fetch(source, board_token):
        calls.append((source, board_token))
        return list(postings)

    monkeypatch.setattr(ats_sync, "fetch_board_postings", fake_fetch)
    return calls


# ============================================================
# CUSTOM BOARDS
# ============================================================

@pytest.mark.asyncio
async def test_create_board_generates_unique_slug(client: AsyncClient):
    first = await client.post("/job-boards", json={"title": "Acme Careers!"})
    second = await client.post("/job-boards", json={"title": "Acme careers"})

    assert first.status_code == 201
    assert first.json()["slug"] == "acme-careers"
    assert second.json()["slug"] == "acme-careers-2"
    assert first.json()["source"] == "custom"
    assert first.json()["is_external"] is False


@pytest.mark.asyncio
async def test_custom_domain_must_be_unique(client: AsyncClient, client_for, other_company_admin: User):
    created = await client.post("/job-boards", json={"title": "Main", "custom_domain": "Jobs.Acme.com"})
    assert created.json()["custom_domain"] == "jobs.acme.com"

    response = await client_for(other_company_admin).post(
        "/job-boards", json={"title": "Copycat", "custom_domain": "jobs.acme.com"}
    )
    assert response.status_code == 409

    same_board = await client.patch(f"/job-boards/{created.json()['id']}", json={"custom_domain": "jobs.acme.com"})
    assert same_board.status_code == 200


@pytest.mark.asyncio
async def test_update_board(client: AsyncClient):
    created = await client.post("/job-boards", json={"title": "Main"})

    response = await client.patch(
        f"/job-boards/{created.json()['id']}",
        json={"description": "All our openings", "is_active": False}
    )

    assert response.status_code == 200
    assert response.json()["description"] == "All our openings"
    assert response.json()["is_active"] is False
    assert response.json()["title"] == "Main"


@pytest.mark.asyncio
async def test_delete_board_detaches_jobs(client: AsyncClient):
    board = (await client.post("/job-boards", json={"title": "Main"})).json()
    job = (await client.post("/jobs", json={"title": "Engineer", "job_board_id": board["id"]})).json()

    listed = await client.get(f"/jobs/job-board/{board['id']}")
    assert [j["id"] for j in listed.json()] == [job["id"]]

    assert (await client.delete(f"/job-boards/{board['id']}")).status_code == 204
    assert (await client.get(f"/jobs/{job['id']}")).json()["job_board_id"] is None


@pytest.mark.asyncio
async def test_recruiter_cannot_delete_board(client: AsyncClient, client_for, make_user):
    recruiter = await make_user(UserRole.RECRUITER)
    board = (await client_for(recruiter).post("/job-boards", json={"title": "Main"})).json()

    response = await client_for(recruiter).delete(f"/job-boards/{board['id']}")
    assert response.status_code == 403


# ============================================================
# EXTERNAL BOARDS
# ============================================================

@pytest.mark.asyncio
async def test_external_board_get_or_create(client: AsyncClient):
    first = await client.post("/job-boards/external/greenhouse", json={"board_token": "acme"})
    second = await client.post("/job-boards/external/Greenhouse", json={"board_token": "acme-new"})

    assert first.status_code == 200
    assert first.json()["is_external"] is True
    assert first.json()["source"] == "greenhouse"
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["settings"]["board_token"] == "acme-new"


@pytest.mark.asyncio
async def test_external_board_unknown_source(client: AsyncClient):
    response = await client.post("/job-boards/external/lever")
    assert response.status_code == 400


# ============================================================
# REFRESH
# ============================================================

@pytest.mark.asyncio
async def test_refresh_creates_updates_and_archives(client: AsyncClient, monkeypatch):
    board = (await client.post("/job-boards/external/greenhouse", json={"board_token": "acme"})).json()

    calls = stub_feed(monkeypatch, [
        ExternalPosting(external_id="1", title="Engineer", location="Remote"),
        ExternalPosting(external_id="2", title="Designer"),
    ])
    first = await client.post(f"/job-boards/{board['id']}/refresh")

    assert first.status_code == 200
    assert first.json()["created"] == 2
    assert calls == [("greenhouse", "acme")]

    jobs = (await client.get(f"/jobs/job-board/{board['id']}")).json()
    assert sorted(j["title"] for j in jobs) == ["Designer", "Engineer"]
    assert all(j["status"] == "published" for j in jobs)

    stub_feed(monkeypatch, [ExternalPosting(external_id="1", title="Senior Engineer", location="Remote")])
    second = await client.post(f"/job-boards/{board['id']}/refresh")

    assert second.json() == {
        "job_board_id": board["id"],
        "source": "greenhouse",
        "fetched": 1,
        "created": 0,
        "updated": 1,
        "archived": 1,
    }
    statuses = {j["title"]: j["status"] for j in (await client.get(f"/jobs/job-board/{board['id']}")).json()}
    assert statuses == {"Senior Engineer": "published", "Designer": "archived"}

    assert (await client.get(f"/job-boards/{board['id']}")).json()["last_synced_at"] is not None


@pytest.mark.asyncio
async def test_refresh_custom_board_rejected(client: AsyncClient):
    board = (await client.post("/job-boards", json={"title": "Main"})).json()
    response = await client.post(f"/job-boards/{board['id']}/refresh")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_refresh_without_token_rejected(client: AsyncClient):
    board = (await client.post("/job-boards/external/ashby")).json()
    response = await client.post(f"/job-boards/{board['id']}/refresh")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_refresh_feed_failure_is_bad_gateway(client: AsyncClient, monkeypatch):
    board = (await client.post("/job-boards/external/ashby", json={"board_token": "acme"})).json()

    async def failing_fetch(source, board_token):
        raise ats_sync.AtsFetchError("ashby:acme returned HTTP 500")

    monkeypatch.setattr(ats_sync, "fetch_board_postings", failing_fetch)

    response = await client.post(f"/job-boards/{board['id']}/refresh")
    assert response.status_code == 502


# ============================================================
# NORMALIZERS
# ============================================================

def test_normalize_greenhouse_job():
    posting = ats_sync.normalize_greenhouse_job({
        "id": 42,
        "title": " Data Engineer ",
        "location": {"name": "Toronto"},
        "content": "&lt;p&gt;Pipelines&lt;/p&gt;",
        "absolute_url": "https://boards.greenhouse.io/acme/jobs/42",
        "first_published": "2024-03-01T12:00:00-05:00",
    })

    assert posting.external_id == "42"
    assert posting.title == "Data Engineer"
    assert posting.location == "Toronto"
    assert posting.content == "<p>Pipelines</p>"
    assert posting.published_at is not None


def test_normalize_ashby_job_skips_unlisted_and_malformed():
    assert ats_sync.normalize_ashby_job({"id": "a", "title": "Hidden", "isListed": False}) is None
    assert ats_sync.normalize_ashby_job({"title": "No id"}) is None
    assert ats_sync.normalize_greenhouse_job({"id": 1}) is None

    posting = ats_sync.normalize_ashby_job({
        "id": "b",
        "title": "PM",
        "location": "NYC",
        "descriptionHtml": "<p>Own the roadmap</p>",
        "jobUrl": "https://jobs.ashbyhq.com/acme/b",
    })
    assert posting.content == "<p>Own the roadmap</p>"
    assert posting.apply_url == "https://jobs.ashbyhq.com/acme/b"
