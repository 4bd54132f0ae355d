"""
Tests for recruiting analytics.

A fixed data set is seeded for March 2024:
- "Backend Engineer" (Engineering, Remote): a1 hired after 10 days, a2 at offer
- "Sales Rep" (no department, Berlin): a3 rejected after an interview, a4 applied
- One February application for the comparison period
- One application of another company that must never be counted
"""
from datetime import datetime

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from careers.models.department import Department
from careers.models.job import Job, JobStatus
from careers.models.job_application import Interview, JobApplication
from careers.models.user import User
from careers.services.analytics import AnalyticsFilters

MARCH = {"start_date": "2024-03-01", "end_date": "2024-03-31"}


def _application(company_id, job, name, source, status, created_at, hired_at=None) -> JobApplication:
    return JobApplication(
        company_id=company_id,
        job_id=job.id,
        first_name=name,
        last_name="Candidate",
        email=f"{name.lower()}@example.com",
        source=source,
        status=status,
        created_at=created_at,
        hired_at=hired_at,
    )


def _interview(application, stage, order, interviewer, day, outcome, score, duration, rating=None) -> Interview:
    return Interview(
        company_id=application.company_id,
        application_id=application.id,
        stage=stage,
        stage_order=order,
        interviewer_name=interviewer,
        scheduled_date=datetime(2024, 3, day, 10, 0),
        outcome=outcome,
        score=score,
        duration_minutes=duration,
        feedback_rating=rating,
    )


@pytest_asyncio.fixture
async def seeded(db: AsyncSession, admin_user: User, other_company_admin: User) -> dict:
    company_id = admin_user.company_id

    engineering = Department(company_id=company_id, title="Engineering")
    db.add(engineering)
    await db.flush()

    backend = Job(
        company_id=company_id, title="Backend Engineer", location="Remote",
        status=JobStatus.PUBLISHED.value, published_date=datetime(2024, 2, 25), departments=[engineering],
    )
    sales = Job(
        company_id=company_id, title="Sales Rep", location="Berlin",
        status=JobStatus.PUBLISHED.value, published_date=datetime(2024, 2, 20),
    )
    draft = Job(company_id=company_id, title="Draft", status=JobStatus.DRAFT.value)
    foreign = Job(company_id=other_company_admin.company_id, title="Globex Job", status=JobStatus.PUBLISHED.value)
    db.add_all([backend, sales, draft, foreign])
    await db.flush()

    a1 = _application(company_id, backend, "Ann", "linkedin", "hired", datetime(2024, 3, 1), datetime(2024, 3, 11))
    a2 = _application(company_id, backend, "Ben", "linkedin", "offer", datetime(2024, 3, 2))
    a3 = _application(company_id, sales, "Cat", "careers-site", "rejected", datetime(2024, 3, 5))
    a4 = _application(company_id, sales, "Dan", "careers-site", "applied", datetime(2024, 3, 6))
    a0 = _application(company_id, backend, "Eve", "linkedin", "applied", datetime(2024, 2, 10))
    other = _application(other_company_admin.company_id, foreign, "Zed", "linkedin", "hired",
                         datetime(2024, 3, 3), datetime(2024, 3, 4))
    db.add_all([a1, a2, a3, a4, a0, other])
    await db.flush()

    db.add_all([
        _interview(a1, "Interview - Technical", 1, "Ada", 3, "pass", 8, 60, "Yes"),
        _interview(a2, "Interview - Technical", 1, "Bob", 4, "pass", 6, 30, "Strong Yes"),
        _interview(a2, "Interview - Final", 2, "Ada", 8, "pass", 9, 60),
        _interview(a3, "Interview - Technical", 1, "Bob", 7, "fail", 3, 30, "No"),
    ])
    await db.commit()

    return {"engineering": engineering, "backend": backend, "sales": sales}


# ============================================================
# FILTERS
# ============================================================

def test_filters_default_to_last_30_days():
    filters = AnalyticsFilters()
    assert (filters.end_date - filters.start_date).days == 30


def test_previous_period_has_same_length():
    filters = AnalyticsFilters(start_date="2024-03-01", end_date="2024-03-31")
    comparison = filters.comparison()
    assert str(comparison.start_date) == "2024-01-30"
    assert str(comparison.end_date) == "2024-02-29"


def test_previous_year_comparison():
    filters = AnalyticsFilters(start_date="2024-03-01", end_date="2024-03-31", comparison_period="previous_year")
    comparison = filters.comparison()
    assert str(comparison.start_date) == "2023-03-02"


@pytest.mark.asyncio
async def test_start_after_end_is_bad_request(client: AsyncClient):
    response = await client.get("/analytics/funnel", params={"start_date": "2024-04-01", "end_date": "2024-03-01"})
    assert response.status_code == 400
    assert "start_date" in response.json()["detail"]


@pytest.mark.asyncio
async def test_analytics_requires_auth(async_client: AsyncClient):
    assert (await async_client.get("/analytics/dashboard")).status_code == 401


# ============================================================
# FUNNEL
# ============================================================

@pytest.mark.asyncio
async def test_funnel_stages(client: AsyncClient, seeded):
    response = await client.get("/analytics/funnel", params=MARCH)

    assert response.status_code == 200
    data = response.json()
    assert [(s["stage"], s["count"]) for s in data["stages"]] == [
        ("Applications", 4),
        ("Interview - Technical", 3),
        ("Interview - Final", 1),
        ("Offer", 2),
        ("Hired", 1),
    ]
    assert [s["conversion_rate"] for s in data["stages"]] == [100.0, 75.0, 33.3, 200.0, 50.0]
    assert data["avg_time_to_hire"] == 10.0
    assert data["overall_conversion_rate"] == 25.0

    breakdown = {d["department"]: d for d in data["department_breakdown"]}
    assert breakdown["Engineering"]["interviews"] == 2
    assert breakdown["Engineering"]["conversion_rate"] == 50.0
    assert breakdown["Unassigned"]["applications"] == 2
    assert breakdown["Unassigned"]["interviews"] == 1


@pytest.mark.asyncio
async def test_funnel_filters(client: AsyncClient, seeded):
    by_source = (await client.get("/analytics/funnel", params={**MARCH, "source": "linkedin"})).json()
    by_department = (await client.get(
        "/analytics/funnel", params={**MARCH, "department": str(seeded["engineering"].id)}
    )).json()
    by_location = (await client.get("/analytics/funnel", params={**MARCH, "location": "berlin"})).json()
    by_job = (await client.get("/analytics/funnel", params={**MARCH, "job_id": str(seeded["sales"].id)})).json()

    assert by_source["stages"][0]["count"] == 2
    assert by_department["stages"][0]["count"] == 2
    assert by_location["stages"][0]["count"] == 2
    assert by_job["stages"][0]["count"] == 2
    assert by_job["overall_conversion_rate"] == 0.0


# ============================================================
# DASHBOARD
# ============================================================

@pytest.mark.asyncio
async def test_dashboard_kpis_compare_previous_period(client: AsyncClient, seeded):
    response = await client.get("/analytics/dashboard", params=MARCH)

    assert response.status_code == 200
    data = response.json()
    assert data["comparison_period"] == {"start_date": "2024-01-30", "end_date": "2024-02-29"}

    kpis = {k["key"]: k for k in data["kpis"]}
    assert kpis["applications"]["value"] == 4
    assert kpis["applications"]["previous_value"] == 1
    assert kpis["applications"]["change"] == 300.0
    assert kpis["applications"]["trend"] == "up"
    assert kpis["interviews"]["value"] == 4
    assert kpis["interviews"]["change"] == 100.0
    assert kpis["offers"]["value"] == 2
    assert kpis["hires"]["value"] == 1
    assert kpis["time_to_hire"]["format"] == "days"
    assert kpis["conversion_rate"]["value"] == 25.0

    assert len(data["application_trend"]) == 31
    assert data["application_trend"][0] == {"date": "2024-03-01", "applications": 1, "hires": 0}
    assert [j["title"] for j in data["top_jobs"]] == ["Backend Engineer", "Sales Rep"]
    assert [s["source"] for s in data["source_effectiveness"]] == ["careers-site", "linkedin"]


# ============================================================
# JOBS
# ============================================================

@pytest.mark.asyncio
async def test_jobs_performance(client: AsyncClient, seeded):
    data = (await client.get("/analytics/jobs", params=MARCH)).json()

    jobs = {j["title"]: j for j in data["jobs"]}
    assert set(jobs) == {"Backend Engineer", "Sales Rep"}
    backend = jobs["Backend Engineer"]
    assert backend["department"] == "Engineering"
    assert (backend["applications"], backend["interviews"], backend["offers"], backend["hires"]) == (2, 3, 2, 1)
    assert backend["time_to_fill"] == 15.0
    assert jobs["Sales Rep"]["time_to_fill"] is None

    assert [d["name"] for d in data["department_performance"]] == ["Engineering", "Unassigned"]
    assert [loc["name"] for loc in data["location_performance"]] == ["Berlin", "Remote"]
    assert data["monthly_trends"] == [{"month": "2024-03", "applications": 4, "hires": 1}]


# ============================================================
# INTERVIEWS
# ============================================================

@pytest.mark.asyncio
async def test_interview_metrics(client: AsyncClient, seeded):
    data = (await client.get("/analytics/interviews", params=MARCH)).json()

    assert data["total_interviews"] == 4
    assert data["pass_rate"] == 75.0
    assert data["avg_score"] == 6.5
    assert data["avg_duration"] == 45.0

    assert [i["interviewer"] for i in data["interviewers"]] == ["Ada", "Bob"]
    ada, bob = data["interviewers"]
    assert (ada["interviews"], ada["pass_rate"], ada["avg_score"]) == (2, 100.0, 8.5)
    assert (bob["pass_rate"], bob["avg_duration"]) == (50.0, 30.0)

    assert [(s["stage"], s["interviews"], s["pass_rate"]) for s in data["stages"]] == [
        ("Interview - Technical", 3, 66.7),
        ("Interview - Final", 1, 100.0),
    ]
    assert data["feedback_distribution"] == [
        {"rating": "Strong Yes", "count": 1},
        {"rating": "Yes", "count": 1},
        {"rating": "No", "count": 1},
    ]


# ============================================================
# SOURCES
# ============================================================

@pytest.mark.asyncio
async def test_source_performance(client: AsyncClient, seeded):
    data = (await client.get("/analytics/sources", params=MARCH)).json()

    sources = {s["source"]: s for s in data["sources"]}
    assert sources["linkedin"] == {
        "source": "linkedin", "applications": 2, "qualified": 2, "hires": 1,
        "qualified_rate": 100.0, "conversion_rate": 50.0,
    }
    assert sources["careers-site"]["qualified_rate"] == 50.0
    assert data["monthly_trends"] == [{"month": "2024-03", "counts": {"linkedin": 2, "careers-site": 2}}]


@pytest.mark.asyncio
async def test_other_tenant_sees_only_its_data(client_for, other_company_admin: User, seeded):
    data = (await client_for(other_company_admin).get("/analytics/funnel", params=MARCH)).json()
    assert data["stages"][0]["count"] == 1
