"""Analytics and dashboard statistics."""
from __future__ import annotations

from datetime import date
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel

from careers_admin.funnel import normalize_funnel_data
from careers_admin.models import (
    DashboardAnalytics,
    DashboardStats,
    FunnelAnalytics,
    InterviewAnalytics,
    JobsAnalytics,
    SourceAnalytics,
)
from careers_admin.services.base import BaseService


class AnalyticsFilters(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    department: Optional[UUID] = None
    job_id: Optional[UUID] = None
    location: Optional[str] = None
    source: Optional[str] = None
    comparison_period: Optional[str] = None

    def to_params(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class AnalyticsService(BaseService):

    async def _get(self, section: str, filters: Optional[AnalyticsFilters]) -> Any:
        return await self.client.get(f"/analytics/{section}", params=filters.to_params() if filters else None)

    async def dashboard(self, filters: Optional[AnalyticsFilters] = None) -> DashboardAnalytics:
        return self._one(DashboardAnalytics, await self._get("dashboard", filters))

    async def funnel(self, filters: Optional[AnalyticsFilters] = None) -> FunnelAnalytics:
        """Funnel with interview stages folded into a single Interview step."""
        funnel = self._one(FunnelAnalytics, await self._get("funnel", filters))
        funnel.stages = normalize_funnel_data(funnel.stages)
        return funnel

    async def jobs(self, filters: Optional[AnalyticsFilters] = None) -> JobsAnalytics:
        return self._one(JobsAnalytics, await self._get("jobs", filters))

    async def interviews(self, filters: Optional[AnalyticsFilters] = None) -> InterviewAnalytics:
        return self._one(InterviewAnalytics, await self._get("interviews", filters))

    async def sources(self, filters: Optional[AnalyticsFilters] = None) -> SourceAnalytics:
        return self._one(SourceAnalytics, await self._get("sources", filters))


class DashboardService(BaseService):

    async def get_stats(self) -> DashboardStats:
        return self._one(DashboardStats, await self.client.get("/admin/dashboard/stats"))
