"""Headcount requests and their review."""
from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from careers_admin.models import HeadcountRequest, Job
from careers_admin.services.base import BaseService


class HeadcountService(BaseService):
    path = "/headcount-requests"

    async def list(self, status: Optional[str] = None) -> list[HeadcountRequest]:
        return self._many(HeadcountRequest, await self.client.get(self.path, params={"status": status}))

    async def get(self, request_id: UUID) -> HeadcountRequest:
        return self._one(HeadcountRequest, await self.client.get(f"{self.path}/{request_id}"))

    async def create(self, data: Any) -> HeadcountRequest:
        return self._one(HeadcountRequest, await self.client.post(self.path, data))

    async def update(self, request_id: UUID, data: Any) -> HeadcountRequest:
        return self._one(HeadcountRequest, await self.client.patch(f"{self.path}/{request_id}", data))

    async def delete(self, request_id: UUID) -> None:
        await self.client.delete(f"{self.path}/{request_id}")

    async def approve(self, request_id: UUID, review_notes: Optional[str] = None) -> HeadcountRequest:
        data = await self.client.post(f"{self.path}/{request_id}/approve", {"review_notes": review_notes})
        return self._one(HeadcountRequest, data)

    async def reject(self, request_id: UUID, review_notes: Optional[str] = None) -> HeadcountRequest:
        data = await self.client.post(f"{self.path}/{request_id}/reject", {"review_notes": review_notes})
        return self._one(HeadcountRequest, data)

    async def create_job(self, request_id: UUID, overrides: Any = None) -> Job:
        return self._one(Job, await self.client.post(f"{self.path}/{request_id}/create-job", overrides))

    async def approved_without_jobs(self) -> list[HeadcountRequest]:
        return self._many(HeadcountRequest, await self.client.get(f"{self.path}/approved-without-jobs"))
