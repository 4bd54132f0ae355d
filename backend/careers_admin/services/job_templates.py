from __future__ import annotations

from typing import Any
from uuid import UUID

from careers_admin.models import JobTemplate
from careers_admin.services.base import BaseService


class JobTemplateService(BaseService):
    path = "/job-templates"

    async def list(self) -> list[JobTemplate]:
        return self._many(JobTemplate, await self.client.get(self.path))

    async def for_job_role(self, job_role_id: UUID) -> list[JobTemplate]:
        return self._many(JobTemplate, await self.client.get(f"{self.path}/role/{job_role_id}"))

    async def get(self, template_id: UUID) -> JobTemplate:
        return self._one(JobTemplate, await self.client.get(f"{self.path}/{template_id}"))

    async def create(self, data: Any) -> JobTemplate:
        return self._one(JobTemplate, await self.client.post(self.path, data))

    async def update(self, template_id: UUID, data: Any) -> JobTemplate:
        return self._one(JobTemplate, await self.client.patch(f"{self.path}/{template_id}", data))

    async def delete(self, template_id: UUID) -> None:
        await self.client.delete(f"{self.path}/{template_id}")
