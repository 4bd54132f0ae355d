from __future__ import annotations

from typing import Optional
from uuid import UUID

from careers_admin.models import ApiKey
from careers_admin.services.base import BaseService


class CompanyApiKeyService(BaseService):
    path = "/company-api-keys"

    async def generate(self, name: str, description: Optional[str] = None) -> ApiKey:
        """The returned secret_key is the plain secret; it is never shown again."""
        data = await self.client.post(self.path, {"name": name, "description": description})
        return self._one(ApiKey, data)

    async def list(self) -> list[ApiKey]:
        return self._many(ApiKey, await self.client.get(self.path))

    async def get(self, key_id: UUID) -> ApiKey:
        return self._one(ApiKey, await self.client.get(f"{self.path}/{key_id}"))

    async def delete(self, key_id: UUID) -> None:
        await self.client.delete(f"{self.path}/{key_id}")

    async def toggle(self, key_id: UUID) -> ApiKey:
        return self._one(ApiKey, await self.client.patch(f"{self.path}/{key_id}/toggle"))
