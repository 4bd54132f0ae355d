"""Audit log (admins) and the current user's notifications."""
from __future__ import annotations

from uuid import UUID

from careers_admin.models import Notification, NotificationPage, UserLog, UserLogPage
from careers_admin.services.base import BaseService


class UserLogService(BaseService):
    path = "/user-logs"

    async def list(self, page: int = 1, limit: int = 20) -> UserLogPage:
        return self._one(UserLogPage, await self.client.get(self.path, params={"page": page, "limit": limit}))

    async def for_user(self, user_id: UUID) -> list[UserLog]:
        return self._many(UserLog, await self.client.get(f"{self.path}/user/{user_id}"))

    async def for_resource(self, resource_type: str, resource_id: str) -> list[UserLog]:
        return self._many(UserLog, await self.client.get(f"{self.path}/resource/{resource_type}/{resource_id}"))


class NotificationService(BaseService):
    path = "/notifications"

    async def list(self, limit: int = 50, skip: int = 0) -> NotificationPage:
        return self._one(NotificationPage, await self.client.get(self.path, params={"limit": limit, "skip": skip}))

    async def unread_count(self) -> int:
        return (await self.client.get(f"{self.path}/unread-count"))["count"]

    async def mark_read(self, notification_id: UUID) -> Notification:
        return self._one(Notification, await self.client.post(f"{self.path}/{notification_id}/read"))

    async def mark_all_read(self) -> None:
        await self.client.post(f"{self.path}/mark-all-read")

    async def delete(self, notification_id: UUID) -> None:
        await self.client.delete(f"{self.path}/{notification_id}")

    async def delete_all(self) -> None:
        await self.client.delete(self.path)
