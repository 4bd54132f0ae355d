from typing import Any, Iterable, Type, TypeVar

from pydantic import BaseModel

from careers_admin.client import ApiClient

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseService:
    """One method per endpoint; responses are parsed into models."""

    def __init__(self, client: ApiClient):
        self.client = client

    @staticmethod
    def _one(model: Type[ModelT], data: Any) -> ModelT:
        return model.model_validate(data)

    @staticmethod
    def _many(model: Type[ModelT], data: Iterable[Any]) -> list[ModelT]:
        return [model.model_validate(item) for item in data or []]
