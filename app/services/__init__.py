from typing import Any, Generic, Type, TypeVar
from fastapi import Depends
from pydantic import ValidationError as PydanticValidationError
from redis.exceptions import RedisError
from types import FunctionType, MethodType
from asyncio import iscoroutinefunction

from app.database import get_kv_store
from app.exceptions import StorageError
from app.models import Record
from app.utils.redis import KVStore
from functools import wraps


class ExceptionHandlerMeta(type):
    def __new__(cls, name, bases, dct):
        for attr_name, attr_value in dct.items():
            if isinstance(attr_value, (FunctionType, MethodType)):
                if iscoroutinefunction(attr_value):
                    dct[attr_name] = cls.async_exception_handler(attr_value)
                else:
                    dct[attr_name] = cls.sync_exception_handler(attr_value)
        return super().__new__(cls, name, bases, dct)

    @staticmethod
    def sync_exception_handler(method):
        @wraps(method)
        def wrapper(*args, **kwargs):
            try:
                return method(*args, **kwargs)
            except RedisError as e:
                raise StorageError(f"Storage unavailable: {e}") from e

        return wrapper

    @staticmethod
    def async_exception_handler(method):
        @wraps(method)
        async def wrapper(*args, **kwargs):
            try:
                return await method(*args, **kwargs)
            except RedisError as e:
                raise StorageError(f"Storage unavailable: {e}") from e

        return wrapper


_T = TypeVar("_T", bound=Record)


class BaseService(metaclass=ExceptionHandlerMeta):
    def __init__(self, store: KVStore) -> None:
        super().__init__()
        self.store = store

    @classmethod
    async def get_service(cls, store: KVStore = Depends(get_kv_store)):
        return cls(store)


class _Records(Generic[_T]):
    model: Type[_T] = None
    key_prefix: str = None
    store: KVStore

    def __init__(self) -> None:
        super().__init__()
        if not self.model or not self.key_prefix:
            raise ValueError("model and key_prefix must be defined")

    def _key(self, id: str) -> str:
        return f"{self.key_prefix}:{id}"

    def _parse(self, data: Any) -> _T:
        try:
            return self.model.model_validate(data)
        except PydanticValidationError as e:
            raise StorageError(f"Malformed {self.model.__name__} record") from e


class RecordRequests(_Records[_T]):
    """One record per key: ``<key_prefix>:<id>``."""

    async def get(self, id: str) -> _T | None:
        data = await self.store.get(self._key(id))
        if data is None:
            return None
        return self._parse(data)

    async def get_list(self) -> list[_T]:
        data = await self.store.get_by_prefix(f"{self.key_prefix}:")
        return [self._parse(i) for i in data]

    async def put(self, instance: _T) -> _T:
        await self.store.set(self._key(instance.id), instance.dump())
        return instance

    async def delete(self, id: str):
        await self.store.delete(self._key(id))
        return True


class RecordListRequests(_Records[_T]):
    """A whole list of records under ``<key_prefix>:<owner_id>``, rewritten on every change."""

    async def get_list(self, owner_id: str) -> list[_T]:
        data = await self.store.get(self._key(owner_id))
        if data is None:
            return []
        if not isinstance(data, list):
            raise StorageError(f"Expected a list under {self._key(owner_id)}")
        return [self._parse(i) for i in data]

    async def put_list(self, owner_id: str, items: list[_T]):
        await self.store.set(self._key(owner_id), [i.dump() for i in items])

    async def append(self, owner_id: str, item: _T) -> _T:
        items = await self.get_list(owner_id)
        items.append(item)
        await self.put_list(owner_id, items)
        return item

    async def delete_list(self, owner_id: str):
        await self.store.delete(self._key(owner_id))
        return True
