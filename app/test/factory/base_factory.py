"""
Base factory for async SQLAlchemy models.
"""
import asyncio
import inspect
from typing import Any

import factory
from factory.alchemy import SQLAlchemyOptions


class AsyncSQLAlchemyFactory(factory.Factory):
    """
    Factory whose instances are committed through an AsyncSession.

    ``await SomeFactory(**overrides)`` returns the persisted instance.
    """

    _options_class = SQLAlchemyOptions

    class Meta:
        abstract = True

    @classmethod
    async def create(cls, **kwargs) -> Any:
        return await super().create(**kwargs)

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        async def maker_coroutine():
            for key, value in kwargs.items():
                # SubFactory values arrive as Tasks
                if inspect.isawaitable(value):
                    kwargs[key] = await value
            return await cls._save(model_class, *args, **kwargs)

        # A Task can be awaited multiple times, unlike a coroutine
        return asyncio.create_task(maker_coroutine())

    @classmethod
    async def _save(cls, model_class, *args, **kwargs) -> Any:
        async with cls._meta.sqlalchemy_session() as session:
            obj = model_class(*args, **kwargs)
            session.add(obj)
            await session.commit()
            return obj

    @classmethod
    async def create_batch(cls, size: int, **kwargs) -> list[Any]:
        return [await cls.create(**kwargs) for _ in range(size)]
