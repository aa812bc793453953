"""
Base factory for async SQLAlchemy models following kkb_fastapi pattern.

Factories are awaited: ``vehicle = await VehicleFactory(license_plate="AB123CD")``.
Each create runs in its own committed session, so the row is visible to the
sessions used by the code under test.
"""
import asyncio
import inspect
from typing import Any

import factory
from factory.alchemy import SQLAlchemyOptions


class AsyncSQLAlchemyFactory(factory.Factory):
    """Base factory that persists model instances through an async session."""

    _options_class = SQLAlchemyOptions

    class Meta:
        abstract = True

    @classmethod
    async def create(cls, **kwargs) -> Any:
        """
        Build, persist and return an instance.

        Args:
            **kwargs: Attributes overriding the factory declarations

        Returns:
            Committed model instance
        """
        return await super().create(**kwargs)

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        async def persist():
            for key, value in kwargs.items():
                # Lazy attributes may resolve to pending tasks
                if inspect.isawaitable(value):
                    kwargs[key] = await value

            async with cls._meta.sqlalchemy_session() as session:
                instance = model_class(*args, **kwargs)
                session.add(instance)
                await session.commit()
                return instance

        # A Task can be awaited more than once, a bare coroutine cannot
        return asyncio.ensure_future(persist())

    @classmethod
    async def create_batch(cls, size: int, **kwargs) -> list[Any]:
        """Create ``size`` instances sharing the same overrides."""
        return [await cls.create(**kwargs) for _ in range(size)]
