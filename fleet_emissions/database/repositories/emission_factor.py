"""
Repository for EmissionFactor database operations.

Handles all database interactions for effective-dated emission factors.
"""
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_emissions.database.repositories.base import BaseRepository
from fleet_emissions.database.schemas import EmissionFactorDBModel, MacroFuelTypeDBModel


class EmissionFactorRepository(BaseRepository[EmissionFactorDBModel]):
    """Repository for emission factor operations."""

    def __init__(self, session: AsyncSession):
        """
        Initialize emission factor repository.

        Args:
            session: Async database session
        """
        super().__init__(EmissionFactorDBModel, session)

    def _newest_first(self, stmt):
        # effective_date decides; created_at and id only make ties deterministic
        return stmt.order_by(
            self.model.effective_date.desc(),
            self.model.created_at.desc(),
            self.model.id.desc(),
        )

    async def get_candidates(
        self,
        macro_fuel_type_id: UUID,
        fuel_type: Optional[str],
        reference_date: date,
    ) -> List[EmissionFactorDBModel]:
        """
        Get the factors that can apply to a fuel type within one macro fuel type.

        Returns both the rows overriding ``fuel_type`` and the category
        defaults, restricted to those effective at or before the reference
        date, newest first.

        Args:
            macro_fuel_type_id: Macro fuel type the factors belong to
            fuel_type: Vehicle fuel type override to include (None = defaults only)
            reference_date: Only factors with effective_date <= this date

        Returns:
            List of emission factors, newest first
        """
        override_clause = self.model.fuel_type.is_(None)
        if fuel_type is not None:
            override_clause = or_(override_clause, self.model.fuel_type == fuel_type)

        stmt = self._newest_first(
            select(self.model).where(
                self.model.macro_fuel_type_id == macro_fuel_type_id,
                self.model.effective_date <= reference_date,
                override_clause,
            )
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().unique().all())

    async def get_effective_before(
        self, reference_date: date
    ) -> List[EmissionFactorDBModel]:
        """
        Get every factor effective at or before the reference date.

        Ordered by macro fuel type, then newest first, so the first row seen
        for a (macro fuel type, override) key is the one in effect.

        Args:
            reference_date: Only factors with effective_date <= this date

        Returns:
            List of emission factors
        """
        stmt = self._newest_first(
            select(self.model)
            .where(self.model.effective_date <= reference_date)
            .order_by(self.model.macro_fuel_type_id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().unique().all())

    def _filtered(
        self,
        stmt,
        macro_fuel_type_id: Optional[UUID] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ):
        if macro_fuel_type_id is not None:
            stmt = stmt.where(self.model.macro_fuel_type_id == macro_fuel_type_id)
        if date_from is not None:
            stmt = stmt.where(self.model.effective_date >= date_from)
        if date_to is not None:
            stmt = stmt.where(self.model.effective_date <= date_to)
        return stmt

    async def search(
        self,
        macro_fuel_type_id: Optional[UUID] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[EmissionFactorDBModel]:
        """
        List factors for the catalog view.

        Ordered by macro fuel type name, then effective date descending.

        Args:
            macro_fuel_type_id: Optional macro fuel type filter
            date_from: Optional lower bound on effective_date
            date_to: Optional upper bound on effective_date
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of emission factors
        """
        stmt = (
            select(self.model)
            .join(MacroFuelTypeDBModel, self.model.macro_fuel_type_id == MacroFuelTypeDBModel.id)
            .order_by(MacroFuelTypeDBModel.name.asc(), self.model.effective_date.desc())
        )
        stmt = self._filtered(stmt, macro_fuel_type_id, date_from, date_to)
        stmt = stmt.offset(skip).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().unique().all())

    async def count_matching(
        self,
        macro_fuel_type_id: Optional[UUID] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> int:
        """Count factors matching the catalog view filters."""
        stmt = self._filtered(
            select(func.count()).select_from(self.model),
            macro_fuel_type_id,
            date_from,
            date_to,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
