"""
Temporal emission factor lookup primitives.

Factors are append-only and effective-dated. Resolving the factor in effect
for a (macro fuel type, vehicle fuel type) pair at a reference date is done in
two steps shared by the single and the bulk paths:

1. the repository returns every candidate effective at or before the
   reference date, newest first;
2. a FactorIndex keeps the first row seen per (macro fuel type, override) key,
   then an ordered list of lookup strategies picks the tier that applies
   (specific override first, category default second).

Because both paths go through the same index and strategies, a bulk lookup
returns exactly what a single lookup would for the same inputs.
"""

import logging
from typing import Any, Hashable, Iterable, Optional, Sequence
from uuid import UUID

logger = logging.getLogger(__name__)

IndexKey = tuple[UUID, Optional[str]]

# Returned by a strategy that does not apply to the fuel type being resolved
MISSING = object()


class FactorLookupStrategy:
    """One tier of the override/default fallback."""

    name = "base"

    def override_key(self, fuel_type: Optional[str]) -> Optional[Hashable]:
        """
        Return the override value this tier looks for, or ``MISSING`` to skip.

        Args:
            fuel_type: Vehicle fuel type being resolved
        """
        raise NotImplementedError


class SpecificOverrideLookup(FactorLookupStrategy):
    """Factors whose override equals the vehicle fuel type exactly."""

    name = "specific"

    def override_key(self, fuel_type):
        return fuel_type if fuel_type else MISSING


class CategoryDefaultLookup(FactorLookupStrategy):
    """Factors with no override: the default of the macro category."""

    name = "default"

    def override_key(self, fuel_type):
        return None


DEFAULT_LOOKUP_STRATEGIES: tuple[FactorLookupStrategy, ...] = (
    SpecificOverrideLookup(),
    CategoryDefaultLookup(),
)


class FactorIndex:
    """
    Immutable map of (macro fuel type id, override) -> factor in effect.

    Built from rows ordered newest first within each key; the first row seen
    for a key wins and later (older) rows are ignored.
    """

    def __init__(self, entries: dict[IndexKey, Any]):
        self._entries = dict(entries)

    @classmethod
    def from_factors(cls, factors: Iterable[Any]) -> "FactorIndex":
        """
        Build an index from factor rows.

        Args:
            factors: Rows exposing macro_fuel_type_id and fuel_type, newest first per key

        Returns:
            FactorIndex
        """
        entries: dict[IndexKey, Any] = {}
        for factor in factors:
            key = (factor.macro_fuel_type_id, factor.fuel_type)
            if key not in entries:
                entries[key] = factor
        return cls(entries)

    def __len__(self):
        return len(self._entries)

    def __contains__(self, key):
        return key in self._entries

    def lookup(
        self,
        macro_fuel_type_id: UUID,
        fuel_type: Optional[str],
        strategies: Sequence[FactorLookupStrategy] = DEFAULT_LOOKUP_STRATEGIES,
    ) -> Optional[Any]:
        """
        Find the factor in effect for a fuel type within a macro fuel type.

        Args:
            macro_fuel_type_id: Macro fuel type id
            fuel_type: Vehicle fuel type (None = category default only)
            strategies: Tiers to try, in order

        Returns:
            The factor row, or None if no tier matched
        """
        for strategy in strategies:
            override = strategy.override_key(fuel_type)
            if override is MISSING:
                continue
            factor = self._entries.get((macro_fuel_type_id, override))
            if factor is not None:
                logger.debug(
                    f"Factor for macro fuel type {macro_fuel_type_id} / {fuel_type!r} "
                    f"found via {strategy.name} lookup"
                )
                return factor
        return None
