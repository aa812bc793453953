"""
GWP registry: the active global-warming potential of each Kyoto gas.
"""

import logging
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from fleet_emissions.database.repositories import GwpConfigRepository
from fleet_emissions.pydantic_models.emission_context import GwpValues
from fleet_emissions.utils.constants import KYOTO_GASES

logger = logging.getLogger(__name__)


def gwp_values_from_configs(configs: Iterable) -> GwpValues:
    """
    Build a GwpValues snapshot from active GWP rows.

    Gases without a row get a GWP of zero. Rows for gases outside the Kyoto
    basket are ignored.

    Args:
        configs: Rows exposing gas_name and gwp_value

    Returns:
        GwpValues
    """
    values = {}
    for config in configs:
        gas = (config.gas_name or "").strip().lower()
        if gas not in KYOTO_GASES:
            logger.debug(f"Ignoring GWP row for unknown gas {config.gas_name!r}")
            continue
        values.setdefault(gas, config.gwp_value)

    missing = [gas for gas in KYOTO_GASES if gas not in values]
    if missing:
        logger.info(f"No active GWP value for {missing}; treating them as 0")
    return GwpValues.from_mapping(values)


class GwpRegistry:
    """Read-only access to the active GWP values."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = GwpConfigRepository(session)

    async def get_active_values(self) -> GwpValues:
        """Snapshot of the active GWP value per gas."""
        return gwp_values_from_configs(await self.repo.get_active())
