"""
Emission Aggregation Service.

Rolls per-vehicle emission reports up to fleet totals, per effective fuel
type and overall. Pure: it works on already calculated reports.
"""

import logging
from collections import defaultdict
from typing import Iterable

from fleet_emissions.pydantic_models.emission_context import PerGasResult
from fleet_emissions.pydantic_models.vehicle import (
    FleetEmissionSummary,
    FuelTypeEmissionSummary,
    VehicleEmissionReport,
)
from fleet_emissions.services.calculators.emission_calculator import (
    calculate_delta,
    round2,
)
from fleet_emissions.services.calculators.unit_converter import ZERO
from fleet_emissions.utils.constants import KYOTO_GASES

logger = logging.getLogger(__name__)


class EmissionAggregator:
    """
    Service for aggregating vehicle emission reports.

    Aggregates:
    - Theoretical, real and delta per effective fuel type
    - The same totals for the whole fleet
    - Real emissions per gas for the whole fleet
    """

    @staticmethod
    def _fuel_type_summary(
        fuel_type: str, reports: list[VehicleEmissionReport]
    ) -> FuelTypeEmissionSummary:
        theoretical = sum((r.theoretical for r in reports), ZERO)
        real = sum((r.real for r in reports), ZERO)
        return FuelTypeEmissionSummary(
            fuel_type=fuel_type,
            vehicle_count=len(reports),
            km_travelled=sum((r.km_travelled for r in reports), ZERO),
            theoretical=round2(theoretical),
            real=round2(real),
            delta=calculate_delta(theoretical, real),
        )

    @classmethod
    def aggregate(cls, reports: Iterable[VehicleEmissionReport]) -> FleetEmissionSummary:
        """
        Aggregate vehicle reports into a fleet summary.

        Totals are sums of the already rounded per-vehicle figures, so they
        always reconcile with the rows they summarize.

        Args:
            reports: Per-vehicle emission reports

        Returns:
            FleetEmissionSummary, with fuel types in alphabetical order
        """
        reports = list(reports)

        by_fuel_type: dict[str, list[VehicleEmissionReport]] = defaultdict(list)
        for report in reports:
            by_fuel_type[report.fuel_type].append(report)

        per_gas = {gas: ZERO for gas in KYOTO_GASES}
        for report in reports:
            for gas, value in report.real_per_gas.items():
                per_gas[gas] += value

        theoretical = sum((r.theoretical for r in reports), ZERO)
        real = sum((r.real for r in reports), ZERO)

        logger.info(
            f"Aggregated {len(reports)} vehicle reports across {len(by_fuel_type)} fuel types"
        )

        return FleetEmissionSummary(
            vehicle_count=len(reports),
            km_travelled=sum((r.km_travelled for r in reports), ZERO),
            theoretical=round2(theoretical),
            real=round2(real),
            real_per_gas=PerGasResult(**{gas: round2(v) for gas, v in per_gas.items()}),
            delta=calculate_delta(theoretical, real),
            by_fuel_type=[
                cls._fuel_type_summary(fuel_type, by_fuel_type[fuel_type])
                for fuel_type in sorted(by_fuel_type)
            ],
        )
