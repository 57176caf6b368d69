"""
Emission / LCA Conversion Module

Converts fuel consumption (litres) into direct CO2 emissions (kg) and a
life-cycle-assessment impact score using fixed per-fuel factors.

Fuel type is not tracked per record in the fleet spreadsheets yet, so
every record-level conversion uses diesel unless told otherwise.
"""

import logging
from enum import Enum
from typing import Dict, Iterable, Optional, Union

from .config import UNKNOWN_LABEL
from .data_models import EmissionData, MonthlyValue
from .months import sort_by_month
from .records import RecordLike, records_to_frame

# Configure logging
logger = logging.getLogger(__name__)


class FuelType(str, Enum):
    DIESEL = 'DIESEL'
    ESSENCE = 'ESSENCE'
    ELECTRIC = 'ELECTRIC'


# kg CO2 per litre. Every diesel conversion must go through this constant.
DIESEL_EMISSION_FACTOR = 2.68

EMISSION_FACTORS: Dict[FuelType, float] = {
    FuelType.DIESEL: DIESEL_EMISSION_FACTOR,
    FuelType.ESSENCE: 2.31,
    FuelType.ELECTRIC: 0.0,  # direct emissions only
}

# Dimensionless environmental impact weight per litre
LCA_FACTORS: Dict[FuelType, float] = {
    FuelType.DIESEL: 1.0,
    FuelType.ESSENCE: 0.9,
    FuelType.ELECTRIC: 0.5,
}


class NoDataError(ValueError):
    """Raised when an emission total is requested for an empty dataset."""


def _fuel(fuel_type: Union[FuelType, str]) -> FuelType:
    if isinstance(fuel_type, FuelType):
        return fuel_type
    try:
        return FuelType(str(fuel_type).upper())
    except ValueError:
        raise ValueError(
            f"Unknown fuel type {fuel_type!r}, expected one of {[f.value for f in FuelType]}"
        ) from None


def calculate_emissions(consumption: float, fuel_type: Union[FuelType, str] = FuelType.DIESEL) -> float:
    """Calculate CO2 emissions (kg) from fuel consumption (litres)."""
    return consumption * EMISSION_FACTORS[_fuel(fuel_type)]


def calculate_lca_score(consumption: float, fuel_type: Union[FuelType, str] = FuelType.DIESEL) -> float:
    """Calculate the LCA impact score of a fuel consumption (litres)."""
    return consumption * LCA_FACTORS[_fuel(fuel_type)]


def process_emission_data(records: Optional[Iterable[RecordLike]], vehicle_type: str,
                          fuel_type: Union[FuelType, str] = FuelType.DIESEL) -> EmissionData:
    """
    Process vehicle records into emission and LCA data for visualization.

    Args:
        records: Vehicle records from the backend
        vehicle_type: Type of vehicle being analyzed (e.g. "camions")
        fuel_type: Fuel used for the conversion factors

    Returns:
        EmissionData with totals and calendar-ordered monthly emissions

    Raises:
        NoDataError: if there are no records; an empty dataset must not be
            reported as zero emissions
    """
    df = records_to_frame(records)
    if df.empty:
        raise NoDataError("No records available for emission calculation")

    fuel = _fuel(fuel_type)
    monthly = df.groupby('mois', sort=False)['consommationL'].sum()
    total_consumption = float(monthly.sum())

    monthly_emissions = sort_by_month(
        [MonthlyValue(month=str(month), value=calculate_emissions(float(consumption), fuel))
         for month, consumption in monthly.items()]
    )

    if UNKNOWN_LABEL in monthly.index:
        logger.warning(f"{vehicle_type}: some records have no month, grouped under '{UNKNOWN_LABEL}'")

    logger.info(
        f"Emissions for {vehicle_type}: {len(df)} records, {len(monthly)} months, "
        f"{total_consumption:.2f} L {fuel.value}"
    )

    return EmissionData(
        total_emissions=calculate_emissions(total_consumption, fuel),
        lca_score=calculate_lca_score(total_consumption, fuel),
        monthly_emissions=monthly_emissions,
        vehicle_type=vehicle_type,
    )
