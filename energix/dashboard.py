"""
Dashboard summary: fleet totals and environmental indicators derived
from vehicle records for the overview cards.
"""

import logging
import math
from typing import Iterable, Optional

from .aggregation import aggregate_by_month, aggregate_by_type
from .config import COST_SAVINGS_PER_LITER, UNKNOWN_LABEL
from .data_models import DashboardStats
from .emissions import calculate_emissions
from .records import RecordLike, records_to_frame

# Configure logging
logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> float:
    # dashboard cards show whole units, .5 rounds up
    return float(math.floor(value + 0.5))


def calculate_dashboard_stats(records: Optional[Iterable[RecordLike]]) -> DashboardStats:
    """
    Calculate the overview statistics of a set of records.

    Empty input returns an all-zero summary so the dashboard can show its
    empty state.

    Args:
        records: VehicleRecord models or backend mappings

    Returns:
        DashboardStats with totals, fleet-level IPE (L/100km), rounded CO2
        (kg, diesel) and rounded cost savings potential
    """
    records = list(records or [])
    df = records_to_frame(records)
    if df.empty:
        logger.info("No records for dashboard statistics")
        return DashboardStats()

    total_consommation = float(df['consommationL'].sum())
    total_kilometrage = float(df['kilometrage'].sum())
    vehicles = df.loc[df['matricule'] != UNKNOWN_LABEL, 'matricule'].nunique()

    avg_ipe = total_consommation / total_kilometrage * 100 if total_kilometrage > 0 else 0.0

    return DashboardStats(
        total_vehicles=int(vehicles),
        total_consommation=total_consommation,
        total_consommation_tep=float(df['consommationTEP'].sum()),
        total_cout_dt=float(df['coutDT'].sum()),
        total_kilometrage=total_kilometrage,
        total_tonnage=float(df['produitsTonnes'].sum()),
        avg_ipe=avg_ipe,
        co2_emissions=_round_half_up(calculate_emissions(total_consommation)),
        cost_savings=_round_half_up(total_consommation * COST_SAVINGS_PER_LITER),
        monthly_data=aggregate_by_month(records),
        vehicle_type_breakdown=aggregate_by_type(records),
    )
