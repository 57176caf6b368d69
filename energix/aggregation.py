"""
Aggregation Module

Groups vehicle-month records into chart series.

Additive quantities (consumption, mileage, tonnage, cost) are summed per
group. IPE values are efficiency ratios: they are averaged over the
group's record count, never summed.

Functions:
- aggregate_by_month: Monthly totals and average IPE, calendar-ordered
- aggregate_by_vehicle: Same accumulation per registration number
- aggregate_by_type: Consumption breakdown per vehicle type
- merge_monthly_aggregates: Combine monthly series of several vehicles
"""

import logging
from typing import Iterable, List, Optional

import pandas as pd

from .data_models import MonthlyAggregate, VehicleAggregate, VehicleTypeBreakdown
from .emissions import calculate_emissions
from .months import sort_by_month
from .records import RecordLike, records_to_frame

# Configure logging
logger = logging.getLogger(__name__)

SUM_COLUMNS = ['consommationL', 'kilometrage', 'produitsTonnes', 'coutDT']
MEAN_COLUMNS = ['ipeL100km', 'ipeL100TonneKm']


def _accumulate(df: pd.DataFrame, key: str, first_columns: List[str]) -> pd.DataFrame:
    """
    Group a normalized frame by ``key`` in first-appearance order.

    Returns one row per group with summed additive columns, IPE means
    (0 for empty groups), ``count`` and the first value of ``first_columns``.
    """
    grouped = df.groupby(key, sort=False)
    result = grouped[SUM_COLUMNS].sum()
    result['count'] = grouped.size()
    ipe_sums = grouped[MEAN_COLUMNS].sum()
    for col in MEAN_COLUMNS:
        result[col] = (ipe_sums[col] / result['count']).where(result['count'] > 0, 0.0)
    for col in first_columns:
        result[col] = grouped[col].first()
    return result.reset_index()


def aggregate_by_month(records: Optional[Iterable[RecordLike]], sort: bool = True) -> List[MonthlyAggregate]:
    """
    Calculate monthly aggregates from vehicle records.

    Records without a month are grouped under "Unknown" rather than dropped.

    Args:
        records: VehicleRecord models or backend mappings
        sort: Calendar order when True, first-appearance order otherwise

    Returns:
        List of MonthlyAggregate, one per month label
    """
    df = records_to_frame(records)
    if df.empty:
        return []

    monthly = _accumulate(df, 'mois', ['year'])
    aggregates = [
        MonthlyAggregate(
            month=row['mois'],
            year=row['year'],
            consommation=float(row['consommationL']),
            kilometrage=float(row['kilometrage']),
            produits_tonnes=float(row['produitsTonnes']),
            tonnage=float(row['produitsTonnes']),
            cout_dt=float(row['coutDT']),
            ipe=float(row['ipeL100km']),
            ipe_tonne=float(row['ipeL100TonneKm']),
            count=int(row['count']),
        )
        for _, row in monthly.iterrows()
    ]
    logger.info(f"Aggregated {len(df)} records into {len(aggregates)} months")

    return sort_by_month(aggregates) if sort else aggregates


def aggregate_by_vehicle(records: Optional[Iterable[RecordLike]]) -> List[VehicleAggregate]:
    """
    Calculate per-vehicle aggregates (annual card metrics).

    Args:
        records: VehicleRecord models or backend mappings

    Returns:
        List of VehicleAggregate in first-appearance order of ``matricule``
    """
    df = records_to_frame(records)
    if df.empty:
        return []

    vehicles = _accumulate(df, 'matricule', ['type'])
    aggregates = [
        VehicleAggregate(
            matricule=row['matricule'],
            type=row['type'],
            consommation=float(row['consommationL']),
            kilometrage=float(row['kilometrage']),
            produits_tonnes=float(row['produitsTonnes']),
            cout_dt=float(row['coutDT']),
            ipe=float(row['ipeL100km']),
            ipe_tonne=float(row['ipeL100TonneKm']),
            count=int(row['count']),
            emissions=calculate_emissions(float(row['consommationL'])),
        )
        for _, row in vehicles.iterrows()
    ]
    logger.info(f"Aggregated {len(df)} records into {len(aggregates)} vehicles")
    return aggregates


def aggregate_by_type(records: Optional[Iterable[RecordLike]]) -> List[VehicleTypeBreakdown]:
    """Consumption breakdown by vehicle type, in first-appearance order."""
    df = records_to_frame(records)
    if df.empty:
        return []

    breakdown = df.groupby('type', sort=False)['consommationL'].sum()
    return [VehicleTypeBreakdown(name=str(name), value=float(value)) for name, value in breakdown.items()]


def merge_monthly_aggregates(aggregates: Iterable[MonthlyAggregate]) -> List[MonthlyAggregate]:
    """
    Merge monthly series of several vehicles into one series.

    Additive fields are summed; IPE averages are re-weighted by each
    aggregate's record count so the result equals the average over all
    underlying records.

    Args:
        aggregates: MonthlyAggregate items, possibly several per month

    Returns:
        Calendar-ordered list with one MonthlyAggregate per month
    """
    merged = {}
    for item in aggregates:
        current = merged.get(item.month)
        if current is None:
            merged[item.month] = item.model_copy()
            continue

        count = current.count + item.count
        if count > 0:
            ipe = (current.ipe * current.count + item.ipe * item.count) / count
            ipe_tonne = (current.ipe_tonne * current.count + item.ipe_tonne * item.count) / count
        else:
            ipe = ipe_tonne = 0.0

        merged[item.month] = current.model_copy(update={
            'consommation': current.consommation + item.consommation,
            'kilometrage': current.kilometrage + item.kilometrage,
            'produits_tonnes': current.produits_tonnes + item.produits_tonnes,
            'tonnage': current.tonnage + item.tonnage,
            'cout_dt': current.cout_dt + item.cout_dt,
            'ipe': ipe,
            'ipe_tonne': ipe_tonne,
            'count': count,
        })

    return sort_by_month(merged.values())
