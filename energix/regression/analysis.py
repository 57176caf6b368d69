"""
SER Analysis Module

Builds the monthly consumption analysis table and the period summary of
the SER screen from monthly aggregates and backend coefficients.
"""

import logging
from typing import Iterable, List, Optional

from ..config import config
from ..data_models import MonthlyAggregate, SerAnalysisRow, SerSummary
from ..months import sort_by_month
from .interpreter import (
    Coefficients,
    calculate_improvement,
    calculate_reference_consumption,
    calculate_target_consumption,
)

# Configure logging
logger = logging.getLogger(__name__)


def build_ser_analysis(monthly: Iterable[MonthlyAggregate], coefficients: Optional[Coefficients],
                       improvement_goal: Optional[float] = None) -> List[SerAnalysisRow]:
    """
    Compute reference consumption, improvement and target for every month.

    Args:
        monthly: Monthly aggregates (one vehicle type)
        coefficients: ``{kilometrage, tonnage, intercept}`` or a RegressionResult
        improvement_goal: Reduction objective in percent (config default: 3)

    Returns:
        Calendar-ordered rows; ``improvement`` is None for months without
        consumption
    """
    goal = config.default_improvement_goal if improvement_goal is None else improvement_goal

    rows = []
    for item in monthly:
        reference = calculate_reference_consumption(coefficients, item.kilometrage, item.tonnage)
        improvement = calculate_improvement(item.consommation, reference) if item.consommation else None
        rows.append(SerAnalysisRow(
            **item.model_dump(include=set(MonthlyAggregate.model_fields)),
            reference_consumption=reference,
            improvement=improvement,
            target_consumption=calculate_target_consumption(item.consommation, goal),
        ))

    return sort_by_month(rows)


def summarize_ser_period(monthly: Iterable[MonthlyAggregate], coefficients: Optional[Coefficients],
                         improvement_goal: Optional[float] = None) -> SerSummary:
    """
    Summarize a whole period against its reference consumption.

    The reference is evaluated once on the period totals, so the intercept
    is counted a single time. Progress is expressed on a 0-100 scale
    relative to the improvement goal and only counts when actual
    consumption is at or below the reference.

    Args:
        monthly: Monthly aggregates of the period
        coefficients: ``{kilometrage, tonnage, intercept}`` or a RegressionResult
        improvement_goal: Reduction objective in percent (config default: 3)

    Returns:
        SerSummary
    """
    goal = config.default_improvement_goal if improvement_goal is None else improvement_goal
    monthly = list(monthly)

    total_consommation = sum(item.consommation for item in monthly)
    total_kilometrage = sum(item.kilometrage for item in monthly)
    total_tonnage = sum(item.tonnage for item in monthly)

    reference = calculate_reference_consumption(coefficients, total_kilometrage, total_tonnage)
    improvement = calculate_improvement(total_consommation, reference) if total_consommation > 0 else 0.0

    if improvement <= 0 and goal > 0:
        progress = min(100.0, abs(improvement) / goal * 100)
    else:
        progress = 0.0

    logger.info(
        f"SER period: {len(monthly)} months, actual {total_consommation:.2f} L, "
        f"reference {reference:.2f} L, improvement {improvement:.2f}%"
    )

    return SerSummary(
        total_consommation=total_consommation,
        total_kilometrage=total_kilometrage,
        total_tonnage=total_tonnage,
        total_reference_consumption=reference,
        improvement=improvement,
        target_consumption=calculate_target_consumption(total_consommation, goal),
        improvement_goal=goal,
        progress=progress,
    )
