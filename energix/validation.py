"""
Record Validation Module

Advisory checks run before aggregation and emission calculations.
Errors are collected for every record and returned, never raised;
callers decide whether to continue with the available data.
"""

import logging
import math
from typing import Iterable, List, Optional

from .data_models import ValidationResult
from .records import RecordLike, is_finite_number, record_value

# Configure logging
logger = logging.getLogger(__name__)


def _is_negative(value) -> bool:
    return is_finite_number(value) and value < 0


def _is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return isinstance(value, float) and math.isnan(value)


def validate(records: Optional[Iterable[RecordLike]]) -> ValidationResult:
    """
    Check vehicle records for required fields and numeric sanity.

    Args:
        records: VehicleRecord models or backend mappings (may be empty)

    Returns:
        ValidationResult listing every problem found, 1-based record numbers
    """
    records = list(records or [])
    errors: List[str] = []

    if not records:
        errors.append('No records provided')
        return ValidationResult(is_valid=False, errors=errors)

    for index, record in enumerate(records, start=1):
        if _is_blank(record_value(record, 'mois')):
            errors.append(f"Record {index}: Missing month")

        consumption = record_value(record, 'consommationL')
        if not is_finite_number(consumption):
            errors.append(f"Record {index}: Invalid consumption value")
        elif consumption < 0:
            errors.append(f"Record {index}: Negative consumption value")

        if _is_negative(record_value(record, 'kilometrage')):
            errors.append(f"Record {index}: Negative kilometrage value")
        if _is_negative(record_value(record, 'produitsTonnes')):
            errors.append(f"Record {index}: Negative tonnage value")

    if errors:
        logger.info(f"Validation found {len(errors)} problems in {len(records)} records")

    return ValidationResult(is_valid=not errors, errors=errors)


# Name used by the emission analytics screen
validate_emission_data = validate
