"""
Record normalization shared by the validator, aggregators and emission
conversion. Accepts ``VehicleRecord`` models or plain backend mappings.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

import numpy as np
import pandas as pd

from .config import UNKNOWN_LABEL
from .data_models import VehicleRecord

# Configure logging
logger = logging.getLogger(__name__)

RecordLike = Union[VehicleRecord, Mapping[str, Any]]

NUMERIC_FIELDS = [
    'consommationL', 'consommationTEP', 'coutDT', 'kilometrage',
    'produitsTonnes', 'ipeL100km', 'ipeL100TonneKm'
]
LABEL_FIELDS = ['id', 'type', 'matricule', 'mois', 'year', 'region']

# Backend name -> model attribute, for mappings written with Python names
_SNAKE_NAMES = {(info.alias or field): field for field, info in VehicleRecord.model_fields.items()}


def record_value(record: RecordLike, name: str) -> Any:
    """Return the raw (unconverted) value of a backend field of a record."""
    if isinstance(record, VehicleRecord):
        return getattr(record, _SNAKE_NAMES.get(name, name), None)
    if isinstance(record, Mapping):
        if name in record:
            return record[name]
        return record.get(_SNAKE_NAMES.get(name, name))
    return getattr(record, _SNAKE_NAMES.get(name, name), None)


def is_finite_number(value: Any) -> bool:
    """True for real numbers that are neither NaN nor infinite (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
        return False
    return bool(np.isfinite(value))


def _as_row(record: RecordLike) -> dict:
    return {name: record_value(record, name) for name in LABEL_FIELDS + NUMERIC_FIELDS}


def records_to_frame(records: Optional[Iterable[RecordLike]]) -> pd.DataFrame:
    """
    Normalize records into a DataFrame ready for grouping.

    Numeric fields are coerced with ``pd.to_numeric``; missing, non-numeric
    and non-finite values become 0. Missing labels become ``"Unknown"``
    (``year`` and ``region`` become empty strings). Records whose
    consumption had to be coerced are counted in a warning.

    Args:
        records: VehicleRecord models or backend mappings

    Returns:
        DataFrame with one row per record, in input order
    """
    rows: List[dict] = [_as_row(record) for record in (records or [])]
    df = pd.DataFrame(rows, columns=LABEL_FIELDS + NUMERIC_FIELDS)
    if df.empty:
        return df

    for col in NUMERIC_FIELDS:
        raw = df[col]
        # bools are not measurements
        raw = raw.where(~raw.map(lambda v: isinstance(v, bool)), np.nan)
        converted = pd.to_numeric(raw, errors='coerce').astype(float)
        converted = converted.replace([np.inf, -np.inf], np.nan)
        if col == 'consommationL':
            coerced = int(converted.isna().sum())
            if coerced:
                logger.warning(f"{coerced} of {len(df)} records have no valid consumption, counted as 0")
        df[col] = converted.fillna(0.0)

    for col in ['type', 'matricule', 'mois']:
        labels = df[col].where(df[col].notna() & (df[col].astype(str).str.strip() != ''), UNKNOWN_LABEL)
        df[col] = labels.astype(str)

    for col in ['year', 'region']:
        df[col] = df[col].where(df[col].notna(), '').astype(str)

    return df
