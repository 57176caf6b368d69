from .data_models import (
    VehicleRecord,
    MonthlyAggregate,
    VehicleAggregate,
    VehicleTypeBreakdown,
    RegressionResult,
    EmissionData,
    ValidationResult,
    LinePoint,
    SerAnalysisRow,
    SerSummary,
    DashboardStats,
)
from .months import FRENCH_MONTHS, month_index, sort_by_month, get_french_month_name
from .validation import validate, validate_emission_data
from .aggregation import (
    aggregate_by_month,
    aggregate_by_vehicle,
    aggregate_by_type,
    merge_monthly_aggregates,
)
from .emissions import (
    FuelType,
    NoDataError,
    DIESEL_EMISSION_FACTOR,
    EMISSION_FACTORS,
    LCA_FACTORS,
    calculate_emissions,
    calculate_lca_score,
    process_emission_data,
)
from .regression import (
    reconstruct_line,
    extract_coefficients,
    calculate_reference_consumption,
    calculate_improvement,
    calculate_target_consumption,
    regression_quality,
    format_equation,
    build_ser_analysis,
    summarize_ser_period,
)
from .formatting import (
    format_number,
    format_currency,
    format_percentage,
    format_date,
    format_precise_number,
    format_file_size,
)
from .dashboard import calculate_dashboard_stats

__all__ = [
    'VehicleRecord',
    'MonthlyAggregate',
    'VehicleAggregate',
    'VehicleTypeBreakdown',
    'RegressionResult',
    'EmissionData',
    'ValidationResult',
    'LinePoint',
    'SerAnalysisRow',
    'SerSummary',
    'DashboardStats',
    'FRENCH_MONTHS',
    'month_index',
    'sort_by_month',
    'get_french_month_name',
    'validate',
    'validate_emission_data',
    'aggregate_by_month',
    'aggregate_by_vehicle',
    'aggregate_by_type',
    'merge_monthly_aggregates',
    'FuelType',
    'NoDataError',
    'DIESEL_EMISSION_FACTOR',
    'EMISSION_FACTORS',
    'LCA_FACTORS',
    'calculate_emissions',
    'calculate_lca_score',
    'process_emission_data',
    'reconstruct_line',
    'extract_coefficients',
    'calculate_reference_consumption',
    'calculate_improvement',
    'calculate_target_consumption',
    'regression_quality',
    'format_equation',
    'build_ser_analysis',
    'summarize_ser_period',
    'format_number',
    'format_currency',
    'format_percentage',
    'format_date',
    'format_precise_number',
    'format_file_size',
    'calculate_dashboard_stats',
]
