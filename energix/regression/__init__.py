"""
Regression Interpretation Module

Consumes regressions fitted by the backend. No fitting happens here.

Key Components:
- interpreter: Line reconstruction, reference consumption, improvement and
  target percentages, R² quality label, equation text
- analysis: Monthly SER table and period summary
"""

from .interpreter import (
    reconstruct_line,
    extract_coefficients,
    calculate_reference_consumption,
    calculate_improvement,
    calculate_target_consumption,
    clamp_r_squared,
    regression_quality,
    format_equation,
)
from .analysis import build_ser_analysis, summarize_ser_period

__all__ = [
    'reconstruct_line',
    'extract_coefficients',
    'calculate_reference_consumption',
    'calculate_improvement',
    'calculate_target_consumption',
    'clamp_r_squared',
    'regression_quality',
    'format_equation',
    'build_ser_analysis',
    'summarize_ser_period',
]
