# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Budget status classification shared by every report.

Status values are plain strings so reports serialize without translation.
"""
from typing import Literal

Status = Literal["nominal", "warning", "critical"]

NOMINAL: Status = "nominal"
WARNING: Status = "warning"
CRITICAL: Status = "critical"

_SEVERITY = {NOMINAL: 0, WARNING: 1, CRITICAL: 2}


def classify_at_least(value: float, nominal_min: float, warning_min: float) -> Status:
    """Classify a quantity where larger is better (margins)."""
    if value >= nominal_min:
        return NOMINAL
    if value >= warning_min:
        return WARNING
    return CRITICAL


def classify_at_most(value: float, nominal_max: float, warning_max: float) -> Status:
    """Classify a quantity where smaller is better (depth of discharge, dose)."""
    if value <= nominal_max:
        return NOMINAL
    if value <= warning_max:
        return WARNING
    return CRITICAL


def worst_status(*statuses: Status) -> Status:
    """Most severe of the given statuses (nominal when none given)."""
    if not statuses:
        return NOMINAL
    return max(statuses, key=lambda s: _SEVERITY[s])
