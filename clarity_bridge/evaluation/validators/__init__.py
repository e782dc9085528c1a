"""
Deterministic view validators.

Pure functions scoring each generated view and the consistency between views.
"""

from clarity_bridge.evaluation.validators.backend_view_validator import validate_backend_view
from clarity_bridge.evaluation.validators.cross_view_validator import validate_cross_view
from clarity_bridge.evaluation.validators.frontend_view_validator import validate_frontend_view
from clarity_bridge.evaluation.validators.pm_view_validator import validate_pm_view
from clarity_bridge.evaluation.validators.scorecard import weighted_overall

__all__ = [
    "validate_backend_view",
    "validate_cross_view",
    "validate_frontend_view",
    "validate_pm_view",
    "weighted_overall",
]
