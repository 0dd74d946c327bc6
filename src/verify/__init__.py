"""Drift detection, pattern promotion and fitness functions."""

from verify.drift import (
    DEFAULT_DOCUMENT_NAME,
    check_drift,
    format_drift_report,
    publish_artifacts,
)
from verify.fitness import (
    FitnessFailure,
    FitnessResult,
    available_fitness_functions,
    format_fitness_result,
    run_all_fitness,
    run_fitness,
)
from verify.promote import PromotionResult, auto_promote, promote_patterns

__all__ = [
    "DEFAULT_DOCUMENT_NAME",
    "FitnessFailure",
    "FitnessResult",
    "PromotionResult",
    "auto_promote",
    "available_fitness_functions",
    "check_drift",
    "format_drift_report",
    "format_fitness_result",
    "promote_patterns",
    "publish_artifacts",
    "run_all_fitness",
    "run_fitness",
]
