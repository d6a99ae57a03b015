"""Check execution and result aggregation services.

Re-exports all public service objects so consumers can import directly:
    from Health_Check.services import CheckRunner, aggregate, run_checks
"""

from Health_Check.services.aggregator import MISSING_OUTCOME_DETAIL, aggregate
from Health_Check.services.runner import ABANDON_GRACE_SECONDS, CheckRunner, run_checks

__all__ = [
    "ABANDON_GRACE_SECONDS",
    "MISSING_OUTCOME_DETAIL",
    "CheckRunner",
    "aggregate",
    "run_checks",
]
