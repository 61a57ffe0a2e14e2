"""Derive the commit state from comparison counts."""

from .models import CommitState, ComparisonCounts, ComparisonOutcome

PASSED_DESCRIPTION = "Regression testing passed"
FAILED_DESCRIPTION = "Regression testing failed"


def classify_outcome(counts: ComparisonCounts) -> ComparisonOutcome:
    """Failed, new and deleted items all make the run fail; passed items never do."""
    if counts.failed + counts.new + counts.deleted > 0:
        return ComparisonOutcome(CommitState.FAILURE, FAILED_DESCRIPTION, counts)
    return ComparisonOutcome(CommitState.SUCCESS, PASSED_DESCRIPTION, counts)
