"""Unit tests for comparison outcome classification."""

import pytest

from regnotify.notifier.models import CommitState, ComparisonCounts, ComparisonResult
from regnotify.notifier.outcome import (
    FAILED_DESCRIPTION,
    PASSED_DESCRIPTION,
    classify_outcome,
)


@pytest.mark.parametrize(
    ("failed", "new", "deleted", "expected"),
    [
        (0, 0, 0, CommitState.SUCCESS),
        (1, 0, 0, CommitState.FAILURE),
        (0, 1, 0, CommitState.FAILURE),
        (0, 0, 1, CommitState.FAILURE),
        (3, 2, 1, CommitState.FAILURE),
    ],
)
def test_passed_items_never_decide_the_outcome(
    failed: int, new: int, deleted: int, expected: CommitState
) -> None:
    """
    Why: Only failed, new and deleted items change the verdict
    What: Tests each category with and without passed items
    How: Classifies the same counts with zero and many passed items
    """
    for passed in (0, 10):
        counts = ComparisonCounts(failed=failed, new=new, deleted=deleted, passed=passed)
        assert classify_outcome(counts).state is expected


def test_failed_outcome_keeps_counts() -> None:
    counts = ComparisonCounts(failed=2, new=0, deleted=1, passed=5)

    outcome = classify_outcome(counts)

    assert outcome.state is CommitState.FAILURE
    assert outcome.description == FAILED_DESCRIPTION
    assert outcome.counts == counts


def test_empty_comparison_passes() -> None:
    outcome = classify_outcome(ComparisonResult().counts())

    assert outcome.state is CommitState.SUCCESS
    assert outcome.description == PASSED_DESCRIPTION


def test_counts_must_be_non_negative() -> None:
    with pytest.raises(ValueError, match="failed"):
        ComparisonCounts(failed=-1)


class TestComparisonResult:
    """Test reading reg-suit output documents."""

    def test_from_camel_case_document(self) -> None:
        result = ComparisonResult.from_dict(
            {
                "failedItems": ["a.png", "b.png"],
                "newItems": [],
                "deletedItems": ["c.png"],
                "passedItems": ["d.png"],
                "actualDir": ".reg/actual",
            }
        )

        assert result.counts() == ComparisonCounts(failed=2, new=0, deleted=1, passed=1)

    def test_from_snake_case_document_with_missing_lists(self) -> None:
        result = ComparisonResult.from_dict({"new_items": ["x.png"], "passed_items": None})

        assert result.counts() == ComparisonCounts(new=1)

    @pytest.mark.parametrize("value", ["a.png", {"a.png": True}, 3])
    def test_rejects_items_that_are_not_lists(self, value) -> None:
        """
        Why: A bare string would otherwise be counted character by character
        What: Tests that non-list item collections are rejected
        How: Passes a string, a mapping and a number as failedItems
        """
        with pytest.raises(ValueError, match="failedItems must be a list"):
            ComparisonResult.from_dict({"failedItems": value})
