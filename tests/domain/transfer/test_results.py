from __future__ import annotations

import pytest

from peerhub.domain.transfer import (
    ImportOutcome,
    ImportReport,
    ImportResult,
    ImportSummary,
    summarize_results,
)


def test_summarize_counts_successes_and_failures() -> None:
    results = [
        ImportResult.succeeded("a"),
        ImportResult.failed("b", "boom"),
        ImportResult.succeeded("c"),
    ]

    assert summarize_results(results) == ImportSummary(success_count=2, fail_count=1)


@pytest.mark.parametrize(
    ("results", "expected"),
    [
        ((), ImportOutcome.EMPTY),
        ((ImportResult.failed("a", "x"),), ImportOutcome.NOTHING_IMPORTED),
        ((ImportResult.succeeded("a"), ImportResult.failed("b", "x")), ImportOutcome.PARTIAL),
        ((ImportResult.succeeded("a"),), ImportOutcome.ALL_IMPORTED),
    ],
)
def test_report_outcome(results: tuple[ImportResult, ...], expected: ImportOutcome) -> None:
    assert ImportReport(results=results).outcome is expected


def test_report_counts_mixed_results() -> None:
    report = ImportReport(
        results=(
            ImportResult.failed("z", "late"),
            ImportResult.succeeded("m"),
            ImportResult.failed("a", "early"),
        )
    )

    assert report.success_count == 1
    assert report.fail_count == 2
