"""Per-record import results and their aggregation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class ImportResult:
    success: bool
    name: str
    error: str | None = None

    @classmethod
    def succeeded(cls, name: str) -> ImportResult:
        return cls(success=True, name=name)

    @classmethod
    def failed(cls, name: str, error: str) -> ImportResult:
        return cls(success=False, name=name, error=error)


class ImportOutcome(StrEnum):
    EMPTY = "empty"
    NOTHING_IMPORTED = "nothing_imported"
    PARTIAL = "partial"
    ALL_IMPORTED = "all_imported"


@dataclass(frozen=True, slots=True)
class ImportSummary:
    success_count: int
    fail_count: int

    @property
    def total(self) -> int:
        return self.success_count + self.fail_count

    @property
    def outcome(self) -> ImportOutcome:
        if self.total == 0:
            return ImportOutcome.EMPTY
        if self.success_count == 0:
            return ImportOutcome.NOTHING_IMPORTED
        if self.fail_count:
            return ImportOutcome.PARTIAL
        return ImportOutcome.ALL_IMPORTED


def summarize_results(results: Iterable[ImportResult]) -> ImportSummary:
    success_count = 0
    fail_count = 0
    for result in results:
        if result.success:
            success_count += 1
        else:
            fail_count += 1
    return ImportSummary(success_count=success_count, fail_count=fail_count)


@dataclass(frozen=True, slots=True)
class ImportReport:
    """Results of one import batch, in input order."""

    results: tuple[ImportResult, ...]

    @property
    def summary(self) -> ImportSummary:
        return summarize_results(self.results)

    @property
    def success_count(self) -> int:
        return self.summary.success_count

    @property
    def fail_count(self) -> int:
        return self.summary.fail_count

    @property
    def outcome(self) -> ImportOutcome:
        return self.summary.outcome
