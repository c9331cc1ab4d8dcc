"""Models for probe verdicts."""

from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True, kw_only=True)
class TestResult:
    """Verdict of a single probe invocation."""

    __test__ = False

    name: str
    passed: bool
    details: str = ""
    duration: float = 0.0


@dataclass(kw_only=True)
class ResultLog:
    """Append-only record of verdicts in execution order.

    Counters are kept in step with the appended results so that reporting
    never needs to rescan the log.
    """

    results: list[TestResult] = field(default_factory=list)
    passed_count: int = 0
    failed_count: int = 0

    def record(self, result: TestResult) -> None:
        """Append a verdict and update the counters."""
        self.results.append(result)
        if result.passed:
            self.passed_count += 1
        else:
            self.failed_count += 1

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def failures(self) -> Sequence[TestResult]:
        return [result for result in self.results if not result.passed]
