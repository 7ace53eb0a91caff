"""Progress collaborators fed by the executor's progress callbacks."""

from __future__ import annotations

import logging

from tqdm.auto import tqdm

from .executor import ProgressReport, SweepResult


def format_progress(report: ProgressReport) -> str:
    return (
        f"iter={report.iterations:12d} ({report.percent:6.2f}%)  "
        f"OK_hits={report.ok_hits:12d}  NG_hits={report.ng_hits:12d}"
    )


class LogProgress:
    """Write each progress report as one log line."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.level = level

    def __call__(self, report: ProgressReport) -> None:
        self.logger.log(self.level, format_progress(report))


class TqdmProgress:
    """Advance a tqdm bar to the reported iteration count, hit counts in the postfix."""

    def __init__(self, total: int, *, desc: str = "Sweep", disable: bool = False) -> None:
        self.bar = tqdm(total=total, desc=desc, unit="trial", disable=disable)
        self._position = 0

    def __call__(self, report: ProgressReport) -> None:
        self.bar.update(report.iterations - self._position)
        self._position = report.iterations
        self.bar.set_postfix(ok=report.ok_hits, ng=report.ng_hits, refresh=False)

    def finish(self, result: SweepResult) -> None:
        """Bring the bar to the final trial count, which may fall between progress reports."""
        results = result.results
        self.bar.update(results.total - self._position)
        self._position = results.total
        self.bar.set_postfix(ok=results.ok_hits, ng=results.ng_hits)

    def close(self) -> None:
        self.bar.close()

    def __enter__(self) -> "TqdmProgress":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False
