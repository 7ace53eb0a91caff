"""
CLI: run a Monte Carlo sweep described by a YAML file.

Example:
    param-sweep configs/wpt_ss.yaml --seed 42 --xlsx out/result.xlsx
    python -m param_sweep configs/wpt_ss.yaml --max-iterations 100000
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import OutputConfig, SweepConfig, load_config
from .sweep.cancellation import CancellationToken, interrupt_on_sigint
from .sweep.classifier import Classification
from .sweep.errors import ConfigurationError
from .sweep.executor import SweepExecutor, SweepResult
from .sweep.export import export_summary_json, export_tsv, export_xlsx
from .sweep.progress import TqdmProgress
from .sweep.reporting import SweepReporter

logger = logging.getLogger("param_sweep")

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="param-sweep", description="Monte Carlo parameter sweep with OK/NG classification")
    p.add_argument("config", help="YAML configuration file")
    p.add_argument("--seed", type=int, help="RNG seed (default: from config, else time-derived)")
    p.add_argument("--max-iterations", type=int, help="Number of trials")
    p.add_argument("--max-print", type=int, help="Rows per console table (0 = all)")
    p.add_argument("--xlsx", help="Workbook destination")
    p.add_argument("--ok-tsv", help="TSV destination for retained OK samples")
    p.add_argument("--ng-tsv", help="TSV destination for retained NG samples")
    p.add_argument("--summary-json", help="JSON summary destination")
    p.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    p.add_argument("--log-file", help="Also append log records to this file")
    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Warnings and errors only")
    return p.parse_args(argv)


def configure_logging(*, verbose: bool = False, quiet: bool = False, log_file: str | None = None) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


def run_sweep(
    config: SweepConfig,
    *,
    progress: bool = True,
    cancellation: CancellationToken | None = None,
) -> SweepResult:
    """Run ``config`` with a progress bar; the caller owns the cancellation token."""
    token = cancellation or CancellationToken()
    seed = config.resolve_seed()
    with TqdmProgress(config.max_iterations, disable=not progress) as bar:
        executor = SweepExecutor(
            parameter_space=config.parameters,
            evaluator=config.evaluator,
            interval=config.interval,
            max_iterations=config.max_iterations,
            seed=seed,
            ok_capacity=config.ok_capacity,
            ng_capacity=config.ng_capacity,
            progress_every=config.progress_every,
            callbacks=(bar,),
            cancellation=token,
        )
        result = executor.run()
        bar.finish(result)
    return result


def write_exports(result: SweepResult, output: OutputConfig) -> list[Path]:
    """Write every configured export; a failed write is reported and the others still run."""
    jobs = [
        ("xlsx", output.xlsx, lambda path: export_xlsx(result, path)),
        ("tsv (OK)", output.ok_tsv, lambda path: export_tsv(result, path, Classification.OK)),
        ("tsv (NG)", output.ng_tsv, lambda path: export_tsv(result, path, Classification.NG)),
        ("summary json", output.summary_json, lambda path: export_summary_json(result, path)),
    ]
    written: list[Path] = []
    for label, destination, job in jobs:
        if not destination:
            continue
        try:
            written.append(job(destination))
        except OSError as exc:
            logger.error("%s save error: %s", label, exc)
            continue
        logger.info("%s saved: %s", label, destination)
    return written


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    try:
        config = load_config(args.config).with_overrides(
            seed=args.seed,
            max_iterations=args.max_iterations,
            max_print=args.max_print,
            xlsx=args.xlsx,
            ok_tsv=args.ok_tsv,
            ng_tsv=args.ng_tsv,
            summary_json=args.summary_json,
        )
        token = CancellationToken()
        with interrupt_on_sigint(token):
            result = run_sweep(config, progress=not args.no_progress, cancellation=token)
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    reporter = SweepReporter(result)
    print()
    print(reporter.render_summary())
    print()
    print(reporter.render_table("=== OK (saved) ===", Classification.OK, max_print=config.max_print))
    print()
    print(reporter.render_table("=== NG (saved) ===", Classification.NG, max_print=config.max_print))

    write_exports(result, config.output)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
