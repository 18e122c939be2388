"""
kurobako-runner CLI entry point.

Starts a problem or solver runner on stdin/stdout for a factory given as
``module:attr``:

    kurobako-runner solver kurobako.solvers.random_search:RandomSolverFactory
    kurobako-runner problem kurobako.problems.quadratic:QuadraticProblemFactory

Stdout is reserved for protocol lines; logging goes to stderr or to the
configured log file.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from typing import Any, List, Optional

from kurobako.config.settings import RunnerSettings, load_runner_config
from kurobako.core.errors import RunnerConfigError
from kurobako.runtime.problem_runner import ProblemRunner
from kurobako.runtime.solver_runner import SolverRunner

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("kurobako.cli")


def configure_logging(settings: RunnerSettings) -> None:
    if settings.log_file:
        logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, filename=settings.log_file, force=True)
    else:
        logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, stream=sys.stderr, force=True)


def load_factory(target: str) -> Any:
    """
    Resolve ``module:attr`` (attr may be dotted) to a factory instance.

    Classes are instantiated without arguments.

    Raises:
        ValueError: if the target is malformed or cannot be imported.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"factory must be given as 'module:attr', got {target!r}")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ValueError(f"cannot import module {module_name!r}: {exc}") from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ValueError(f"{module_name!r} has no attribute {attr_path!r}") from exc

    if isinstance(obj, type):
        obj = obj()
    return obj


def _resolve_settings(args: argparse.Namespace) -> RunnerSettings:
    try:
        settings = load_runner_config(args.config).runner
    except RunnerConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.log_level:
        try:
            settings = RunnerSettings.model_validate({**settings.model_dump(), "log_level": args.log_level})
        except ValueError as e:
            print(f"Error: invalid --log-level: {e}", file=sys.stderr)
            sys.exit(1)
    return settings


def _run(args: argparse.Namespace, runner_cls: Any) -> None:
    settings = _resolve_settings(args)
    configure_logging(settings)

    try:
        factory = load_factory(args.factory)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    runner = runner_cls(factory, max_line_length=settings.max_line_length)
    try:
        runner.run()
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)
    except Exception as e:
        logger.exception(f"{runner_cls.__name__} aborted: {e}")
        sys.exit(1)


def cmd_problem(args: argparse.Namespace) -> None:
    _run(args, ProblemRunner)


def cmd_solver(args: argparse.Namespace) -> None:
    _run(args, SolverRunner)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kurobako-runner", description="Serve a problem or solver to the benchmark harness")
    subparsers = parser.add_subparsers(dest="command", help="Role to serve")

    for name, func, help_text in (
        ("problem", cmd_problem, "Run a ProblemFactory"),
        ("solver", cmd_solver, "Run a SolverFactory"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("factory", help="Factory as 'module:attr' (classes are instantiated without arguments)")
        sub.add_argument("--config", help="Path to kurobako.yaml (optional)")
        sub.add_argument(
            "--log-level",
            dest="log_level",
            help="Override the configured log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        )
        sub.set_defaults(func=func)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help(sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
