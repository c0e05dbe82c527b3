"""CLI entrypoint for makegen commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from . import __version__
from .config import ConfigError, build_setup_options, load_config
from .errors import ConfigurationError
from .logging import configure_logging
from .orchestrator import ProjectSetup


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="makegen",
        description="Scaffold Makefile build plans for JavaScript packages.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only log warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug-level logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    plan_parser = subparsers.add_parser(
        "plan",
        help="Detect the package layout and print the build plan as JSON.",
    )
    plan_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the package root (defaults to current directory).",
    )
    plan_parser.add_argument("--src-path", default=None, help="Source directory relative to the root.")
    plan_parser.add_argument(
        "--executable",
        dest="is_executable",
        action="store_true",
        default=None,
        help="Treat a root-level index as an executable instead of a library.",
    )
    plan_parser.add_argument(
        "--lib",
        dest="with_libraries",
        action="append",
        default=None,
        metavar="PATH:NAME",
        help="Library entry point; repeatable. Disables layout detection.",
    )
    plan_parser.add_argument(
        "--exec",
        dest="with_executables",
        action="append",
        default=None,
        metavar="PATH:NAME",
        help="Executable entry point; repeatable. Disables layout detection.",
    )
    for feature in ("build", "doc", "lint", "test"):
        plan_parser.add_argument(
            f"--no-{feature}",
            dest=f"no_{feature}",
            action="store_true",
            default=None,
            help=f"Skip {feature} script generation.",
        )
    plan_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the plan JSON to this file instead of stdout.",
    )

    return parser


def _option_values(args: argparse.Namespace, root: Path) -> Dict[str, Any]:
    values = load_config(root).option_values()
    explicit = {
        "src_path": args.src_path,
        "is_executable": args.is_executable,
        "with_libraries": args.with_libraries,
        "with_executables": args.with_executables,
        "no_build": args.no_build,
        "no_doc": args.no_doc,
        "no_lint": args.no_lint,
        "no_test": args.no_test,
    }
    values.update({key: value for key, value in explicit.items() if value is not None})
    values.update(working_pkg_root=root, my_name="makegen", my_version=__version__)
    return values


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for makegen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logger = configure_logging(
        verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file
    )

    if args.command == "plan":
        root = Path(args.path).expanduser().resolve()
        try:
            options = build_setup_options(**_option_values(args, root))
            plan = ProjectSetup().run(options)
        except ConfigError as exc:
            parser.exit(1, f"makegen: invalid configuration: {exc}\n")
        except ConfigurationError as exc:
            parser.exit(1, f"makegen plan failed: {exc}\n")
        except Exception as exc:  # pragma: no cover - surfaced for the user
            logger.debug("Unhandled error", exc_info=True)
            parser.exit(1, f"makegen plan failed: {exc}\nRun with --verbose for more details.\n")

        payload = json.dumps(plan.to_dict(), indent=2) + "\n"
        if args.output is not None:
            args.output.write_text(payload, encoding="utf-8")
            logger.info("Build plan written to %s", args.output)
        else:
            sys.stdout.write(payload)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
