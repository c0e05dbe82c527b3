"""Project setup pipeline: detect the package shape and assemble a build plan."""

from __future__ import annotations

from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from dataclasses import replace
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .aggregator import aggregate
from .builders import ALWAYS, BUILD, LINT, TEST, ScriptBuilder, discover_builders
from .config import SetupOptions, build_setup_options
from .detection import ShapeDetector
from .errors import MissingPackageRoot, MissingSourceDirectory, NoBuildableUnit
from .logging import get_logger
from .models import BuildPlan, ScriptBuilderResult
from .package_json import read_package_main


class ProjectSetup:
    """Coordinates detection and the concurrent script-builder fan-out.

    Nothing is cached between runs: each call to :meth:`run` lists the
    filesystem afresh and builds a new plan, so identical inputs give
    identical plans.
    """

    def __init__(
        self,
        builders: Optional[Mapping[str, ScriptBuilder]] = None,
        detector: ShapeDetector | None = None,
        max_workers: int | None = None,
    ) -> None:
        self._builder_overrides = dict(builders) if builders is not None else None
        self.detector = detector or ShapeDetector()
        self.max_workers = max_workers
        self.logger = get_logger("setup")

    def run(self, options: SetupOptions) -> BuildPlan:
        """Validate the package, resolve entry points and return the merged plan."""
        self._check_preconditions(options)
        options = self._resolve_entry_points(options)

        if not options.with_libraries and not options.with_executables and not options.no_build:
            raise NoBuildableUnit(
                "No library or executable source could be identified; bailing out.",
                path=options.source_root,
            )

        self.logger.info("Setting up basic makefile infrastructure...")
        options.make_dir.mkdir(parents=True, exist_ok=True)

        selected = self._select_builders(options)
        self.logger.debug("Selected builders: %s", ", ".join(name for name, _ in selected))
        results = self._invoke_builders(selected, options)
        plan = aggregate(results)
        self.logger.info(
            "Build plan ready: %d artifact(s), %d dependenc%s",
            len(plan.artifacts),
            len(plan.dependencies),
            "y" if len(plan.dependencies) == 1 else "ies",
        )
        return plan

    @staticmethod
    def _check_preconditions(options: SetupOptions) -> None:
        package_json = options.package_json_path
        if not package_json.exists():
            raise MissingPackageRoot(
                f"'{options.working_pkg_root}' does not appear to be a package root "
                "(no 'package.json' file found).",
                path=package_json,
            )
        source_root = options.source_root
        if not source_root.is_dir():
            raise MissingSourceDirectory(
                f"No source directory found at '{source_root}'. "
                "Set 'src_path' or create the directory.",
                path=source_root,
            )

    def _resolve_entry_points(self, options: SetupOptions) -> SetupOptions:
        if options.with_libraries or options.with_executables:
            self.logger.debug("Using caller-supplied entry points; skipping detection")
            return options

        main_entry = read_package_main(options.working_pkg_root)
        shape = self.detector.detect(
            options.source_root,
            is_executable=options.is_executable,
            main_entry=main_entry,
        )
        return replace(
            options,
            with_libraries=tuple(shape.with_libraries),
            with_executables=tuple(shape.with_executables),
        )

    def _available_builders(self) -> Mapping[str, ScriptBuilder]:
        if self._builder_overrides is not None:
            return self._builder_overrides
        return discover_builders()

    def _select_builders(self, options: SetupOptions) -> List[Tuple[str, ScriptBuilder]]:
        enabled_groups = {ALWAYS}
        if not options.no_build:
            enabled_groups.add(BUILD)
        if not options.no_lint:
            enabled_groups.add(LINT)
        if not options.no_test:
            enabled_groups.add(TEST)

        selected: List[Tuple[str, ScriptBuilder]] = []
        for name, builder in self._available_builders().items():
            group = getattr(builder, "group", ALWAYS)
            if group not in {ALWAYS, BUILD, LINT, TEST}:
                raise ValueError(f"Builder '{name}' declares unknown group '{group}'")
            if group in enabled_groups:
                selected.append((name, builder))
        return selected

    def _invoke_builders(
        self, selected: Sequence[Tuple[str, ScriptBuilder]], options: SetupOptions
    ) -> List[ScriptBuilderResult]:
        """Run every builder concurrently and return results in invocation order.

        The first failure cancels work that has not started and is re-raised
        unchanged; no partial result list is ever returned.
        """
        if not selected:
            return []
        workers = self.max_workers or len(selected)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="makegen-builder") as executor:
            futures: List[Future] = [
                executor.submit(builder.build, options) for _, builder in selected
            ]
            _, pending = wait(futures, return_when=FIRST_EXCEPTION)
            for future in pending:
                future.cancel()
            for (name, _), future in zip(selected, futures):
                if future.cancelled():
                    continue
                exc = future.exception()
                if exc is not None:
                    self.logger.error("Builder '%s' failed: %s", name, exc)
                    raise exc
            return [future.result() for future in futures]


def setup_project(options: SetupOptions | None = None, **values: Any) -> BuildPlan:
    """Build a plan from ``options`` or from raw option values."""
    if options is None:
        options = build_setup_options(**values)
    elif values:
        raise TypeError("Pass either a SetupOptions instance or keyword values, not both")
    return ProjectSetup().run(options)


__all__ = ["ProjectSetup", "setup_project"]
