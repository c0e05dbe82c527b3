"""Merge collaborator results into a single build plan."""

from __future__ import annotations

from typing import Dict, Iterable, List

from .models import Artifact, BuildPlan, ScriptBuilderResult


def aggregate(results: Iterable[ScriptBuilderResult]) -> BuildPlan:
    """Combine ``results`` into one :class:`BuildPlan`.

    Artifacts are concatenated in result order, then sorted by ascending
    priority. ``sorted`` is stable, so artifacts sharing a priority keep the
    order their collaborators emitted them in. Dependencies are deduplicated
    and sorted lexicographically.
    """
    artifacts: List[Artifact] = []
    dependency_index: Dict[str, bool] = {}
    for result in results:
        if not isinstance(result, ScriptBuilderResult):
            raise TypeError(
                f"Expected ScriptBuilderResult, got {type(result).__name__}"
            )
        artifacts.extend(result.artifacts)
        for dependency in result.dependencies:
            dependency_index[dependency] = True

    return BuildPlan(
        dependencies=sorted(dependency_index),
        artifacts=sorted(artifacts, key=lambda artifact: artifact.priority),
    )


__all__ = ["aggregate"]
