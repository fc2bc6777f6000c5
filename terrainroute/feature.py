"""Cost features that can be chained into a dependency graph, and their manager."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Any

from terrainroute.geometry import Point3

log = logging.getLogger(__name__)


@dataclass
class FeatureState:
    """What the features see while evaluating one step of a route.

    ``warnings`` maps a face to the index of the warning that applies to it in
    ``warning_messages`` and ``warning_priorities``.
    """

    current_face: Hashable = None
    current_vertex: Point3 | None = None
    next_vertex: Point3 | None = None
    warnings: dict[Hashable, int] = field(default_factory=dict)
    warning_messages: list[str] = field(default_factory=list)
    warning_priorities: list[int] = field(default_factory=list)

    def add_warning(self, warning: str, priority: int) -> int:
        """Record a warning and return its index."""
        self.warning_messages.append(warning)
        self.warning_priorities.append(priority)
        return len(self.warning_messages) - 1


class Feature(ABC):
    """A node in the feature graph; features are equal when their ids are."""

    def __init__(self, feature_id: str) -> None:
        self.feature_id = feature_id
        self.dependencies: list[Feature] = []

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Feature):
            return NotImplemented
        return self.feature_id == other.feature_id

    def __hash__(self) -> int:
        return hash(self.feature_id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.feature_id!r})"

    def add_dependency(self, feature: Feature) -> None:
        """Make ``feature`` an input of this feature."""
        self.dependencies.append(feature)

    def add_warning(self, state: FeatureState, warning: str, priority: int) -> None:
        """Attach a warning to the current face unless a stronger one is there."""
        face = state.current_face
        existing = state.warnings.get(face)
        if existing is not None and state.warning_priorities[existing] > priority:
            return
        state.warnings[face] = state.add_warning(warning, priority)

    @abstractmethod
    def calculate(self, state: FeatureState) -> Any:
        """Evaluate the feature for the given state."""


class DependencyCycleError(ValueError):
    """Raised when a feature graph contains a dependency cycle."""


class FeatureManager:
    """Holds the output feature of an acyclic feature graph and evaluates it."""

    def __init__(self) -> None:
        self.output_feature: Feature | None = None

    def has_dependency_cycle(self) -> bool:
        """Whether any path from the output feature revisits a feature id."""
        if self.output_feature is None:
            return False
        return self._has_cycle(self.output_feature, frozenset({self.output_feature.feature_id}))

    def _has_cycle(self, feature: Feature, seen: frozenset[str]) -> bool:
        for dep in feature.dependencies:
            if dep.feature_id in seen:
                return True
            if self._has_cycle(dep, seen | {dep.feature_id}):
                return True
        return False

    def set_output_feature(self, feature: Feature) -> None:
        """Use ``feature`` as the output; raises DependencyCycleError on cycles."""
        self.output_feature = feature
        if self.has_dependency_cycle():
            self.output_feature = None
            log.error("Feature graph has dependency cycle")
            raise DependencyCycleError("feature graph has dependency cycle")

    def calculate(self, state: FeatureState) -> float:
        """Evaluate the output feature for ``state``."""
        if self.output_feature is None:
            raise RuntimeError("no output feature has been set")
        return self.output_feature.calculate(state)