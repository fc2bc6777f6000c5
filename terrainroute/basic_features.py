"""Gradient, gradient-to-speed and multiplier features."""

from __future__ import annotations

import enum
import logging
import math
from collections.abc import Sequence

from terrainroute.feature import Feature, FeatureState
from terrainroute.geometry import Point3

log = logging.getLogger(__name__)


class GradientFeature(Feature):
    """Slope (rise over horizontal run) of the step being evaluated."""

    @staticmethod
    def calculate_gradient(p1: Point3, p2: Point3) -> float:
        """Gradient from ``p1`` to ``p2``; 0 when they share x and y."""
        distance = math.hypot(p2.x - p1.x, p2.y - p1.y)
        if distance == 0:
            log.warning("Cannot calculate gradient - requires zero distance division")
            return 0.0
        return (p2.z - p1.z) / distance

    def calculate(self, state: FeatureState) -> float:
        if state.current_vertex is None or state.next_vertex is None:
            raise ValueError("gradient needs both the current and the next vertex")
        return self.calculate_gradient(state.current_vertex, state.next_vertex)


class GradientSpeedFeature(Feature):
    """Speed factor derived from a gradient through a polynomial.

    The first dependency supplies the gradient. Positive gradients use
    ``upwards_coefficients``, others ``downwards_coefficients``; coefficient
    ``i`` multiplies ``x ** i``. The result is never below zero.
    """

    def __init__(
        self,
        feature_id: str,
        upwards_coefficients: Sequence[float] = (1.0,),
        downwards_coefficients: Sequence[float] = (1.0,),
    ) -> None:
        super().__init__(feature_id)
        self.upwards_coefficients = list(upwards_coefficients)
        self.downwards_coefficients = list(downwards_coefficients)

    @staticmethod
    def solve_polynomial(x: float, coefficients: Sequence[float]) -> float:
        """Evaluate the polynomial with the given coefficients at ``x``."""
        return sum(c * x**degree for degree, c in enumerate(coefficients))

    def calculate(self, state: FeatureState) -> float:
        if not self.dependencies:
            raise ValueError(f"{self.feature_id} needs a gradient dependency")
        gradient = self.dependencies[0].calculate(state)

        coefficients = self.upwards_coefficients if gradient > 0 else self.downwards_coefficients
        speed = max(0.0, self.solve_polynomial(gradient, coefficients))

        if speed <= 0:
            self.add_warning(state, "Untraversable gradient", 10)
        elif speed < 0.5:
            self.add_warning(state, "Steep Gradient", 2)
        elif speed < 0.8:
            self.add_warning(state, "Slight Gradient", 1)
        return speed


class DependencyType(enum.Enum):
    """How a multiplier treats the value of a dependency."""

    INT = "int"
    DOUBLE = "double"
    BOOL = "bool"


class MultiplierFeature(Feature):
    """Product of its dependencies; a false boolean dependency gives 0."""

    def __init__(self, feature_id: str) -> None:
        super().__init__(feature_id)
        self.dependency_types: dict[str, DependencyType] = {}

    def add_dependency(
        self, feature: Feature, dependency_type: DependencyType | None = None
    ) -> None:
        """Add an input; its DependencyType must be given."""
        if dependency_type is None:
            log.error("Multiplier add_dependency requires specifying the feature type")
            raise ValueError("multiplier dependencies require a dependency type")
        self.dependencies.append(feature)
        self.dependency_types[feature.feature_id] = DependencyType(dependency_type)

    def calculate(self, state: FeatureState) -> float:
        total = 1.0
        for feature in self.dependencies:
            kind = self.dependency_types.get(feature.feature_id)
            if kind is DependencyType.BOOL:
                if not feature.calculate(state):
                    return 0.0
            elif kind in (DependencyType.INT, DependencyType.DOUBLE):
                raw = feature.calculate(state)
                value = float(int(raw)) if kind is DependencyType.INT else float(raw)
                if total == math.inf or value == math.inf:
                    total = math.inf
                else:
                    total *= value
            else:
                log.error("Multiplier feature type invalid")
                raise ValueError(f"no valid dependency type for {feature.feature_id!r}")

            if total == 0:
                break
        return total