"""Land-cover, water and path features evaluated per mesh face or edge."""

from __future__ import annotations

import enum
import logging
from collections.abc import Hashable, Iterable, Mapping, Sequence

from terrainroute.feature import Feature, FeatureState
from terrainroute.geometry import Point3

log = logging.getLogger(__name__)


class CEHTerrainType(enum.Enum):
    """Land-cover classes of the CEH land cover map."""

    BROADLEAVED_MIXED_AND_YEW_WOODLAND = enum.auto()
    CONIFEROUS_WOODLAND = enum.auto()
    ARABLE_AND_HORTICULTURE = enum.auto()
    IMPROVED_GRASSLAND = enum.auto()
    NEUTRAL_GRASSLAND = enum.auto()
    CALCAREOUS_GRASSLAND = enum.auto()
    ACID_GRASSLAND = enum.auto()
    FEN_MARSH_AND_SWAMP = enum.auto()
    HEATHER = enum.auto()
    HEATHER_GRASSLAND = enum.auto()
    BOG = enum.auto()
    INLAND_ROCK = enum.auto()
    SUPRALITTORAL_ROCK_AND_SEDIMENT = enum.auto()
    LITTORAL_ROCK_AND_SEDIMENT = enum.auto()
    SALTMARSH = enum.auto()
    URBAN = enum.auto()
    SUBURBAN = enum.auto()
    NO_DATA = enum.auto()


_TERRAIN_COLOURS: dict[int, CEHTerrainType] = {
    0xFF0000: CEHTerrainType.BROADLEAVED_MIXED_AND_YEW_WOODLAND,
    0x006600: CEHTerrainType.CONIFEROUS_WOODLAND,
    0x732600: CEHTerrainType.ARABLE_AND_HORTICULTURE,
    0x00FF00: CEHTerrainType.IMPROVED_GRASSLAND,
    0x7FE57F: CEHTerrainType.NEUTRAL_GRASSLAND,
    0x70A800: CEHTerrainType.CALCAREOUS_GRASSLAND,
    0x998100: CEHTerrainType.ACID_GRASSLAND,
    0xFFFF00: CEHTerrainType.FEN_MARSH_AND_SWAMP,
    0x801A80: CEHTerrainType.HEATHER,
    0xE68CA6: CEHTerrainType.HEATHER_GRASSLAND,
    0x008073: CEHTerrainType.BOG,
    0xD2D2FF: CEHTerrainType.INLAND_ROCK,
    0xCCB300: CEHTerrainType.SUPRALITTORAL_ROCK_AND_SEDIMENT,
    0xFFFF80: CEHTerrainType.LITTORAL_ROCK_AND_SEDIMENT,
    0x8080FF: CEHTerrainType.SALTMARSH,
    0x000000: CEHTerrainType.URBAN,
    0x808080: CEHTerrainType.SUBURBAN,
    0xFFFFFF: CEHTerrainType.NO_DATA,
}

_WOODLAND = {
    CEHTerrainType.BROADLEAVED_MIXED_AND_YEW_WOODLAND,
    CEHTerrainType.CONIFEROUS_WOODLAND,
}
_GRASSLAND = {
    CEHTerrainType.IMPROVED_GRASSLAND,
    CEHTerrainType.NEUTRAL_GRASSLAND,
    CEHTerrainType.ACID_GRASSLAND,
    CEHTerrainType.CALCAREOUS_GRASSLAND,
}
_WETLAND = {CEHTerrainType.SALTMARSH, CEHTerrainType.FEN_MARSH_AND_SWAMP}
_BUILT_UP = {CEHTerrainType.URBAN, CEHTerrainType.SUBURBAN}


class CEHTerrainFeature(Feature):
    """Speed factor for the land cover of the current face.

    ``terrain_map`` maps each tagged face to its CEHTerrainType; faces that are
    not tagged count as having no data.
    """

    TERRAIN_COLOURS: Mapping[int, CEHTerrainType] = _TERRAIN_COLOURS

    def __init__(
        self,
        feature_id: str,
        terrain_map: Mapping[Hashable, CEHTerrainType] | None = None,
    ) -> None:
        super().__init__(feature_id)
        self.terrain_map: dict[Hashable, CEHTerrainType] = dict(terrain_map or {})

    @staticmethod
    def interpret_colour(colour_values: Sequence[float]) -> CEHTerrainType:
        """Land-cover class for an (r, g, b) pixel; unknown colours give NO_DATA."""
        if len(colour_values) < 3:
            raise ValueError("colour needs red, green and blue values")
        red, green, blue = (int(v) for v in colour_values[:3])
        colour = red << 16 | green << 8 | blue
        try:
            return _TERRAIN_COLOURS[colour]
        except KeyError:
            log.warning("terrain colour not recognized (%d)", colour)
            return CEHTerrainType.NO_DATA

    def calculate(self, state: FeatureState) -> float:
        kind = self.terrain_map.get(state.current_face, CEHTerrainType.NO_DATA)

        if kind in _WOODLAND:
            self.add_warning(state, "Woodland", 3)
            return 0.4
        if kind is CEHTerrainType.ARABLE_AND_HORTICULTURE:
            return 0.7
        if kind in _GRASSLAND:
            return 0.85
        if kind is CEHTerrainType.HEATHER:
            self.add_warning(state, "Heather", 10)
            return 0.0
        if kind is CEHTerrainType.HEATHER_GRASSLAND:
            self.add_warning(state, "Potential heather", 7)
            return 0.35
        if kind in _WETLAND:
            self.add_warning(state, "Saltmarsh / Fen / Marsh / Swamp", 10)
            return 0.0
        if kind is CEHTerrainType.BOG:
            self.add_warning(state, "Bog", 10)
            return 0.0
        if kind in _BUILT_UP:
            return 1.0
        return 0.80


class WaterStatus(enum.Enum):
    """Whether a face lies on water, on land, or has no data."""

    WATER = "water"
    LAND = "land"
    NODATA = "nodata"


class BoolWaterFeature(Feature):
    """True where the current face is water or its status is unknown."""

    def __init__(
        self,
        feature_id: str,
        water_map: Mapping[Hashable, WaterStatus] | None = None,
    ) -> None:
        super().__init__(feature_id)
        self.water_map: dict[Hashable, WaterStatus] = dict(water_map or {})

    def calculate(self, state: FeatureState) -> bool:
        status = self.water_map.get(state.current_face, WaterStatus.NODATA)
        if status is WaterStatus.WATER:
            self.add_warning(state, "Water", 11)
            return True
        if status is WaterStatus.NODATA:
            self.add_warning(state, "water data unavailable", 11)
            return True
        return False


class PathFeature(Feature):
    """True when the step being evaluated runs along a known path segment."""

    def __init__(self, feature_id: str) -> None:
        super().__init__(feature_id)
        self.paths: set[tuple[Point3, Point3]] = set()

    @staticmethod
    def normalize_segment_order(p1: Point3, p2: Point3) -> tuple[Point3, Point3]:
        """The segment with its end points in lexicographic (x, y, z) order."""
        p1, p2 = Point3(*p1), Point3(*p2)
        return (p1, p2) if p1 < p2 else (p2, p1)

    def add_segments(self, segments: Iterable[tuple[Point3, Point3]]) -> None:
        """Record path segments, in either direction."""
        for start, end in segments:
            self.paths.add(self.normalize_segment_order(start, end))

    def calculate(self, state: FeatureState) -> bool:
        if state.current_vertex is None or state.next_vertex is None:
            raise ValueError("path lookup needs both the current and the next vertex")
        segment = self.normalize_segment_order(state.current_vertex, state.next_vertex)
        return segment in self.paths