"""Splitting geographic areas into fixed-size tiles and fetching them."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from terrainroute.api import APICaller

log = logging.getLogger(__name__)

_cache_enabled = True


def set_cache_enabled(is_enabled: bool) -> None:
    """Turn the chunk cache on or off for the whole process."""
    global _cache_enabled
    _cache_enabled = bool(is_enabled)


def is_cache_enabled() -> bool:
    """Whether the chunk cache is enabled."""
    return _cache_enabled


@dataclass(frozen=True, order=True)
class ChunkInfo:
    """Bounds of one tile in WGS84 degrees."""

    min_lat: float = 0.0
    min_lng: float = 0.0
    max_lat: float = 0.0
    max_lng: float = 0.0


def _format_number(value: float) -> str:
    """Shortest text for a number, with integral values written without '.0'."""
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


@dataclass
class ChunkManager:
    """Maps coordinates to tiles and builds tile request URLs.

    ``url`` is a template with ``{}`` placeholders. They are filled with the
    chunk bounds selected by ``position_order`` (0 = min lat, 1 = min lng,
    2 = max lat, 3 = max lng), followed by the API key.
    """

    url: str
    tile_size: float
    position_order: Sequence[int] = field(default=(0, 1, 2, 3))
    api_key: str = ""

    def __post_init__(self) -> None:
        if self.tile_size <= 0:
            raise ValueError("tile_size must be positive")

    def get_chunk_info(self, lat: float, lng: float) -> ChunkInfo:
        """The tile that contains the given coordinate."""
        min_lat = math.floor(lat / self.tile_size) * self.tile_size
        min_lng = math.floor(lng / self.tile_size) * self.tile_size
        return ChunkInfo(min_lat, min_lng, min_lat + self.tile_size, min_lng + self.tile_size)

    def get_required_chunks(
        self, min_lat: float, min_lng: float, max_lat: float, max_lng: float
    ) -> list[ChunkInfo]:
        """All tiles needed to cover the given bounds, row by row."""
        lat_low, lat_high = min(min_lat, max_lat), max(min_lat, max_lat)
        lng_low, lng_high = min(min_lng, max_lng), max(min_lng, max_lng)

        chunks: list[ChunkInfo] = []
        lat = lat_low
        while lat < lat_high + self.tile_size:
            lng = lng_low
            while lng < lng_high + self.tile_size:
                chunks.append(self.get_chunk_info(lat, lng))
                lng += self.tile_size
            lat += self.tile_size
        log.debug("chunks: %d", len(chunks))
        return chunks

    def format_url(self, chunk: ChunkInfo) -> str:
        """The request URL for one tile."""
        bounds = (chunk.min_lat, chunk.min_lng, chunk.max_lat, chunk.max_lng)
        args = [_format_number(bounds[i]) for i in self.position_order if 0 <= i <= 3]
        args.append(self.api_key)
        try:
            return self.url.format(*args)
        except (IndexError, KeyError) as err:
            raise ValueError(f"URL template does not match its arguments: {err}") from err

    def fetch_chunk(self, chunk: ChunkInfo, filepath: str | PathLike[str]) -> Path:
        """Download one tile into ``filepath`` and return its path."""
        url = self.format_url(chunk)
        log.debug(
            "getting for: %s %s %s %s",
            chunk.min_lat, chunk.min_lng, chunk.max_lat, chunk.max_lng,
        )
        APICaller().fetch_data_from_api(url, filepath)
        return Path(filepath)