"""Fetching remote data and georeferencing helpers."""

from __future__ import annotations

import logging
import urllib.error
import urllib.request
from collections.abc import Sequence
from os import PathLike
from pathlib import Path

log = logging.getLogger(__name__)


class APIError(RuntimeError):
    """Raised when data cannot be fetched from an API or stored locally."""


class APICaller:
    """Downloads the body of a URL into a file."""

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def fetch_data_from_api(self, url: str, filepath: str | PathLike[str]) -> int:
        """Fetch ``url`` and write the response body to ``filepath``.

        The body is written whatever the HTTP status. Returns the number of
        bytes written.
        """
        log.debug("Calling API (%s)", url)
        try:
            with urllib.request.urlopen(url, timeout=self.timeout) as response:
                body = response.read()
        except urllib.error.HTTPError as err:
            body = err.read()
        except (urllib.error.URLError, ValueError, OSError) as err:
            log.error("request failed: %s", err)
            raise APIError(f"request to {url} failed: {err}") from err

        try:
            Path(filepath).write_bytes(body)
        except OSError as err:
            log.error("failed to open file for API write")
            raise APIError(f"failed to write response to {filepath}: {err}") from err
        return len(body)


def dataset_center(
    geotransform: Sequence[float], x_size: int, y_size: int
) -> tuple[float, float]:
    """Centre of a raster as (latitude, longitude) from its affine geotransform."""
    if len(geotransform) != 6:
        raise ValueError("geotransform must have exactly six coefficients")
    center_x = x_size / 2.0
    center_y = y_size / 2.0
    longitude = geotransform[0] + center_x * geotransform[1] + center_y * geotransform[2]
    latitude = geotransform[3] + center_x * geotransform[4] + center_y * geotransform[5]
    return latitude, longitude