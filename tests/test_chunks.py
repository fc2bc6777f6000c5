import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from terrainroute.api import APIError
from terrainroute.chunks import (
    ChunkInfo,
    ChunkManager,
    is_cache_enabled,
    set_cache_enabled,
)


class _EchoHandler(BaseHTTPRequestHandler):
    def do_GET(self):
        body = self.path.encode()
        self.send_response(200)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, *args):
        pass


@pytest.fixture
def server_url():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _EchoHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


@pytest.fixture
def restore_cache_flag():
    original = is_cache_enabled()
    yield
    set_cache_enabled(original)


def test_cache_toggle(restore_cache_flag):
    set_cache_enabled(False)
    assert is_cache_enabled() is False
    set_cache_enabled(True)
    assert is_cache_enabled() is True


@pytest.mark.parametrize("lat,lng", [(56.3, -2.8), (-12.25, 130.75), (0.0, 0.0)])
def test_chunk_contains_point(lat, lng):
    manager = ChunkManager("{}{}{}{}{}", 0.5)
    chunk = manager.get_chunk_info(lat, lng)
    assert chunk.min_lat <= lat < chunk.max_lat
    assert chunk.min_lng <= lng < chunk.max_lng
    assert chunk.max_lat - chunk.min_lat == 0.5
    assert chunk.max_lng - chunk.min_lng == 0.5
    assert (chunk.min_lat / 0.5).is_integer()


def test_nearby_points_share_chunk():
    manager = ChunkManager("{}{}{}{}{}", 1.0)
    assert manager.get_chunk_info(56.1, -2.9) == manager.get_chunk_info(56.9, -2.1)


def test_required_chunks_cover_corners():
    manager = ChunkManager("{}{}{}{}{}", 1.0)
    chunks = manager.get_required_chunks(56.3, -3.5, 57.6, -2.2)
    assert manager.get_chunk_info(56.3, -3.5) in chunks
    assert manager.get_chunk_info(57.6, -2.2) in chunks
    assert len(set(chunks)) == len(chunks)


def test_required_chunks_order_independent_of_corner_order():
    manager = ChunkManager("{}{}{}{}{}", 1.0)
    a = manager.get_required_chunks(56.3, -3.5, 57.6, -2.2)
    b = manager.get_required_chunks(57.6, -2.2, 56.3, -3.5)
    assert a == b


def test_single_point_bounds_needs_chunks():
    manager = ChunkManager("{}{}{}{}{}", 1.0)
    chunks = manager.get_required_chunks(56.5, -2.5, 56.5, -2.5)
    assert manager.get_chunk_info(56.5, -2.5) == chunks[0]


def test_format_url_default_order():
    manager = ChunkManager("s={}&w={}&n={}&e={}&k={}", 1.0, api_key="placeholder")
    url = manager.format_url(ChunkInfo(56.0, -3.0, 57.0, -2.0))
    assert url == "s=56&w=-3&n=57&e=-2&k=placeholder"


def test_format_url_custom_order_matches_default():
    chunk = ChunkInfo(56.25, -3.5, 56.75, -3.0)
    default = ChunkManager("{}|{}|{}|{}|{}", 0.5, api_key="placeholder")
    reversed_order = ChunkManager(
        "{3}|{2}|{1}|{0}|{4}", 0.5, position_order=(3, 2, 1, 0), api_key="placeholder"
    )
    assert reversed_order.format_url(chunk) == default.format_url(chunk)


def test_format_url_too_few_arguments_raises():
    manager = ChunkManager("{}{}{}{}{}{}{}", 1.0)
    with pytest.raises(ValueError):
        manager.format_url(ChunkInfo(0, 0, 1, 1))


def test_invalid_tile_size_raises():
    with pytest.raises(ValueError):
        ChunkManager("{}", 0)


def test_fetch_chunk_downloads_formatted_url(server_url, tmp_path):
    manager = ChunkManager(server_url + "/tile/{}/{}/{}/{}?key={}", 1.0, api_key="placeholder")
    chunk = ChunkInfo(56.0, -3.0, 57.0, -2.0)
    path = manager.fetch_chunk(chunk, tmp_path / "tile.tiff")
    expected_path = manager.format_url(chunk)[len(server_url):]
    assert path.read_bytes() == expected_path.encode()


def test_fetch_chunk_unreachable_raises(tmp_path):
    manager = ChunkManager("http://127.0.0.1:1/{}{}{}{}{}", 1.0)
    with pytest.raises(APIError):
        manager.fetch_chunk(ChunkInfo(0, 0, 1, 1), tmp_path / "tile.tiff")