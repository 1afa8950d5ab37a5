"""Shared pytest fixtures for tile_codec tests."""

import pytest
from shapely.geometry import Polygon

from tile_codec.vectiles.decoder import VectorTileDecoder
from tile_codec.vectiles.encoder import VectorTileEncoder


@pytest.fixture
def encoder():
    """Encoder with extent 256, so pixel coordinates are encoded unscaled."""
    return VectorTileEncoder(256)


@pytest.fixture
def decoder():
    return VectorTileDecoder()


@pytest.fixture
def encode_decode(decoder):
    """Encode everything added to an encoder and decode it back as a list."""
    def run(encoder, layer_name=None):
        return decoder.decode(encoder.encode(), layer_name).as_list()
    return run


@pytest.fixture
def two_polygons():
    """A MultiPolygon of a plain square and a square with a hole."""
    first = Polygon([(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)])
    second = Polygon([(11, 11), (20, 11), (20, 20), (11, 20), (11, 11)],
                     [[(13, 13), (13, 17), (17, 17), (17, 13), (13, 13)]])
    return first, second
