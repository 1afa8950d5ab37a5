"""Tests for the tile_codec.vectiles.encoder module."""

from decimal import Decimal

import pytest
from shapely.geometry import (GeometryCollection, LineString, MultiPolygon,
                              Point, Polygon, box)

from tile_codec.vectiles import vector_tile
from tile_codec.vectiles.clip import tile_envelope
from tile_codec.vectiles.encoder import VectorTileEncoder
from tile_codec.vectiles.tags import Float, UInt


def parse(data):
    tile = vector_tile.Tile()
    tile.ParseFromString(data)
    return tile


class TestConstruction:
    """Encoder options."""

    def test_defaults(self):
        encoder = VectorTileEncoder()
        assert encoder.extent == 4096
        assert encoder.scale == 16.0
        assert encoder.clip_geometry.equals(tile_envelope(0, 256))
        assert encoder.polygon_clip_geometry.equals(tile_envelope(8, 256))

    def test_without_auto_scale(self):
        encoder = VectorTileEncoder(512, clip_buffer=4, auto_scale=False)
        assert encoder.scale == 1.0
        assert encoder.clip_geometry.equals(tile_envelope(4, 512))

    @pytest.mark.parametrize("options", [{"extent": 0}, {"clip_buffer": -1},
                                         {"polygon_clip_buffer": -1}])
    def test_invalid_options(self, options):
        with pytest.raises(ValueError):
            VectorTileEncoder(**options)


class TestAddFeature:
    """Filtering, clipping and splitting of added features."""

    def test_empty_geometry_raises(self, encoder):
        with pytest.raises(ValueError):
            encoder.add_feature("layer", {}, LineString())
        with pytest.raises(ValueError):
            encoder.add_feature("layer", {}, None)
        assert encoder.layers == {}

    def test_small_polygon_is_dropped(self, encoder, encode_decode):
        encoder.add_feature("layer", {"n": 1}, box(10, 10, 11, 11))
        encoder.add_feature("layer", {"n": 2}, box(20, 20, 20.9, 21))
        assert [f.attributes["n"] for f in encode_decode(encoder)] == [1]

    def test_short_line_is_dropped(self, encoder):
        encoder.add_feature("layer", {}, LineString([(10, 10), (10.5, 10)]))
        assert encoder.layers == {}

    def test_point_outside_the_tile_is_dropped(self, encoder):
        encoder.add_feature("layer", {}, Point(-1, 10))
        assert encoder.layers == {}

    def test_polygon_is_clipped_to_the_buffered_tile(self, encoder, encode_decode):
        encoder.add_feature("layer", {}, box(-20, -20, 20, 20))
        feature, = encode_decode(encoder)
        assert feature.geometry.bounds == (-8.0, -8.0, 20.0, 20.0)

    def test_line_clipped_in_two_stays_one_feature(self, encoder, encode_decode):
        line = LineString([(10, 10), (10, -10), (20, -10), (20, 10)])
        encoder.add_feature("layer", {}, line)
        feature, = encode_decode(encoder)
        assert feature.geometry.geom_type == "MultiLineString"
        assert len(feature.geometry.geoms) == 2

    def test_geometry_collection_is_split(self, encoder, encode_decode):
        collection = GeometryCollection([box(10, 10, 20, 20), Point(24, 25)])
        encoder.add_feature("layer", {"name": "parts"}, collection)
        features = encode_decode(encoder)
        assert [f.geometry.geom_type for f in features] == ["Polygon", "Point"]
        assert all(f.attributes == {"name": "parts"} for f in features)

    def test_multi_polygon_is_one_feature(self, encoder, encode_decode, two_polygons):
        encoder.add_feature("layer", {}, MultiPolygon(list(two_polygons)))
        feature, = encode_decode(encoder)
        assert feature.geometry.geom_type == "MultiPolygon"

    def test_winding_does_not_change_output(self):
        cw = Polygon([(3, 6), (3, 34), (20, 34), (20, 6)])
        first, second = VectorTileEncoder(), VectorTileEncoder()
        first.add_feature("layer", {}, cw)
        second.add_feature("layer", {}, cw.reverse())
        assert first.encode() == second.encode()

    def test_null_attributes_are_skipped(self, encoder, encode_decode):
        encoder.add_feature("layer", {"key1": "value1", "key2": None}, Point(3, 6))
        feature, = encode_decode(encoder)
        assert feature.attributes == {"key1": "value1"}

    def test_attribute_types(self, encoder, encode_decode):
        attributes = {"string": "value1", "int": 123, "float": Float(234.1),
                      "double": 567.123, "negative": -123, "true": True,
                      "false": False, "uint": UInt(2 ** 63 + 5)}
        encoder.add_feature("layer", dict(attributes, decimal=Decimal("0.6")), Point(3, 6))
        feature, = encode_decode(encoder)
        assert feature.attributes == dict(attributes, decimal="0.6")
        assert type(feature.attributes["float"]) is Float
        assert type(feature.attributes["true"]) is bool


class TestIds:
    """Feature ids and the autoincrement counter."""

    def test_given_id(self, encoder, encode_decode):
        encoder.add_feature("layer", {}, Point(3, 6), 50)
        assert [f.id for f in encode_decode(encoder)] == [50]

    def test_no_id_decodes_as_zero(self, encoder, encode_decode):
        encoder.add_feature("layer", {}, Point(3, 6))
        assert [f.id for f in encode_decode(encoder)] == [0]

    def test_negative_id_means_no_id(self, encoder):
        encoder.add_feature("layer", {}, Point(3, 6), -1)
        assert not parse(encoder.encode()).layers[0].features[0].HasField("id")

    def test_autoincrement(self, encode_decode):
        encoder = VectorTileEncoder(256, autoincrement_ids=True)
        for i in range(10):
            encoder.add_feature("layer", {}, Point(i, i))
        assert [f.id for f in encode_decode(encoder)] == list(range(1, 11))

    def test_dropped_features_use_no_id(self, encode_decode):
        encoder = VectorTileEncoder(256, autoincrement_ids=True)
        encoder.add_feature("layer", {}, box(0, 0, 0.1, 0.1))
        encoder.add_feature("layer", {}, Point(300, 300))
        encoder.add_feature("layer", {}, Point(3, 6))
        assert [f.id for f in encode_decode(encoder)] == [1]

    def test_collection_members_share_one_id(self, encode_decode):
        encoder = VectorTileEncoder(256, autoincrement_ids=True)
        encoder.add_feature("layer", {}, GeometryCollection([Point(1, 1), Point(2, 2)]))
        encoder.add_feature("layer", {}, Point(3, 3))
        assert [f.id for f in encode_decode(encoder)] == [1, 1, 2]

    def test_negative_id_takes_the_next_autoincrement_id(self, encode_decode):
        encoder = VectorTileEncoder(256, autoincrement_ids=True)
        encoder.add_feature("layer", {}, Point(3, 6), -1)
        assert [f.id for f in encode_decode(encoder)] == [1]

    def test_autoincrement_follows_given_ids(self, encode_decode):
        encoder = VectorTileEncoder(256, autoincrement_ids=True)
        encoder.add_feature("layer", {}, Point(1, 1), 50)
        encoder.add_feature("layer", {}, Point(2, 2))
        encoder.add_feature("layer", {}, Point(3, 3), 27)
        encoder.add_feature("layer", {}, Point(4, 4))
        assert [f.id for f in encode_decode(encoder)] == [50, 51, 27, 52]

    def test_counter_is_shared_between_layers(self, encode_decode):
        encoder = VectorTileEncoder(256, autoincrement_ids=True)
        encoder.add_feature("a", {}, Point(1, 1))
        encoder.add_feature("b", {}, Point(2, 2))
        assert [(f.layer_name, f.id) for f in encode_decode(encoder)] == [("a", 1), ("b", 2)]


class TestEncode:
    """Serialized tile structure."""

    def test_layer_order_and_version(self, encoder):
        encoder.add_feature("b", {}, Point(1, 1))
        encoder.add_feature("a", {}, Point(2, 2))
        encoder.add_feature("b", {}, Point(3, 3))
        tile = parse(encoder.encode())
        assert [layer.name for layer in tile.layers] == ["b", "a"]
        assert [layer.version for layer in tile.layers] == [2, 2]
        assert [layer.extent for layer in tile.layers] == [256, 256]

    def test_point_commands(self, encoder):
        encoder.add_feature("layer", {}, Point(3, 6))
        feature = parse(encoder.encode()).layers[0].features[0]
        assert feature.type == vector_tile.POINT
        assert list(feature.geometry) == [9, 6, 12]

    def test_scaled_point_commands(self):
        encoder = VectorTileEncoder(512)
        encoder.add_feature("layer", {}, Point(3, 6))
        assert list(parse(encoder.encode()).layers[0].features[0].geometry) == [9, 12, 24]

    def test_unscaled_point_commands(self):
        encoder = VectorTileEncoder(512, auto_scale=False)
        encoder.add_feature("layer", {}, Point(6, 300))
        assert list(parse(encoder.encode()).layers[0].features[0].geometry) == [9, 12, 600]

    def test_tag_tables_are_per_layer(self, encoder):
        encoder.add_feature("a", {"kind": "park", "name": "x"}, Point(1, 1))
        encoder.add_feature("b", {"name": "y"}, Point(1, 1))
        encoder.add_feature("b", {"name": "y"}, Point(2, 2))
        a, b = parse(encoder.encode()).layers
        assert list(a.keys) == ["kind", "name"]
        assert list(b.keys) == ["name"]
        assert len(b.values) == 1
        assert [list(f.tags) for f in b.features] == [[0, 0], [0, 0]]

    def test_encode_is_repeatable(self, encoder):
        encoder.add_feature("layer", {"a": 1}, Point(3, 6))
        assert encoder.encode() == encoder.encode()

    def test_empty_tile(self, encoder):
        assert encoder.encode() == b""
