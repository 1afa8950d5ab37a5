''' Vector tile decoder.

decode() parses the tile bytes up front, so malformed input fails before any
feature is produced, and returns a FeatureIterable that rebuilds features one
at a time as it is iterated.
'''
import logging
from collections import namedtuple
from google.protobuf.message import DecodeError
from shapely.geometry import (GeometryCollection, LinearRing, LineString,
                              MultiLineString, MultiPoint, MultiPolygon,
                              Point, Polygon)
from tile_codec import util as u
from tile_codec.vectiles import defaults as d
from tile_codec.vectiles.commands import decode_commands
from tile_codec.vectiles.tags import read_value
from tile_codec.vectiles.vector_tile import Tile, POINT, LINESTRING, POLYGON

log = logging.getLogger(__name__)

Feature = namedtuple('Feature', ['layer_name', 'extent', 'id', 'geometry', 'attributes'])

def points(parts):
    coords = [coord for part in parts for coord in part]

    if len(coords) == 1:
        return Point(coords[0])
    elif coords:
        return MultiPoint(coords)

def lines(parts):
    parts = [part for part in parts if len(part) >= 2]

    if len(parts) == 1:
        return LineString(parts[0])
    elif parts:
        return MultiLineString(parts)

def group_rings(parts):
    ''' Group rings into polygons as lists of [exterior, hole, ...].

        A ring with positive area in tile coordinates (counter-clockwise as
        the numbers read, clockwise on screen with y down) starts a new
        polygon. A ring with negative area is a hole in the polygon before
        it. Rings that cannot enclose any area are skipped.
    '''
    polygons = []

    for part in parts:
        if len(part) < 4:
            log.debug('Skipping ring with %d coordinates', len(part))
            continue

        ring = LinearRing(part)
        if Polygon(ring).area == 0:
            log.debug('Skipping ring with no area')
            continue

        if ring.is_ccw or not polygons:
            polygons.append([ring])
        else:
            polygons[-1].append(ring)

    return polygons

def polygons(parts):
    rings = group_rings(parts)

    if len(rings) == 1:
        return Polygon(rings[0][0], rings[0][1:])
    elif rings:
        return MultiPolygon([Polygon(r[0], r[1:]) for r in rings])

builders = {POINT: points,
            LINESTRING: lines,
            POLYGON: polygons}

def build_geometry(parts, geom_type):
    build = builders.get(geom_type)
    geometry = build(parts) if build else None

    return GeometryCollection() if geometry is None else geometry

def read_layer_values(pb_layer):
    return [read_value(value) for value in pb_layer.values]

def check_tags(pb_layer):
    keys, values = len(pb_layer.keys), len(pb_layer.values)

    for pb_feature in pb_layer.features:
        if len(pb_feature.tags) % 2:
            raise DecodeError('Odd tag count in layer "%s"' % pb_layer.name)

        for key, value in u.pairs(pb_feature.tags):
            if key >= keys or value >= values:
                raise DecodeError('Tag index out of range in layer "%s"' % pb_layer.name)

class FeatureIterable:
    ''' Features of a parsed tile, optionally limited to one layer.
    '''
    def __init__(self, tile, layer_name=None, auto_scale=d.DEFAULT_AUTO_SCALE):
        self.tile = tile
        self.layer_name = layer_name
        self.auto_scale = auto_scale

    def __iter__(self):
        for pb_layer in self.tile.layers:
            if self.layer_name is not None and pb_layer.name != self.layer_name:
                continue

            for feature in self.read_layer(pb_layer):
                yield feature

    def read_layer(self, pb_layer):
        extent = pb_layer.extent
        scale = extent / 256.0 if self.auto_scale else 1.0
        keys = list(pb_layer.keys)
        values = read_layer_values(pb_layer)

        for pb_feature in pb_layer.features:
            attributes = {keys[k]: values[v] for k, v in u.pairs(pb_feature.tags)}
            parts = decode_commands(pb_feature.geometry, pb_feature.type, scale)
            geometry = build_geometry(parts, pb_feature.type)

            yield Feature(pb_layer.name, extent, pb_feature.id, geometry, attributes)

    def as_list(self):
        return list(self)

    def layer_names(self):
        ''' Names of every layer in the tile, whatever the layer filter.
        '''
        return frozenset(pb_layer.name for pb_layer in self.tile.layers)

class VectorTileDecoder:
    ''' Decodes tile bytes into features.

        With auto_scale on, coordinates are scaled down from the layer extent
        to a 0..256 pixel space. With it off, they are returned in extent
        units as stored.
    '''
    def __init__(self, auto_scale=d.DEFAULT_AUTO_SCALE):
        self.auto_scale = auto_scale

    def decode(self, data, layer_name=None):
        ''' Parse tile bytes and return a FeatureIterable.

            Raises google.protobuf.message.DecodeError for malformed tiles.
        '''
        tile = Tile()
        tile.ParseFromString(bytes(data))

        if not tile.IsInitialized():
            missing = ', '.join(tile.FindInitializationErrors())
            raise DecodeError('Tile is missing required fields: ' + missing)

        for pb_layer in tile.layers:
            if pb_layer.extent == 0:
                raise DecodeError('Layer "%s" has a zero extent' % pb_layer.name)
            check_tags(pb_layer)

        return FeatureIterable(tile, layer_name, self.auto_scale)
