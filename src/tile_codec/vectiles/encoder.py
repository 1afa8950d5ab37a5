''' Vector tile encoder.

Features are added one at a time with a layer name, an attribute mapping and
a shapely geometry. Each geometry goes through the same steps:

  1. polygons and lines smaller than the configured minimums are dropped,
  2. geometry collections are split into one feature per member,
  3. geometry is clipped to the tile envelope plus buffer,
  4. polygon rings are wound to the tile convention,
  5. coordinates are scaled, rounded and encoded as a command list.

With auto_scale on, geometry is given in a 0..256 pixel space and scaled up
to the extent. With auto_scale off, geometry is given in 0..extent units.
'''
import logging
from tile_codec.layer import Layer
from tile_codec.vectiles import clip, normalize
from tile_codec.vectiles import defaults as d
from tile_codec.vectiles.commands import geometry_commands
from tile_codec.vectiles.vector_tile import Tile

log = logging.getLogger(__name__)

class VectorTileEncoder:
    ''' Accumulates layers of features and serializes them as one tile.

        Not thread safe; use one encoder per tile.
    '''
    def __init__(self, extent=d.DEFAULT_EXTENT,
                 clip_buffer=d.DEFAULT_CLIP_BUFFER,
                 polygon_clip_buffer=d.DEFAULT_POLYGON_CLIP_BUFFER,
                 auto_scale=d.DEFAULT_AUTO_SCALE,
                 autoincrement_ids=d.DEFAULT_AUTOINCREMENT_IDS,
                 minimum_area=d.DEFAULT_MINIMUM_AREA,
                 minimum_length=d.DEFAULT_MINIMUM_LENGTH):

        if extent <= 0:
            raise ValueError('extent must be positive, got %r' % extent)

        if clip_buffer < 0 or polygon_clip_buffer < 0:
            raise ValueError('clip buffers must not be negative')

        self.extent = int(extent)
        self.auto_scale = auto_scale
        self.autoincrement_ids = autoincrement_ids
        self.minimum_area = minimum_area
        self.minimum_length = minimum_length
        self.scale = self.extent / 256.0 if auto_scale else 1.0

        size = 256 if auto_scale else self.extent
        self.clip_geometry = clip.tile_envelope(clip_buffer, size)
        self.polygon_clip_geometry = clip.tile_envelope(polygon_clip_buffer, size)

        self.layers = {}
        self.autoincrement = 1

    def add_feature(self, layer_name, attributes, geometry, id=None):
        ''' Add a feature to the named layer.

            Attributes with a None value are skipped. A missing or negative id
            gets the next autoincrement id when autoincrement_ids is set, and
            no id otherwise. Features that are too small or fall outside the
            tile are dropped without error and use up no id. Members of a
            geometry collection are stored as separate features sharing the
            same id.
        '''
        if geometry is None or geometry.is_empty:
            raise ValueError('empty geometry')

        if id is not None and id < 0:
            id = None

        encoded = self._encode(layer_name, geometry)

        if not encoded:
            return

        self._store(layer_name, attributes or {}, encoded, id)

    def _encode(self, layer_name, geometry):
        ''' Filter, split and clip geometry into (type, commands) pairs.
        '''
        if normalize.is_too_small(geometry, self.minimum_area, self.minimum_length):
            log.debug('Dropping small %s from layer %s', geometry.geom_type, layer_name)
            return []

        members = normalize.parts(geometry)
        if members is not None:
            return [pair for member in members for pair in self._encode(layer_name, member)]

        geometry = clip.clip(geometry, self.envelope(geometry))

        if geometry is None:
            log.debug('Dropping feature outside the tile from layer %s', layer_name)
            return []

        return self._encode_clipped(geometry)

    def _encode_clipped(self, geometry):
        # clipping can turn a polygon into a mix of polygons, lines and points
        members = normalize.parts(geometry)
        if members is not None:
            return [pair for member in members for pair in self._encode_clipped(member)]

        geometry = normalize.orient(geometry)
        return [(normalize.geom_type(geometry), geometry_commands(geometry, self.scale))]

    def _store(self, layer_name, attributes, encoded, id):
        if id is None and self.autoincrement_ids:
            id = self.autoincrement

        if layer_name not in self.layers:
            self.layers[layer_name] = Layer(layer_name, self.extent)

        for geom_type, commands in encoded:
            self.layers[layer_name].add_feature(attributes, geom_type, commands, id)

        if id is not None:
            self.autoincrement = max(self.autoincrement, id + 1)

    def envelope(self, geometry):
        if geometry.geom_type in ('Polygon', 'MultiPolygon'):
            return self.polygon_clip_geometry
        return self.clip_geometry

    def encode(self):
        ''' Serialize every layer added so far and return the tile bytes.
        '''
        tile = Tile()

        for layer in self.layers.values():
            layer.write(tile.layers.add())

        return tile.SerializeToString(deterministic=True)
