''' Mapbox vector tile messages.

The generated classes ship with mapbox-vector-tile. Its schema names the
messages in lower case (tile, tile.layer, tile.feature, tile.value) and the
geometry types Unknown, Point, LineString and Polygon; they are aliased here
under the names the rest of the package uses.
'''
from mapbox_vector_tile.Mapbox import vector_tile_pb2

Tile = vector_tile_pb2.tile
Value = Tile.value

UNKNOWN = Tile.Unknown
POINT = Tile.Point
LINESTRING = Tile.LineString
POLYGON = Tile.Polygon
