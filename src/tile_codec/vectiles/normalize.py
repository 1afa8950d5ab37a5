''' Geometry normalization ahead of encoding.
'''
from shapely.geometry import MultiPolygon
from shapely.geometry.polygon import orient as orient_polygon
from tile_codec.vectiles.vector_tile import UNKNOWN, POINT, LINESTRING, POLYGON

geom_types = {'Point': POINT,
              'MultiPoint': POINT,
              'LineString': LINESTRING,
              'LinearRing': LINESTRING,
              'MultiLineString': LINESTRING,
              'Polygon': POLYGON,
              'MultiPolygon': POLYGON}

def geom_type(geometry):
    ''' Wire geometry type. Multi-part geometries share the singular type.
    '''
    return geom_types.get(geometry.geom_type, UNKNOWN)

def is_too_small(geometry, minimum_area, minimum_length):
    ''' True for polygons with less area or lines with less length than the
        minimums, measured in the geometry's own units.
    '''
    if geometry.geom_type in ('Polygon', 'MultiPolygon'):
        return geometry.area < minimum_area

    if geometry.geom_type == 'LineString':
        return geometry.length < minimum_length

    return False

def orient(geometry):
    ''' Wind exterior rings counter-clockwise and interior rings clockwise.

        Each ring is tested on its own and reversed when needed. Seen with
        the y axis pointing down, as tile coordinates are, this makes
        exterior rings clockwise.
    '''
    if geometry.geom_type == 'Polygon':
        return orient_polygon(geometry, sign=1.0)

    if geometry.geom_type == 'MultiPolygon':
        return MultiPolygon([orient_polygon(polygon, sign=1.0)
                             for polygon in geometry.geoms
                             if not polygon.is_empty])

    return geometry

def parts(geometry):
    ''' Members of a plain GeometryCollection, each added as its own feature.

        Returns None for any other geometry type.
    '''
    if geometry.geom_type != 'GeometryCollection':
        return None

    return [part for part in geometry.geoms if not part.is_empty]
