''' Clipping of feature geometry to the tile envelope.

Clipping is best effort. Topology errors from the geometry engine fall back
to the unclipped geometry, so one awkward polygon never fails a whole tile.
'''
import logging
from shapely import wkt
from shapely.errors import GEOSException
from shapely.geometry import box

log = logging.getLogger(__name__)

def tile_envelope(buffer, size):
    ''' Square polygon covering [-buffer, size + buffer] on both axes.
    '''
    return box(-buffer, -buffer, size + buffer, size + buffer)

def contains_bounds(envelope, geometry):
    xmin, ymin, xmax, ymax = envelope.bounds
    gxmin, gymin, gxmax, gymax = geometry.bounds

    return xmin <= gxmin and ymin <= gymin and gxmax <= xmax and gymax <= ymax

def intersect(envelope, geometry):
    clipped = envelope.intersection(geometry)

    if clipped.is_empty and envelope.intersects(geometry):
        # a WKT round trip clears up numerical noise that sometimes makes
        # GEOS return an empty intersection
        log.debug('Empty intersection for a geometry touching the envelope, retrying via WKT')
        clipped = envelope.intersection(wkt.loads(wkt.dumps(geometry)))

    return clipped

def clip(geometry, envelope):
    ''' Clip geometry to envelope, or return None when nothing is left.

        Single points are only tested for coverage and never intersected.
    '''
    if geometry.geom_type == 'Point':
        return geometry if envelope.covers(geometry) else None

    if contains_bounds(envelope, geometry):
        return geometry

    try:
        clipped = intersect(envelope, geometry)
    except GEOSException as e:
        log.warning('Could not clip %s, keeping it unclipped: %s', geometry.geom_type, e)
        return geometry

    return None if clipped.is_empty else clipped
