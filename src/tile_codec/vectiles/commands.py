''' Geometry command stream of the vector tile format.

A feature's geometry is a flat list of unsigned integers. Each command is a
header integer packing the command id and a repeat count, followed by
count pairs of zigzag-encoded coordinate deltas (none for ClosePath):

    MoveTo(3, 6), LineTo(8, 12), LineTo(20, 34), ClosePath

    is encoded as [9, 6, 12, 18, 10, 12, 24, 44, 15]

      9 = MoveTo, count 1         6, 12 = delta (+3, +6)
     18 = LineTo, count 2        10, 12 = delta (+5, +6)
                                 24, 44 = delta (+12, +22)
     15 = ClosePath, count 1

Deltas are relative to a cursor that starts at (0, 0) for every feature and
carries over from one ring or part to the next.
'''
import math
from google.protobuf.message import DecodeError
from tile_codec.vectiles.vector_tile import POINT

MOVE_TO = 1
LINE_TO = 2
CLOSE_PATH = 7

def command_integer(command_id, count):
    return (count << 3) | (command_id & 0x7)

def command_id(integer):
    return integer & 0x7

def command_count(integer):
    return integer >> 3

def zigzag_encode(n):
    return (n << 1) ^ (n >> 31)

def zigzag_decode(n):
    return (n >> 1) ^ -(n & 1)

def quantize(value, scale):
    ''' Scale a coordinate and round it half away from zero.
    '''
    value = value * scale
    return int(math.copysign(math.floor(abs(value) + 0.5), value))

class Cursor:
    ''' Position of the last emitted vertex, one per encoded feature.
    '''
    def __init__(self, x=0, y=0):
        self.x = x
        self.y = y

    def move(self, x, y):
        dx, dy = x - self.x, y - self.y
        self.x, self.y = x, y
        return dx, dy

def encode_coords(coords, cursor, scale=1.0, close_path=False, multi_point=False):
    ''' Encode one line, ring or set of points as commands.

        Points equal to the previously emitted point are skipped, as is a
        closing point equal to the first point when close_path is set. A
        line that collapses to a single point is left as a bare MoveTo.
    '''
    coords = list(coords)

    if not coords:
        raise ValueError('empty geometry')

    last = len(coords) - 1
    commands = [command_integer(MOVE_TO, len(coords) if multi_point else 1)]
    line_to_index = None
    line_to_count = 0

    for i, coord in enumerate(coords):
        x, y = quantize(coord[0], scale), quantize(coord[1], scale)

        if i > 0 and not multi_point:
            if x == cursor.x and y == cursor.y:
                continue

            if close_path and i == last and coord[:2] == coords[0][:2]:
                continue

            line_to_count += 1

        dx, dy = cursor.move(x, y)
        commands.append(zigzag_encode(dx))
        commands.append(zigzag_encode(dy))

        if i == 0 and last > 0 and not multi_point:
            # patched with the real count once every point has been seen
            line_to_index = len(commands)
            commands.append(None)

    if line_to_index is not None:
        if line_to_count:
            commands[line_to_index] = command_integer(LINE_TO, line_to_count)
        else:
            del commands[line_to_index]

    if close_path:
        commands.append(command_integer(CLOSE_PATH, 1))

    return commands

def encode_point(point, cursor, scale):
    return encode_coords(point.coords, cursor, scale)

def encode_multi_point(multi_point, cursor, scale):
    coords = [point.coords[0] for point in multi_point.geoms if not point.is_empty]
    return encode_coords(coords, cursor, scale, multi_point=True)

def encode_line_string(line, cursor, scale):
    return encode_coords(line.coords, cursor, scale)

def encode_polygon(polygon, cursor, scale):
    commands = encode_coords(polygon.exterior.coords, cursor, scale, close_path=True)
    for ring in polygon.interiors:
        commands.extend(encode_coords(ring.coords, cursor, scale, close_path=True))
    return commands

def encode_parts(encode_part):
    def encode(multi, cursor, scale):
        commands = []
        for part in multi.geoms:
            if not part.is_empty:
                commands.extend(encode_part(part, cursor, scale))
        return commands
    return encode

encoders = {'Point': encode_point,
            'MultiPoint': encode_multi_point,
            'LineString': encode_line_string,
            'LinearRing': encode_line_string,
            'MultiLineString': encode_parts(encode_line_string),
            'Polygon': encode_polygon,
            'MultiPolygon': encode_parts(encode_polygon)}

def geometry_commands(geometry, scale=1.0):
    ''' Encode a shapely geometry as a command list.

        The cursor is reset for every call, so each call encodes one feature.
    '''
    if geometry.geom_type not in encoders:
        raise ValueError(geometry.geom_type + ' is not supported')

    return encoders[geometry.geom_type](geometry, Cursor(), scale)

def decode_commands(integers, geom_type, scale=1.0):
    ''' Decode a command list into parts, each a list of (x, y) tuples.

        Every MoveTo starts a new part. Coordinates are divided by scale.
    '''
    parts = []
    part = None
    x, y = 0, 0
    i, end = 0, len(integers)

    while i < end:
        integer = integers[i]
        cmd, count = command_id(integer), command_count(integer)
        i += 1

        if cmd == CLOSE_PATH:
            if part is None:
                raise DecodeError('ClosePath without a current point')
            if count != 1:
                raise DecodeError('ClosePath with count %d' % count)
            if geom_type != POINT and part:
                part.append(part[0])
            continue

        if cmd not in (MOVE_TO, LINE_TO):
            raise DecodeError('Unknown geometry command %d' % cmd)

        if i + 2 * count > end:
            raise DecodeError('Truncated geometry command at %d' % (i - 1))

        if cmd == LINE_TO and part is None:
            raise DecodeError('LineTo without a current point')

        for _ in range(count):
            x += zigzag_decode(integers[i])
            y += zigzag_decode(integers[i + 1])
            i += 2

            if cmd == MOVE_TO:
                part = []
                parts.append(part)

            part.append((x / scale, y / scale))

    return parts
