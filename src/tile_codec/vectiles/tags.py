''' Per-layer interning of attribute keys and values.

Feature attributes are stored as pairs of indexes into the layer's key and
value lists. Values are typed: each is one of the seven Value fields of the
tile schema, and two values only share a slot when both the field and the
value are equal. An int 5 and a float 5.0 are different values.

Attribute values outside the recognised types are stored as their str()
text. That conversion loses the original type.
'''
from collections import namedtuple
from tile_codec.vectiles import vector_tile

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1

class Float(float):
    ''' A float stored in the 32-bit float field.
    '''
    def __new__(cls, *args, **kwargs):
        value = vector_tile.Value()
        value.float_value = float(*args, **kwargs)
        return float.__new__(cls, value.float_value)

class UInt(int):
    ''' An int stored in the unsigned 64-bit field.
    '''
    def __new__(cls, *args, **kwargs):
        value = int.__new__(cls, *args, **kwargs)
        if not 0 <= value <= UINT64_MAX:
            raise ValueError('%d is out of range for an unsigned 64-bit value' % value)
        return value

class TypedValue(namedtuple('TypedValue', ['kind', 'value'])):
    ''' An attribute value tagged with the Value field it is written to.
    '''
    __slots__ = ()

    @classmethod
    def of(cls, value):
        if isinstance(value, bool):
            return cls('bool_value', value)

        if isinstance(value, Float):
            return cls('float_value', float(value))

        if isinstance(value, float):
            return cls('double_value', float(value))

        if isinstance(value, UInt):
            return cls('uint_value', int(value))

        if isinstance(value, int):
            if INT64_MIN <= value <= INT64_MAX:
                return cls('sint_value', int(value))
            if 0 <= value <= UINT64_MAX:
                return cls('uint_value', int(value))

        elif isinstance(value, str):
            return cls('string_value', value)

        return cls('string_value', str(value))

readers = [('bool_value', bool),
           ('double_value', float),
           ('float_value', Float),
           ('int_value', int),
           ('sint_value', int),
           ('uint_value', UInt),
           ('string_value', str)]

def write_value(typed_value, message):
    setattr(message, typed_value.kind, typed_value.value)
    return message

def read_value(message):
    ''' Read a wire Value, taking the first field set in preference order.
    '''
    for kind, make in readers:
        if message.HasField(kind):
            return make(getattr(message, kind))
    return None

class TagDictionary:
    ''' Insertion-ordered key and value tables of one layer.

        Indexes are dense, start at 0 and are never reused or removed.
    '''
    def __init__(self):
        self._keys = {}
        self._values = {}

    def key(self, name):
        if name not in self._keys:
            self._keys[name] = len(self._keys)
        return self._keys[name]

    def value(self, value):
        typed_value = value if isinstance(value, TypedValue) else TypedValue.of(value)

        if typed_value not in self._values:
            self._values[typed_value] = len(self._values)
        return self._values[typed_value]

    def tags(self, attributes):
        ''' Intern a mapping and return its flat key/value index list.

            Entries whose value is None are skipped.
        '''
        tags = []
        for name, value in attributes.items():
            if value is None:
                continue
            tags.append(self.key(name))
            tags.append(self.value(value))
        return tags

    def keys(self):
        return list(self._keys)

    def values(self):
        return list(self._values)
