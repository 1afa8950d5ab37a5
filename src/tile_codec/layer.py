from collections import namedtuple
from tile_codec.vectiles.tags import TagDictionary, write_value

LayerFeature = namedtuple('LayerFeature', ['id', 'tags', 'type', 'geometry'])

class Layer:
    """ A Layer being built by an encoder.

        Attributes:

          name:
            Required layer name, unique within a tile. Layers are written in
            the order their names were first seen.

          extent:
            Size of the layer's integer coordinate grid. Default 4096.

          tags:
            TagDictionary interning the layer's attribute keys and values.
            Key and value indexes are local to the layer.

          features:
            List of LayerFeature records, each holding an optional id, the
            flat key/value index list, the wire geometry type and the
            geometry command list.
    """
    def __init__(self, name, extent=4096):
        self.name = name
        self.extent = extent
        self.tags = TagDictionary()
        self.features = []

    def add_feature(self, attributes, type, geometry, id=None):
        feature = LayerFeature(id, self.tags.tags(attributes), type, geometry)
        self.features.append(feature)
        return feature

    def write(self, pb_layer):
        ''' Fill a vector_tile Tile.Layer message.
        '''
        pb_layer.version = 2
        pb_layer.name = self.name
        pb_layer.extent = self.extent
        pb_layer.keys.extend(self.tags.keys())

        for value in self.tags.values():
            write_value(value, pb_layer.values.add())

        for feature in self.features:
            pb_feature = pb_layer.features.add()
            if feature.id is not None:
                pb_feature.id = feature.id
            pb_feature.tags.extend(feature.tags)
            pb_feature.type = feature.type
            pb_feature.geometry.extend(feature.geometry)

        return pb_layer
