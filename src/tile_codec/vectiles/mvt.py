import shapely.wkb
from tile_codec.vectiles.decoder import VectorTileDecoder
from tile_codec.vectiles.encoder import VectorTileEncoder

def decode(file, layer_name=None, decoder=None):
    ''' Decode an MVT file into a list of decoded features.
    '''
    tile = file.read()
    data = (decoder or VectorTileDecoder()).decode(tile, layer_name)
    return data.as_list()

def add_feature_layer(encoder, name, features):
    ''' Add (WKB, property dict, id) features to a layer of an encoder.
    '''
    for feature in features:
        wkb, props, fid = feature
        encoder.add_feature(name or '', props, shapely.wkb.loads(wkb), fid)

    return encoder

def encode(file, name, features, encoder=None):
    encoder = add_feature_layer(encoder or VectorTileEncoder(), name, features)
    file.write(encoder.encode())

def merge(file, feature_layers, encoder=None):
    encoder = encoder or VectorTileEncoder()

    for layer in feature_layers:
        add_feature_layer(encoder, **layer)

    file.write(encoder.encode())
