''' Mapbox vector tile encoding and decoding.
'''
from tile_codec.vectiles.decoder import Feature, FeatureIterable, VectorTileDecoder
from tile_codec.vectiles.encoder import VectorTileEncoder
from tile_codec.vectiles.tags import Float, UInt
