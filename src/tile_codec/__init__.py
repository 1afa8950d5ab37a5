from tile_codec.vectiles import (Feature, FeatureIterable, Float, UInt,
                                 VectorTileDecoder, VectorTileEncoder)

__version__ = '0.1.0'
