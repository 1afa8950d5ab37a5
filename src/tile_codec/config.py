import json
import tile_codec.util as u
import tile_codec.vectiles.defaults as d
from tile_codec.vectiles.decoder import VectorTileDecoder
from tile_codec.vectiles.encoder import VectorTileEncoder

encoder_keys = ['extent', 'clip_buffer', 'polygon_clip_buffer', 'auto_scale',
                'autoincrement_ids', 'minimum_area', 'minimum_length']

decoder_keys = ['auto_scale']

def encoder_defaults():
    return {'extent': d.DEFAULT_EXTENT,
            'clip_buffer': d.DEFAULT_CLIP_BUFFER,
            'polygon_clip_buffer': d.DEFAULT_POLYGON_CLIP_BUFFER,
            'auto_scale': d.DEFAULT_AUTO_SCALE,
            'autoincrement_ids': d.DEFAULT_AUTOINCREMENT_IDS,
            'minimum_area': d.DEFAULT_MINIMUM_AREA,
            'minimum_length': d.DEFAULT_MINIMUM_LENGTH}

def build_options(defaults, section_d, keys):
    unknown = set(section_d) - set(keys)
    if unknown:
        raise ValueError('Unknown option(s): ' + ', '.join(sorted(unknown)))

    options = dict(defaults)
    options.update(u.select_keys(section_d, keys))
    return options

class Config:
    """ Encoder and decoder settings, read from a dictionary:

          {
            "encoder": {"extent": 4096, "clip_buffer": 0, ...},
            "decoder": {"auto_scale": true}
          }

        Missing settings take the values in tile_codec.vectiles.defaults.
        Encoders are stateful, so encoder() builds a new one on every call.
    """
    def __init__(self, config_d):
        self.encoder_options = build_options(encoder_defaults(),
                                             config_d.get('encoder', {}),
                                             encoder_keys)
        self.decoder_options = build_options({'auto_scale': d.DEFAULT_AUTO_SCALE},
                                             config_d.get('decoder', {}),
                                             decoder_keys)

    def encoder(self):
        return VectorTileEncoder(**self.encoder_options)

    def decoder(self):
        return VectorTileDecoder(**self.decoder_options)

def parse_config_file(configpath):
    with open(configpath) as file:
        return Config(json.load(file))
