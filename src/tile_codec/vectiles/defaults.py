''' Default encoder and decoder settings.
'''
DEFAULT_EXTENT = 4096
DEFAULT_CLIP_BUFFER = 0
DEFAULT_POLYGON_CLIP_BUFFER = 8
DEFAULT_AUTO_SCALE = True
DEFAULT_AUTOINCREMENT_IDS = False
DEFAULT_MINIMUM_AREA = 1.0
DEFAULT_MINIMUM_LENGTH = 1.0
