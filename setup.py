from setuptools import setup

setup(name = 'tile-codec',
      version = '0.1.0',
      classifiers = ['Programming Language :: Python :: 3'],
      packages = ['tile_codec', 'tile_codec.vectiles'],
      package_dir = {'tile_codec': 'src/tile_codec'},
      python_requires = '>=3.8',
      install_requires = ['mapbox-vector-tile>=2.0',
                          'protobuf>=3.20',
                          'Shapely>=2.0'],
      extras_require = {'test': ['pytest']})
