import json
from shapely.geometry import mapping

def write_to_file(file, geojson):
    ''' Write a GeoJSON object to a text file in compact form.
    '''
    json.dump(geojson, file, separators=(',', ':'))

def get_feature_layer(features):
    ''' Convert decoded features into a GeoJSON FeatureCollection.

        Features decoded without an id carry the wire default of 0.
    '''
    _features = []
    for feature in features:
        _features.append({
            'id': feature.id,
            'type': 'Feature',
            'properties': feature.attributes,
            'geometry': mapping(feature.geometry)
        })

    return {'type': 'FeatureCollection',
            'features': _features}

def encode(file, features):
    layer = get_feature_layer(features)
    write_to_file(file, layer)

def merge(file, features):
    ''' Write decoded features from several layers as one object holding a
        FeatureCollection per layer name.
    '''
    by_layer = {}
    for feature in features:
        by_layer.setdefault(feature.layer_name, []).append(feature)

    layers = {name: get_feature_layer(fs) for name, fs in by_layer.items()}
    write_to_file(file, layers)
