"""Configures proper yaml representation.
"""

import yaml
try:
    from yaml import CSafeDumper as Dumper
except ImportError:
    from yaml import SafeDumper as Dumper


def _repr_unicode(dumper, data):
    """Fix unicode string representation.
    """
    if '\n' in data:
        return dumper.represent_scalar('tag:yaml.org,2002:str', data,
                                       style='|')
    else:
        return dumper.represent_scalar('tag:yaml.org,2002:str', data)


yaml.add_representer(str, _repr_unicode, Dumper=Dumper)


def _repr_tuple(dumper, data):
    """Fix yaml tuple representation (use list).
    """
    return dumper.represent_list(list(data))


yaml.add_representer(tuple, _repr_tuple, Dumper=Dumper)


def _repr_none(dumper, _data):
    """Fix yaml None representation (use ~).
    """
    return dumper.represent_scalar('tag:yaml.org,2002:null', '~')


yaml.add_representer(type(None), _repr_none, Dumper=Dumper)


def dump(*args, **kwargs):
    """Delegate to yaml dumps.
    """
    kwargs['Dumper'] = Dumper
    return yaml.dump(*args, **kwargs)


__all__ = [
    'dump',
]
