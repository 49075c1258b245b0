"""cgmon logging configuration helpers.
"""

import importlib.resources
import io
import json
import logging
import os


def set_log_level(log_level):
    """Set loglevel for all cgmon modules
    """
    # pylint: disable=consider-iterating-dictionary
    # yes, we need to iterate keys
    logger_keys = [
        lk for lk in logging.Logger.manager.loggerDict.keys()
        if '.' not in lk and lk[:5] == 'cgmon'
    ]

    logging.getLogger().setLevel(log_level)
    for logger_key in logger_keys:
        logging.getLogger(logger_key).setLevel(log_level)


def _load_logging_file(name):
    """Load logging config json file shipped in cgmon/logging/xxx.json
    """
    log_conf_file = importlib.resources.files(__name__).joinpath(name)
    return json.loads(log_conf_file.read_text(encoding='utf8'))


def load_logging_conf(name):
    """Load logging conf, $CGMON_APPROOT/logging/<name> takes precedence.
    """
    logconf_path = os.path.join(
        os.environ.get('CGMON_APPROOT', ''),
        'logging',
        name
    )

    if os.environ.get('CGMON_APPROOT') and os.path.exists(logconf_path):
        with io.open(logconf_path) as f:
            return json.loads(f.read())

    return _load_logging_file(name)
