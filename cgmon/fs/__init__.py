"""File system utilities.
"""

import io
import logging
import os

_LOGGER = logging.getLogger(__name__)


def read_text(path):
    """Read the whole content of a (pseudo) file.
    """
    with io.open(path, 'r') as f:
        return f.read()


def ls_dirs(path):
    """List the names of the subdirectories of path.

    Symlinks to directories are followed, unreadable entries are skipped.
    Errors listing path itself are propagated.
    """
    dirs = []
    with os.scandir(path) as entries:
        for entry in entries:
            try:
                if entry.is_dir():
                    dirs.append(entry.name)
            except OSError as err:
                _LOGGER.debug('Skipping %r: %s', entry.path, err)

    return dirs
