"""JSON CLI formatter."""

import json

from . import sanitize


class Default:
    """Default json formatter."""

    @staticmethod
    def format(obj):  # pylint: disable=W0622
        """Output object as compact json, one document per line."""
        return json.dumps(sanitize(obj), sort_keys=True)
