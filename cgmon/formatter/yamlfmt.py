"""Yaml CLI formatter."""

from cgmon import yamlwrapper as yaml
from . import sanitize


class Default:
    """Default YAML formatter."""

    @staticmethod
    def format(obj):  # pylint: disable=W0622
        """Returns yaml representation of the object with stripped nulls."""
        return yaml.dump(sanitize(obj),
                         default_flow_style=False,
                         explicit_start=True,
                         explicit_end=True)
