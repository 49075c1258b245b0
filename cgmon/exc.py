"""cgmon exceptions.
"""


class CgmonError(Exception):
    """Base class for all cgmon errors.
    """

    __slots__ = (
    )

    @property
    def message(self):
        """The :class:`~CgmonError`'s message.
        """
        # pylint: disable=unsubscriptable-object
        return self.args[0]

    def __init__(self, msg):
        super(CgmonError, self).__init__(str(msg))

    def __str__(self):
        return self.message


class ParseError(CgmonError):
    """Malformed line in a kernel provided text file."""

    __slots__ = (
        'source',
        'line',
    )

    def __init__(self, source, line, msg=None):
        if msg is None:
            msg = 'failed to parse {} entry {!r}'.format(source, line)
        super(ParseError, self).__init__(msg=msg)
        self.source = source
        self.line = line


class DiscoveryError(CgmonError):
    """Unable to list the containers under a cgroup mount."""

    __slots__ = (
        'path',
    )

    def __init__(self, path, msg):
        super(DiscoveryError, self).__init__(msg=msg)
        self.path = path


class StatsCollectionError(CgmonError):
    """Non-fatal error, unable to collect the stats of one container."""

    __slots__ = (
        'container_id',
    )

    def __init__(self, container_id, msg):
        super(StatsCollectionError, self).__init__(msg=msg)
        self.container_id = container_id
