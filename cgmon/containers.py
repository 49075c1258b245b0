"""Docker containers discovery and per-container CPU sampling.
"""

import logging
import os
import threading

from cgmon import cgroups
from cgmon import exc
from cgmon import fs
from cgmon import metrics

_LOGGER = logging.getLogger(__name__)

#: Directory, under each subsystem mount, holding the container cgroups
DOCKER_DIR = 'docker'

#: Length of a full container id
CONTAINER_ID_LEN = 64


def list_containers(subsys2mnt):
    """Get the list of containers from <subsystem mount>/docker.

    Subsystems are tried in turn until one of them yields containers. Any
    error listing a docker directory aborts the whole discovery.

    :param ``dict`` subsys2mnt:
        Map of cgroup subsystem to mount point.
    :returns:
        ``list`` - Full container ids.
    :raises:
        :class:`~cgmon.exc.DiscoveryError`
    """
    containers = []
    for subsystem, mountpoint in subsys2mnt.items():
        docker_dir = os.path.join(mountpoint, DOCKER_DIR)
        try:
            names = fs.ls_dirs(docker_dir)
        except OSError as err:
            raise exc.DiscoveryError(
                docker_dir,
                'Unable to list {} containers in {}: {}'.format(
                    subsystem, docker_dir, err
                )
            )

        containers.extend(
            name for name in names if len(name) == CONTAINER_ID_LEN
        )
        if containers:
            _LOGGER.debug('Found %d containers in %s',
                          len(containers), docker_dir)
            break

    return containers


def container_paths(subsys2mnt, container_id):
    """Return the cgroup directory of a container for every subsystem.
    """
    group = os.path.join(DOCKER_DIR, container_id)
    return {
        subsystem: cgroups.makepath(subsys2mnt, subsystem, group)
        for subsystem in subsys2mnt
    }


class Container:
    """CPU usage sampler of a single container.

    Keeps the previous and current snapshots of the cumulative counters,
    the delta between them is recomputed on every update.
    """

    __slots__ = (
        'container_id',
        'cgroup_paths',
        '_previous',
        '_current',
        '_delta',
        '_lock',
    )

    def __init__(self, container_id, cgroup_paths):
        self.container_id = container_id
        self.cgroup_paths = cgroup_paths
        self._previous = None
        self._current = None
        self._delta = None
        self._lock = threading.Lock()

    @classmethod
    def from_mounts(cls, subsys2mnt, container_id):
        """Create a sampler from the resolved subsystem mounts."""
        return cls(container_id, container_paths(subsys2mnt, container_id))

    def __repr__(self):
        return '{name}({container_id!r})'.format(
            name=self.__class__.__name__,
            container_id=self.container_id
        )

    @property
    def previous(self):
        """Previous snapshot."""
        with self._lock:
            return self._previous

    @property
    def current(self):
        """Latest snapshot."""
        with self._lock:
            return self._current

    def delta(self):
        """Latest computed :class:`~cgmon.metrics.CpuDelta`, or None."""
        with self._lock:
            return self._delta

    def update(self, reader=metrics.read_cpu_stats):
        """Take a new snapshot and compute the delta with the previous one.

        If the reader fails, the snapshots are left untouched so that the
        next successful update is measured against the last good one.

        :returns:
            :class:`~cgmon.metrics.CpuDelta`, ``None`` on the first update.
        :raises:
            :class:`~cgmon.exc.StatsCollectionError`
        """
        stats = reader(self.cgroup_paths, self.container_id)

        with self._lock:
            self._previous, self._current = self._current, stats
            self._delta = None
            self._delta = metrics.cpu_delta(
                self._current, self._previous, self.container_id
            )
            return self._delta
