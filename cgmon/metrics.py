"""Collects container CPU metrics and computes their deltas.
"""

import collections
import errno
import logging
import time

from cgmon import cgutils
from cgmon import exc

_LOGGER = logging.getLogger(__name__)

#: Subsystems holding the cpuacct pseudo files, in order of preference.
#: cpu and cpuacct are co-mounted on most distributions.
_CPUACCT_SUBSYSTEMS = ('cpuacct', 'cpu')


CpuStats = collections.namedtuple(
    'CpuStats',
    [
        'timestamp',
        'total_usage',
        'percpu_usage',
        'usage_in_kernelmode',
        'usage_in_usermode',
    ]
)


class CpuDelta(collections.namedtuple('CpuDelta', [
        'container_id',
        'interval',
        'total_usage',
        'percpu_usage',
        'usage_in_kernelmode',
        'usage_in_usermode'])):
    """CPU usage of a container between two consecutive samples.

    All usages are in nanoseconds, interval is in seconds.
    """

    __slots__ = ()

    def to_dict(self):
        """Plain dict representation, suitable for the formatters."""
        data = dict(self._asdict())
        data['percpu_usage'] = list(self.percpu_usage)
        return data


def _cpuacct_path(cgroup_paths):
    """Pick the cgroup directory holding the cpuacct pseudo files."""
    for subsystem in _CPUACCT_SUBSYSTEMS:
        if subsystem in cgroup_paths:
            return cgroup_paths[subsystem]
    return None


def read_cpu_stats(cgroup_paths, container_id=None):
    """Read a CPU usage snapshot of a container.

    :param ``dict`` cgroup_paths:
        Subsystem name to the container's cgroup directory.
    :returns:
        :class:`CpuStats` - cumulative counters, in nanoseconds.
    :raises:
        :class:`~cgmon.exc.StatsCollectionError` if the counters cannot be
        read.
    """
    cgrp_path = _cpuacct_path(cgroup_paths)
    if cgrp_path is None:
        raise exc.StatsCollectionError(
            container_id,
            'No cpuacct cgroup for container {}'.format(container_id)
        )

    try:
        timestamp = time.time()
        total_usage = cgutils.cpu_usage(cgrp_path)
        percpu_usage = cgutils.per_cpu_usage(cgrp_path)
        divided_usage = cgutils.cpuacct_stat(cgrp_path)

    except (OSError, ValueError) as err:
        if getattr(err, 'errno', None) == errno.ENOENT:
            _LOGGER.debug('Container %s cgroup is gone: %s',
                          container_id, err)
        raise exc.StatsCollectionError(
            container_id,
            'Unable to read {}: {}'.format(cgrp_path, err)
        )

    return CpuStats(
        timestamp=timestamp,
        total_usage=total_usage,
        percpu_usage=percpu_usage,
        usage_in_kernelmode=divided_usage.get('system', 0),
        usage_in_usermode=divided_usage.get('user', 0),
    )


def cpu_delta(current, previous, container_id=None):
    """Compute the CPU usage between two snapshots.

    Per-cpu usages are subtracted index by index, ordering is preserved.

    :returns:
        :class:`CpuDelta`, ``None`` if there is no previous snapshot.
    """
    if previous is None:
        return None

    if len(current.percpu_usage) != len(previous.percpu_usage):
        raise exc.StatsCollectionError(
            container_id,
            'Per-cpu usage length changed: {} => {}'.format(
                len(previous.percpu_usage), len(current.percpu_usage)
            )
        )

    return CpuDelta(
        container_id=container_id,
        interval=current.timestamp - previous.timestamp,
        total_usage=current.total_usage - previous.total_usage,
        percpu_usage=[
            cur - prev
            for cur, prev in zip(current.percpu_usage, previous.percpu_usage)
        ],
        usage_in_kernelmode=(
            current.usage_in_kernelmode - previous.usage_in_kernelmode
        ),
        usage_in_usermode=(
            current.usage_in_usermode - previous.usage_in_usermode
        ),
    )
