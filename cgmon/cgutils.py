"""Misc cgroup pseudo file readers.

All functions take the absolute path of a cgroup directory, e.g.
``/sys/fs/cgroup/cpuacct/docker/<id>``.
"""

import io
import os

NANOSECS_PER_SEC = 10**9


def get_data(cgrp_path, pseudofile):
    """Reads the data of cgroup parameter."""
    with io.open(os.path.join(cgrp_path, pseudofile), 'r') as f:
        return f.read().strip()


def get_value(cgrp_path, pseudofile):
    """Reads the data and convert to value of cgroup parameter.
    returns: int
    """
    data = get_data(cgrp_path, pseudofile)
    return _safe_int(data)


def get_stat(cgrp_path, pseudofile):
    """Get stat key values according to stat file format.
    """
    stat_str = get_data(cgrp_path, pseudofile)

    stats = {}
    for stat_line in stat_str.split('\n'):
        if not stat_line.strip():
            continue
        key, value = stat_line.split()
        stats[key] = int(value)

    return stats


def per_cpu_usage(cgrp_path):
    """Return (in nanoseconds) the length of time on each cpu"""
    usage_str = get_data(cgrp_path, 'cpuacct.usage_percpu')
    return [int(nanosec) for nanosec in usage_str.split()]


def cpu_usage(cgrp_path):
    """Return (in nanoseconds) the length of time on the cpu"""
    return get_value(cgrp_path, 'cpuacct.usage')


def cpuacct_stat(cgrp_path):
    """Return (in nanoseconds) the user and system time on the cpu.

    ``cpuacct.stat`` is expressed in USER_HZ ticks.
    """
    nanosecs_per_tick = NANOSECS_PER_SEC // os.sysconf('SC_CLK_TCK')
    divided_usage = get_stat(cgrp_path, 'cpuacct.stat')
    return {
        name: value * nanosecs_per_tick
        for name, value in divided_usage.items()
    }


def _safe_int(num_str):
    """Safely parse a value from cgroup pseudofile into an int.
    """
    # Values read in cgroups could have multiple lines.
    value = int(num_str.split('\n')[0].strip(), base=10)

    # not able to have value less than 0
    if value < 0:
        value = 0

    return value
