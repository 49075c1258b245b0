"""Common cgroups discovery routines.
"""

import collections
import logging
import os

from cgmon import exc
from cgmon import fs
from cgmon.fs import linux as fs_linux


#: Where to read kernel supported cgroups
PROC_CGROUPS = '/proc/cgroups'

_LOGGER = logging.getLogger(__name__)


SubsystemInfo = collections.namedtuple(
    'SubsystemInfo',
    ['name', 'hierarchy', 'num_cgroups', 'enabled']
)


def _parse_uint(value):
    """Parse an unsigned decimal integer."""
    if not value.isdigit():
        raise ValueError('not an unsigned integer: %r' % value)
    return int(value, base=10)


def parse_subsystems(data, origin=PROC_CGROUPS):
    """Parse the kernel cgroup subsystems enumeration.

    The first line is the header and is always skipped, as are blank lines.

    :returns:
        ``dict`` - Map of subsystem name to :class:`SubsystemInfo`.
    """
    subsystems = {}

    for idx, cgroup_line in enumerate(data.split('\n')):
        if idx == 0 or not cgroup_line.strip():
            continue

        fields = cgroup_line.split()
        if len(fields) != 4:
            raise exc.ParseError(origin, cgroup_line)

        (
            subsys_name,
            hierarchy,
            num_cgroups,
            enabled
        ) = fields

        try:
            subsystems[subsys_name] = SubsystemInfo(
                name=subsys_name,
                hierarchy=_parse_uint(hierarchy),
                num_cgroups=_parse_uint(num_cgroups),
                enabled=(_parse_uint(enabled) == 1),
            )
        except ValueError:
            raise exc.ParseError(origin, cgroup_line)

    return subsystems


def read_subsystems(proc_cgroups=PROC_CGROUPS):
    """Read the set of cgroup subsystems known to the kernel.
    """
    return parse_subsystems(fs.read_text(proc_cgroups), proc_cgroups)


def resolve_mounts(subsystems, mounts):
    """Map every enabled and mounted subsystem to its mount point.

    :param ``dict`` subsystems:
        Subsystem name to :class:`SubsystemInfo`.
    :param ``list`` mounts:
        Expanded :class:`~cgmon.fs.linux.MountEntry` list.
    :returns:
        ``dict`` - Map of cgroup subsystem to mount point.
    """
    subsys2mnt = {}
    for mount_entry in mounts:
        if mount_entry.fs_type != 'cgroup':
            continue

        name = os.path.basename(mount_entry.target)
        info = subsystems.get(name)
        if info is not None and info.enabled:
            subsys2mnt[name] = mount_entry.target

    return subsys2mnt


def mounted_subsystems(proc_cgroups=PROC_CGROUPS,
                       mountinfo=fs_linux.MOUNTINFO):
    """Read all the currently mounted cgroups and their mount points.

    Both files are always read. If both fail, the mount table error is the
    one raised.

    :returns:
        ``dict`` - Map of cgroup subsystem to mount point.
    """
    error = None
    subsystems = mounts = None

    try:
        subsystems = read_subsystems(proc_cgroups)
    except (exc.ParseError, OSError) as err:
        _LOGGER.warning('Unable to read %s: %s', proc_cgroups, err)
        error = err

    try:
        mounts = fs_linux.list_mounts(mountinfo)
    except (exc.ParseError, OSError) as err:
        _LOGGER.warning('Unable to read %s: %s', mountinfo, err)
        error = err

    if error is not None:
        raise error

    subsys2mnt = resolve_mounts(subsystems, mounts)
    _LOGGER.debug('Mounted cgroups: %r', subsys2mnt)
    return subsys2mnt


def makepath(subsys2mnt, subsystem, group, pseudofile=None):
    """Pieces together a full path of the cgroup.
    """
    mountpoint = subsys2mnt[subsystem]
    group = group.strip('/')
    if pseudofile:
        return os.path.join(mountpoint, group, pseudofile)
    return os.path.join(mountpoint, group)
