"""Show the cgroup subsystems, their mounts and the running containers.
"""

import logging

import click

from cgmon import cgroups
from cgmon import cli
from cgmon import containers
from cgmon import exc
from cgmon.fs import linux as fs_linux

_LOGGER = logging.getLogger(__name__)

_ON_EXCEPTIONS = cli.handle_exceptions([
    (exc.ParseError, None),
    (exc.DiscoveryError, None),
    (OSError, None),
])


def init():
    """Top level command handler."""

    @click.command()
    @click.option('--proc-cgroups', default=cgroups.PROC_CGROUPS,
                  envvar='CGMON_PROC_CGROUPS',
                  help='Kernel cgroup subsystems file')
    @click.option('--mountinfo', default=fs_linux.MOUNTINFO,
                  envvar='CGMON_MOUNTINFO',
                  help='Process mount table file')
    @_ON_EXCEPTIONS
    def discover(proc_cgroups, mountinfo):
        """Discover cgroup mounts and docker containers."""
        subsystems = cgroups.read_subsystems(proc_cgroups)
        mounts = fs_linux.list_mounts(mountinfo)
        subsys2mnt = cgroups.resolve_mounts(subsystems, mounts)
        if not subsys2mnt:
            cli.bad_exit('No cgroup subsystem mounted.')

        container_ids = containers.list_containers(subsys2mnt)
        _LOGGER.debug('Containers: %r', container_ids)

        formatter = cli.make_formatter('yaml')
        cli.out(formatter({
            'subsystems': {
                name: dict(info._asdict())
                for name, info in subsystems.items()
            },
            'mounts': subsys2mnt,
            'containers': {
                container_id: containers.container_paths(
                    subsys2mnt, container_id
                )
                for container_id in container_ids
            },
        }))

    return discover
