"""Linux specific mount table utilities.
"""

import logging
import os

from cgmon import exc
from cgmon import fs

_LOGGER = logging.getLogger(__name__)

#: Where to read the current process' mount table
MOUNTINFO = '/proc/self/mountinfo'

#: Separator marking the end of the optional fields
_OPT_FIELDS_SEP = '-'


class MountEntry:
    """Mount table entry data.
    """

    __slots__ = (
        'mount_id',
        'parent_id',
        'dev_major',
        'dev_minor',
        'root',
        'target',
        'mnt_opts',
        'opt_fields',
        'fs_type',
        'source',
        'super_opts',
    )

    def __init__(self, mount_id, parent_id, dev_major, dev_minor, root,
                 target, mnt_opts, fs_type, source, super_opts,
                 opt_fields=None):
        self.mount_id = int(mount_id)
        self.parent_id = int(parent_id)
        self.dev_major = int(dev_major)
        self.dev_minor = int(dev_minor)
        self.root = root
        self.target = target
        self.mnt_opts = mnt_opts
        self.opt_fields = list(opt_fields or [])
        self.fs_type = fs_type
        self.source = source
        self.super_opts = super_opts

    def __repr__(self):
        return (
            '{name}(mount_id={mount_id!r}, source={src!r}, '
            'target={target!r}, fs_type={fs_type!r}, '
            'super_opts={super_opts!r})'
        ).format(
            name=self.__class__.__name__,
            mount_id=self.mount_id,
            src=self.source,
            target=self.target,
            fs_type=self.fs_type,
            super_opts=self.super_opts
        )

    def __lt__(self, other):
        """Ordering is based on mount target.
        """
        return self.target < other.target

    def __eq__(self, other):
        """Equality is defined as the equality of the mount entry's attributes.
        """
        if not isinstance(other, MountEntry):
            return NotImplemented

        return all(
            getattr(self, attr) == getattr(other, attr)
            for attr in self.__slots__
        )

    def copy(self, **changes):
        """Return a copy of the entry with some attributes replaced.
        """
        attrs = {attr: getattr(self, attr) for attr in self.__slots__}
        attrs.update(changes)
        return self.__class__(**attrs)

    def expand(self):
        """Expand an entry mounting several co-mounted cgroup subsystems.

        A target such as ``/sys/fs/cgroup/net_cls,net_prio`` becomes one
        entry per subsystem name, ``/sys/fs/cgroup/net_cls`` and
        ``/sys/fs/cgroup/net_prio``, all other attributes being identical.
        An empty name stands for the parent directory itself.

        :returns:
            ``list`` - Expanded entries (``[self]`` if nothing to expand).
        """
        dirname, basename = os.path.split(self.target)
        if ',' not in basename:
            return [self]

        return [
            self.copy(target=os.path.join(dirname, name) if name else dirname)
            for name in basename.split(',')
        ]

    @classmethod
    def mount_entry_parse(cls, mount_entry_line, origin=MOUNTINFO):
        """Create `:class:MountEntry` objects from a mountinfo data line.

        The file contains lines of the form:

            36 35 98:0 /mnt1 /mnt2 rw,noatime master:1
                                            - ext3 /dev/root rw,errors=continue
            (1)(2)(3)   (4)   (5)      (6)      (7)
                                           (8) (9)   (10)         (11)

        The numbers in parentheses are labels for the descriptions
        below:

            (1)  mount ID: a unique ID for the mount (may be reused after
                 umount(2)).

            (2)  parent ID: the ID of the parent mount (or of self for the
                 root of this mount namespace's mount tree).

            (3)  major:minor: the value of st_dev for files on this
                 filesystem (see stat(2)).

            (4)  root: the pathname of the directory in the filesystem
                 which forms the root of this mount.

            (5)  mount point: the pathname of the mount point relative to
                 the process's root directory.

            (6)  mount options: per-mount options.

            (7)  optional fields: zero or more fields of the form
                 "tag[:value]".

            (8)  separator: the end of the optional fields is marked by a
                 single hyphen.

            (9)  filesystem type: the filesystem type in the form
                 "type[.subtype]".

            (10) mount source: filesystem-specific information or "none".

            (11) super options: per-superblock options.

        :returns:
            ``list`` - One entry, or one per subsystem for comma joined
            cgroup mount points.
        """
        fields = mount_entry_line.split()
        try:
            sep_idx = fields.index(_OPT_FIELDS_SEP, 6)
        except ValueError:
            raise exc.ParseError(origin, mount_entry_line)

        head, tail = fields[:sep_idx], fields[sep_idx + 1:]
        if len(tail) != 3:
            raise exc.ParseError(origin, mount_entry_line)

        (
            mount_id,
            parent_id,
            major_minor,
            root,
            target,
            mnt_opts
        ), opt_fields = head[:6], head[6:]
        (
            fs_type,
            source,
            super_opts
        ) = tail

        try:
            dev_major, dev_minor = major_minor.split(':')
            entry = cls(
                mount_id=mount_id,
                parent_id=parent_id,
                dev_major=dev_major,
                dev_minor=dev_minor,
                root=root,
                target=target,
                mnt_opts=mnt_opts,
                opt_fields=opt_fields,
                fs_type=fs_type,
                source=source,
                super_opts=super_opts,
            )
        except ValueError:
            raise exc.ParseError(origin, mount_entry_line)

        if entry.mount_id < 0 or entry.parent_id < 0:
            raise exc.ParseError(origin, mount_entry_line)

        return entry.expand()


def parse_mountinfo(data, origin=MOUNTINFO):
    """Parse the content of a mountinfo file.

    The first line is always skipped, as are blank lines. Any malformed line
    fails the whole parse.

    :returns:
        ``list`` - Mount entries, in file order, comma joined mount points
        expanded.
    """
    mounts = []
    for idx, mounts_line in enumerate(data.split('\n')):
        if idx == 0 or not mounts_line.strip():
            continue

        mounts.extend(MountEntry.mount_entry_parse(mounts_line, origin))

    return mounts


def list_mounts(mountinfo=MOUNTINFO):
    """Read the current process' mounts.
    """
    mounts = parse_mountinfo(fs.read_text(mountinfo), mountinfo)
    _LOGGER.debug('Read %d mount entries from %s', len(mounts), mountinfo)
    return mounts
