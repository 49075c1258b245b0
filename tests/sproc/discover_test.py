"""Unit test for cgmon.sproc.discover."""

import os
import shutil
import tempfile
import unittest

import click.testing
import yaml

from cgmon.sproc import discover


_ID = 'f' * 64

_PROC_CGROUPS = """#subsys_name\thierarchy\tnum_cgroups\tenabled
cpu\t2\t10\t1
cpuacct\t2\t10\t1
memory\t3\t10\t0
"""

_MOUNTINFO = """1 0 8:1 / / rw - ext4 /dev/sda1 rw
17 1 0:15 / {root}/cpu,cpuacct rw,nosuid - cgroup cgroup rw,cpu,cpuacct
18 1 0:16 / {root}/memory rw,nosuid - cgroup cgroup rw,memory
"""


class DiscoverTest(unittest.TestCase):
    """Test for cgmon.sproc.discover"""

    def setUp(self):
        self.root = tempfile.mkdtemp()
        self.runner = click.testing.CliRunner()
        self.discover_cli = discover.init()

        self.proc_cgroups = os.path.join(self.root, 'cgroups')
        with open(self.proc_cgroups, 'w') as f:
            f.write(_PROC_CGROUPS)

        self.mountinfo = os.path.join(self.root, 'mountinfo')
        with open(self.mountinfo, 'w') as f:
            f.write(_MOUNTINFO.format(root=self.root))

    def tearDown(self):
        if self.root and os.path.isdir(self.root):
            shutil.rmtree(self.root)

    def _invoke(self):
        return self.runner.invoke(
            self.discover_cli,
            ['--proc-cgroups', self.proc_cgroups,
             '--mountinfo', self.mountinfo]
        )

    def test_discover(self):
        """Test subsystems, mounts and containers are reported."""
        for subsystem in ('cpu', 'cpuacct'):
            os.makedirs(os.path.join(self.root, subsystem, 'docker', _ID))

        result = self._invoke()
        self.assertEqual(result.exit_code, 0, result.output)

        res = yaml.safe_load(result.output)
        self.assertEqual(
            res['subsystems']['memory'],
            {'name': 'memory', 'hierarchy': 3, 'num_cgroups': 10,
             'enabled': False}
        )
        self.assertEqual(
            res['mounts'],
            {
                'cpu': os.path.join(self.root, 'cpu'),
                'cpuacct': os.path.join(self.root, 'cpuacct'),
            }
        )
        self.assertEqual(
            res['containers'],
            {
                _ID: {
                    'cpu': os.path.join(self.root, 'cpu', 'docker', _ID),
                    'cpuacct': os.path.join(
                        self.root, 'cpuacct', 'docker', _ID
                    ),
                }
            }
        )

    def test_discover_no_docker(self):
        """Test a missing docker directory is reported."""
        os.makedirs(os.path.join(self.root, 'cpuacct', 'docker'))

        result = self._invoke()
        self.assertEqual(result.exit_code, 1)
        self.assertIn(os.path.join(self.root, 'cpu', 'docker'),
                      result.output)

    def test_discover_parse_error(self):
        """Test malformed kernel files are reported."""
        with open(self.proc_cgroups, 'a') as f:
            f.write('blkio\t4\n')

        result = self._invoke()
        self.assertEqual(result.exit_code, 1)
        self.assertIn("failed to parse", result.output)
        self.assertIn("'blkio\\t4'", result.output)

    def test_discover_not_mounted(self):
        """Test no mounted subsystem."""
        with open(self.mountinfo, 'w') as f:
            f.write('1 0 8:1 / / rw - ext4 /dev/sda1 rw\n')

        result = self._invoke()
        self.assertEqual(result.exit_code, -1)
        self.assertIn('No cgroup subsystem mounted.', result.output)


if __name__ == '__main__':
    unittest.main()
