"""Unit test for cgmon.exc.
"""

import unittest

from cgmon import exc


class ExcTest(unittest.TestCase):
    """Tests for cgmon.exc."""

    def test_parse_error(self):
        """Test the default parse error message."""
        err = exc.ParseError('/proc/cgroups', 'cpu 1')

        self.assertIsInstance(err, exc.CgmonError)
        self.assertEqual(err.source, '/proc/cgroups')
        self.assertEqual(err.line, 'cpu 1')
        self.assertEqual(
            str(err), "failed to parse /proc/cgroups entry 'cpu 1'"
        )

        err = exc.ParseError('/proc/cgroups', 'cpu 1', msg='bad hierarchy')
        self.assertEqual(err.message, 'bad hierarchy')

    def test_discovery_error(self):
        """Test discovery error attributes."""
        err = exc.DiscoveryError('/cgroup/cpu/docker', 'no docker')

        self.assertIsInstance(err, exc.CgmonError)
        self.assertEqual(err.path, '/cgroup/cpu/docker')
        self.assertEqual(str(err), 'no docker')

    def test_stats_collection_error(self):
        """Test stats collection error attributes."""
        err = exc.StatsCollectionError('a' * 64, 'gone')

        self.assertEqual(err.container_id, 'a' * 64)
        self.assertEqual(err.message, 'gone')
        with self.assertRaises(exc.CgmonError):
            raise err


if __name__ == '__main__':
    unittest.main()
