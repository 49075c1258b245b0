"""Unit test for cgmon.console.
"""

import logging
import unittest

import click.testing
import mock

from cgmon import cli
from cgmon import console


class ConsoleTest(unittest.TestCase):
    """Tests for the cgmon top level command."""

    def setUp(self):
        self.runner = click.testing.CliRunner()

    def tearDown(self):
        cli.OUTPUT_FORMAT = None

    def test_help(self):
        """Test the commands are discovered."""
        result = self.runner.invoke(console.run, ['--help'])

        self.assertEqual(result.exit_code, 0)
        self.assertIn('cpumon', result.output)
        self.assertIn('discover', result.output)

    @mock.patch('cgmon.cli.init_logger')
    @mock.patch('cgmon.sproc.discover.containers.list_containers',
                mock.Mock(return_value=[]))
    @mock.patch('cgmon.sproc.discover.cgroups.resolve_mounts',
                mock.Mock(return_value={'cpu': '/cgroup/cpu'}))
    @mock.patch('cgmon.sproc.discover.fs_linux.list_mounts',
                mock.Mock(return_value=[]))
    @mock.patch('cgmon.sproc.discover.cgroups.read_subsystems',
                mock.Mock(return_value={}))
    def test_outfmt(self, init_logger):
        """Test the global options."""
        result = self.runner.invoke(
            console.run,
            ['--outfmt', 'json', '--logconf', 'cli.json', 'discover']
        )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(),
                         '{"mounts": {"cpu": "/cgroup/cpu"}}')
        init_logger.assert_called_once_with('cli.json')

    @mock.patch('cgmon.cli.init_logger', mock.Mock())
    def test_debug(self):
        """Test --debug lowers the cgmon log level."""
        level = logging.getLogger('cgmon').level
        root_level = logging.getLogger().level
        try:
            result = self.runner.invoke(
                console.run, ['--debug', 'cpumon', '--help']
            )
            self.assertEqual(result.exit_code, 0, result.output)
            self.assertEqual(logging.getLogger('cgmon').level, logging.DEBUG)
        finally:
            logging.getLogger('cgmon').setLevel(level)
            logging.getLogger().setLevel(root_level)

    @mock.patch('cgmon.logging.set_log_level')
    @mock.patch('cgmon.cli.init_logger', mock.Mock())
    def test_debug_log_level(self, set_log_level):
        """Test --debug goes through set_log_level, only when given."""
        result = self.runner.invoke(console.run, ['cpumon', '--help'])
        self.assertEqual(result.exit_code, 0, result.output)
        set_log_level.assert_not_called()

        result = self.runner.invoke(
            console.run, ['--debug', 'cpumon', '--help']
        )
        self.assertEqual(result.exit_code, 0, result.output)
        set_log_level.assert_called_once_with(logging.DEBUG)


if __name__ == '__main__':
    unittest.main()
