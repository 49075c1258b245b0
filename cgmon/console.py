"""cgmon console entry point.
"""

import logging

import click

from cgmon import cli
from cgmon import logging as cgmon_logging


# pylint complains "No value passed for parameter ... in function call".
# This is ok, as these parameters come from click decorators.
#
# pylint: disable=E1120
@click.group(cls=cli.make_commands('cgmon.sproc'))
@click.option('--outfmt', type=click.Choice(['json', 'yaml']),
              envvar='CGMON_OUTFMT',
              help='Output format of the reported metrics.')
@click.option('--debug/--no-debug',
              help='Sets logging level to debug',
              is_flag=True, default=False)
@click.option('--logconf', default='daemon.json',
              envvar='CGMON_LOGCONF',
              help='Logging configuration file name.')
def run(outfmt, debug, logconf):
    """Container cgroup monitor."""
    if outfmt:
        cli.OUTPUT_FORMAT = outfmt

    cli.init_logger(logconf)
    if debug:
        cgmon_logging.set_log_level(logging.DEBUG)
