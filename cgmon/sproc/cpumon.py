"""Container CPU usage monitor.

Periodically discovers the running containers and reports their CPU usage
since the previous sample.
"""

import logging
import signal
import threading

import click

from cgmon import cgroups
from cgmon import cli
from cgmon import poller
from cgmon.fs import linux as fs_linux

#: Metric collection interval (every X seconds)
_METRIC_STEP_SEC_MIN = 1
_METRIC_STEP_SEC_MAX = 300

_LOGGER = logging.getLogger(__name__)


def _install_stop_handlers(stop_event):
    """Set the stop event on SIGTERM/SIGINT."""

    def _stop(signum, _frame):
        _LOGGER.info('Got signal %d, stopping', signum)
        stop_event.set()

    # Signal handlers can only be installed from the main thread.
    if threading.current_thread() is threading.main_thread():
        signal.signal(signal.SIGTERM, _stop)
        signal.signal(signal.SIGINT, _stop)


def init():
    """Top level command handler."""

    @click.command()
    @click.option('--interval', '-i',
                  type=click.IntRange(_METRIC_STEP_SEC_MIN,
                                      _METRIC_STEP_SEC_MAX),
                  default=poller.DEFAULT_INTERVAL,
                  envvar='CGMON_INTERVAL',
                  help='Metrics collection frequency (sec)')
    @click.option('--timeout', type=click.FloatRange(min=0.1),
                  envvar='CGMON_TIMEOUT',
                  help='Maximum duration of one cycle (sec), '
                  'defaults to 5 intervals')
    @click.option('--workers', type=click.IntRange(min=1),
                  default=poller.DEFAULT_WORKERS,
                  envvar='CGMON_WORKERS',
                  help='Number of container sampler threads')
    @click.option('--proc-cgroups', default=cgroups.PROC_CGROUPS,
                  envvar='CGMON_PROC_CGROUPS',
                  help='Kernel cgroup subsystems file')
    @click.option('--mountinfo', default=fs_linux.MOUNTINFO,
                  envvar='CGMON_MOUNTINFO',
                  help='Process mount table file')
    def cpumon(interval, timeout, workers, proc_cgroups, mountinfo):
        """Report per container CPU usage deltas."""
        if timeout is None:
            timeout = interval * 5

        formatter = cli.make_formatter('json')

        def _report(delta):
            """Print one container CPU usage delta."""
            cli.out(formatter(delta.to_dict()))

        cpu_poller = poller.Poller(
            proc_cgroups=proc_cgroups,
            mountinfo=mountinfo,
            workers=workers,
            timeout=timeout,
            on_delta=_report
        )

        stop_event = threading.Event()
        _install_stop_handlers(stop_event)
        try:
            cpu_poller.run(interval=interval, stop_event=stop_event)
        finally:
            cpu_poller.close()

    return cpumon
