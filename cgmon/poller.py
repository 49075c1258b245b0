"""Periodic container discovery and CPU sampling.
"""

import logging
import queue
import threading
import time

from cgmon import cgroups
from cgmon import containers
from cgmon import exc
from cgmon import metrics
from cgmon.fs import linux as fs_linux

_LOGGER = logging.getLogger(__name__)

#: Default sampling interval (sec)
DEFAULT_INTERVAL = 3

#: Default number of sampler threads
DEFAULT_WORKERS = 4


class Poller:
    """Drive container discovery and sampling on a fixed cadence.

    The subsystem mounts are cached across cycles and only re-read after a
    discovery failure. Containers are re-listed on every cycle; samplers of
    containers still running are kept so that their deltas carry over.
    """

    def __init__(self, reader=metrics.read_cpu_stats,
                 proc_cgroups=cgroups.PROC_CGROUPS,
                 mountinfo=fs_linux.MOUNTINFO,
                 workers=DEFAULT_WORKERS,
                 timeout=None,
                 on_delta=None):
        self._reader = reader
        self._proc_cgroups = proc_cgroups
        self._mountinfo = mountinfo
        self._workers = workers
        self._timeout = timeout
        self._on_delta = on_delta
        self._subsys2mnt = None
        self._samplers = {}
        self._stop_event = threading.Event()
        self._pending = None

    @property
    def samplers(self):
        """Container id to :class:`~cgmon.containers.Container` sampler."""
        return dict(self._samplers)

    def subsystems(self):
        """Return the cached cgroup subsystems to mount dict."""
        if self._subsys2mnt is None:
            self._subsys2mnt = cgroups.mounted_subsystems(
                proc_cgroups=self._proc_cgroups,
                mountinfo=self._mountinfo
            )
            _LOGGER.info('Resolved cgroup mounts: %r', self._subsys2mnt)

        return self._subsys2mnt

    def invalidate(self):
        """Drop the cached subsystem mounts."""
        self._subsys2mnt = None

    def discover(self):
        """List the running containers.

        The cached mounts are invalidated on any failure.
        """
        try:
            return containers.list_containers(self.subsystems())
        except (exc.DiscoveryError, exc.ParseError, OSError):
            self.invalidate()
            raise

    def _update(self, sampler):
        """Update one sampler, isolating its stats failures."""
        try:
            return sampler.update(self._reader)
        except exc.StatsCollectionError as err:
            _LOGGER.warning('Skipping container %s: %s',
                            sampler.container_id, err)
            return None

    def _sample(self, samplers):
        """Update the samplers on up to `workers` daemon threads.

        :returns:
            ``dict`` - Container id to delta (or ``None``).
        """
        pending = queue.Queue()
        for sampler in samplers:
            pending.put(sampler)

        results = {}

        def _worker():
            """Update samplers until none is left."""
            while True:
                try:
                    sampler = pending.get_nowait()
                except queue.Empty:
                    return
                results[sampler.container_id] = self._update(sampler)

        threads = []
        for idx in range(min(self._workers, len(samplers))):
            thread = threading.Thread(target=_worker,
                                      name='cgmon-sampler-%d' % idx)
            thread.daemon = True
            thread.start()
            threads.append(thread)

        for thread in threads:
            thread.join()

        return results

    def cycle(self):
        """Run one discovery and sampling cycle.

        :returns:
            ``dict`` - Container id to :class:`~cgmon.metrics.CpuDelta`, for
            the containers that have one.
        """
        container_ids = self.discover()
        subsys2mnt = self.subsystems()

        for container_id in set(self._samplers) - set(container_ids):
            _LOGGER.info('Container %s is gone', container_id)
            del self._samplers[container_id]

        for container_id in container_ids:
            if container_id not in self._samplers:
                _LOGGER.info('New container %s', container_id)
                self._samplers[container_id] = (
                    containers.Container.from_mounts(subsys2mnt, container_id)
                )

        samplers = [self._samplers[cid] for cid in container_ids]
        results = self._sample(samplers)

        deltas = {}
        for sampler in samplers:
            delta = results.get(sampler.container_id)
            if delta is None:
                continue

            deltas[sampler.container_id] = delta
            if self._on_delta is not None:
                self._on_delta(delta)

        _LOGGER.debug('Sampled %d containers, %d deltas',
                      len(samplers), len(deltas))
        return deltas

    def tick(self):
        """Run one cycle, bounded by the timeout.

        The cycle runs on a daemon thread: a hung cycle is abandoned and
        never prevents the process from exiting. While it is still running
        the following ticks are skipped.

        :returns:
            ``dict`` - Result of :meth:`cycle`, ``None`` if the tick was
            skipped or failed.
        """
        if self._pending is not None and self._pending.is_alive():
            _LOGGER.warning('Previous cycle still running, skipping tick')
            return None

        outcome = {}

        def _run_cycle():
            """Run the cycle, keeping its result or error."""
            try:
                outcome['result'] = self.cycle()
            except Exception as err:  # pylint: disable=broad-except
                outcome['error'] = err

        self._pending = threading.Thread(target=_run_cycle,
                                         name='cgmon-cycle')
        self._pending.daemon = True
        self._pending.start()
        self._pending.join(self._timeout)

        if self._pending.is_alive():
            _LOGGER.warning('Cycle timed out after %ss, skipping',
                            self._timeout)
            return None

        err = outcome.get('error')
        if isinstance(err, (exc.DiscoveryError, exc.ParseError, OSError)):
            _LOGGER.warning('Container discovery failed: %s', err)
            return None
        elif err is not None:
            raise err

        return outcome['result']

    def run(self, interval=DEFAULT_INTERVAL, stop_event=None):
        """Poll until stopped.

        :param ``float`` interval:
            Seconds between the start of two consecutive ticks.
        :param ``threading.Event`` stop_event:
            Optional external stop signal, replaces the one set by
            :meth:`stop`.
        """
        if stop_event is not None:
            self._stop_event = stop_event

        _LOGGER.info('Starting poller, interval: %ss, timeout: %ss',
                     interval, self._timeout)
        while not self._stop_event.is_set():
            started = time.monotonic()
            try:
                self.tick()
            except Exception:  # pylint: disable=broad-except
                _LOGGER.exception('Unexpected error in poll cycle')

            elapsed = time.monotonic() - started
            self._stop_event.wait(max(interval - elapsed, 0))

        _LOGGER.info('Poller stopped')

    def stop(self):
        """Signal :meth:`run` to return."""
        self._stop_event.set()

    def close(self):
        """Stop polling.

        A hung cycle is not waited for, its daemon threads are left behind.
        """
        self.stop()
