"""cgmon: container cgroup CPU monitor.
"""

__version__ = '1.0.0'
