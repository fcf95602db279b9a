"""Live host capability probing.

Reads CPU, memory, disk and port facts from the running machine. This is
diagnostic: a fact that cannot be read degrades to 0 instead of raising.
"""

from __future__ import annotations

import socket
from collections.abc import Iterable
from dataclasses import dataclass, field

import psutil

from ..shared.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ActualCapabilities:
    """Host facts gathered for one run."""

    cpu_cores: int
    total_memory: int
    free_storage: int
    unavailable_ports: set[int] = field(default_factory=set)


class HostProbe:
    """Read capability facts from the local host."""

    def __init__(self, ports: Iterable[int] = ()):
        """Initialize probe.

        Args:
            ports: Ports that must be bindable on loopback.
        """
        self.ports = tuple(ports)

    def probe(self) -> ActualCapabilities:
        """Gather all host facts."""
        return ActualCapabilities(
            cpu_cores=self.cpu_cores(),
            total_memory=self.total_memory(),
            free_storage=self.free_storage(),
            unavailable_ports={p for p in self.ports if not self.port_available(p)},
        )

    def cpu_cores(self) -> int:
        """Count logical processors."""
        try:
            return psutil.cpu_count(logical=True) or 0
        except (OSError, RuntimeError) as e:
            logger.warning("probe_failed", metric="cpu", error=str(e))
            return 0

    def total_memory(self) -> int:
        """Total physical memory in bytes."""
        try:
            return psutil.virtual_memory().total
        except (OSError, RuntimeError) as e:
            logger.warning("probe_failed", metric="memory", error=str(e))
            return 0

    def free_storage(self) -> int:
        """Sum of free bytes across every mounted volume.

        Volumes sharing a backing device are counted once per mount point.
        """
        try:
            partitions = psutil.disk_partitions(all=False)
        except (OSError, RuntimeError) as e:
            logger.warning("probe_failed", metric="storage", error=str(e))
            return 0

        total = 0
        for partition in partitions:
            try:
                total += psutil.disk_usage(partition.mountpoint).free
            except OSError as e:
                logger.debug("partition_skipped", mountpoint=partition.mountpoint, error=str(e))
        return total

    def port_available(self, port: int) -> bool:
        """Check whether a TCP listener can bind the port on loopback.

        The socket is closed immediately; another process may still take the
        port before the stack starts.
        """
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
                sock.bind(("127.0.0.1", port))
        except (OSError, OverflowError):
            return False
        return True
