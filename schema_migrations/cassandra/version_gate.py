"""
Cluster-wide version gate for Cassandra schema changes.

Schema changes are applied cluster-wide, so a feature is only usable when the
least capable node supports it. The gate compares the lowest reported node
version against the version ranges that support TimeWindowCompactionStrategy.
"""

import logging
from collections import namedtuple

from cassandra.util import Version

logger = logging.getLogger(__name__)


class NoNodesAvailable(Exception):
    """Raised when no node in the cluster reports a version."""


class VersionUnavailable(NoNodesAvailable):
    """Raised when a known node has not reported its release version."""


class VersionRange(namedtuple('VersionRange', ['lower', 'upper'])):
    """Inclusive version range; an upper bound of None means open-ended."""

    __slots__ = ()

    def __new__(cls, lower, upper=None):
        return super().__new__(
            cls,
            parse_version(lower),
            parse_version(upper) if upper is not None else None
        )

    def contains(self, version):
        version = parse_version(version)
        if version < self.lower:
            return False
        return self.upper is None or version <= self.upper

    def __str__(self):
        if self.upper is None:
            return f">= {self.lower}"
        return f"[{self.lower}, {self.upper}]"


def parse_version(value):
    """Returns a driver Version for a version string, passing Version instances through."""
    if isinstance(value, Version):
        return value
    return Version(str(value).strip())


def lowest_version(versions):
    """
    Returns the lowest of the given versions.

    Raises:
        NoNodesAvailable: If no versions are given
    """
    parsed = [parse_version(v) for v in versions]
    if not parsed:
        raise NoNodesAvailable("No node versions available to evaluate")
    return min(parsed)


# TWCS ships with 3.0.8 on the 3.0 line and with 3.8 on the tick-tock line
SUPPORTED_RANGES = (
    VersionRange("3.0.8", "3.0.99"),
    VersionRange("3.8"),
)


def is_version_eligible(node_versions, supported_ranges=SUPPORTED_RANGES):
    """
    Checks whether the lowest node version falls inside a supported range.

    Args:
        node_versions: Iterable of Version objects or version strings, one per node
        supported_ranges: Ranges to test the lowest version against

    Returns:
        bool: True if the lowest version is inside any supported range

    Raises:
        NoNodesAvailable: If node_versions is empty
    """
    lowest = lowest_version(node_versions)
    eligible = any(r.contains(lowest) for r in supported_ranges)
    logger.debug(f"Lowest node version {lowest} eligible: {eligible}")
    return eligible


def node_versions(session):
    """
    Collects the release version reported by every known host.

    Uses the driver's cluster metadata rather than system tables, since
    system.local only describes the coordinator that answers the query.

    Args:
        session: Connected cassandra-driver Session

    Returns:
        list[Version]: One version per host

    Raises:
        NoNodesAvailable: If the cluster metadata lists no hosts
        VersionUnavailable: If any host has not reported a release version
    """
    versions = []
    for host in session.cluster.metadata.all_hosts():
        if host.release_version is None:
            raise VersionUnavailable(f"Host {host.address} has not reported a release version")
        versions.append(parse_version(host.release_version))

    if not versions:
        raise NoNodesAvailable("No cluster nodes available to report a release version")

    logger.info(f"Discovered {len(versions)} node version(s), lowest is {min(versions)}")
    return versions
