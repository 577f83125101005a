"""Cassandra migration steps and the connector they run against."""

from .connector import CassandraConnector
from .version_gate import NoNodesAvailable, VersionUnavailable, VersionRange, is_version_eligible, node_versions
from .twcs_migration import TABLE_MIGRATIONS, TableMigrationSpec, migrate, run
