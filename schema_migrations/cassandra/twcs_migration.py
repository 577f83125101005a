"""
Switches the metrics and operations tables to TimeWindowCompactionStrategy.

This step is one link in a longer migration sequence. It is gated on the
lowest node version in the cluster, skipped when the first metrics table
already uses TWCS, and never raises for failures while altering tables:
those are logged and reported through the returned MigrationResult.

Example:
    result = twcs_migration.run(session, 'reaper_db')
    if not result.succeeded:
        ...
"""

import logging
from collections import namedtuple

from schema_migrations.common.results import MigrationResult, MigrationStatus
from schema_migrations.cassandra.utils.qrylib.compaction_queries import get_alter_compaction_query
from schema_migrations.cassandra.version_gate import is_version_eligible, node_versions

logger = logging.getLogger(__name__)

TWCS_CLASS = 'TimeWindowCompactionStrategy'

TableMigrationSpec = namedtuple('TableMigrationSpec', ['table', 'window_size', 'window_unit'])

# The first entry doubles as the idempotency probe
TABLE_MIGRATIONS = (
    TableMigrationSpec('node_metrics_v1', 2, 'MINUTES'),
    TableMigrationSpec('node_metrics_v2', 1, 'DAYS'),
    TableMigrationSpec('node_operations', 1, 'DAYS'),
)


def compaction_class(session, keyspace, table):
    """
    Returns the compaction class currently configured for a table.

    Raises:
        KeyError: If the keyspace or table is not in the schema metadata
    """
    keyspace_meta = session.cluster.metadata.keyspaces[keyspace]
    table_meta = keyspace_meta.tables[table]
    return table_meta.options['compaction']['class']


def is_using_twcs(session, keyspace, table=TABLE_MIGRATIONS[0].table):
    """Checks whether the table already uses TWCS (the server reports the qualified class name)."""
    return TWCS_CLASS in compaction_class(session, keyspace, table)


def migrate(session, keyspace, logger=logger, tables=TABLE_MIGRATIONS, keyspace_qualified=False):
    """
    Alters each table to TWCS unless the first one already uses it.

    Only the first table is probed; a run that altered it is treated as
    complete for all tables. The loop stops at the first failing statement,
    leaving tables altered before it in place.

    Args:
        session: Connected cassandra-driver Session
        keyspace: Keyspace holding the tables
        logger: Logger (or LoggerAdapter) receiving progress and failures
        tables: Ordered TableMigrationSpec entries to apply
        keyspace_qualified: Qualify table names with the keyspace in statements

    Returns:
        MigrationResult: APPLIED, ALREADY_APPLIED or PARTIALLY_FAILED
    """
    altered = []
    if not tables:
        logger.info(f"No tables to alter in {keyspace}")
        return MigrationResult(MigrationStatus.APPLIED)

    current_table = tables[0].table

    try:
        if is_using_twcs(session, keyspace, tables[0].table):
            logger.info(f"Tables in {keyspace} already use TWCS, nothing to do")
            return MigrationResult(MigrationStatus.ALREADY_APPLIED)

        for entry in tables:
            current_table = entry.table
            logger.info(f"Altering {entry.table} to use TWCS...")
            query = get_alter_compaction_query(
                entry.table,
                TWCS_CLASS,
                entry.window_size,
                entry.window_unit,
                keyspace=keyspace if keyspace_qualified else None
            )
            session.execute(query)
            altered.append(entry.table)
            logger.info(f"{entry.table} was successfully altered to use TWCS.")

    except Exception as e:
        logger.exception(f"Failed altering metrics tables to TWCS (table: {current_table}): {e}")
        return MigrationResult(
            MigrationStatus.PARTIALLY_FAILED,
            altered_tables=altered,
            failed_table=current_table,
            error=str(e)
        )

    return MigrationResult(MigrationStatus.APPLIED, altered_tables=altered)


def run(session, keyspace, logger=logger, keyspace_qualified=False):
    """
    Applies TWCS to the metrics tables if every node supports it.

    Raises:
        NoNodesAvailable: If no node is known or any node has not reported a version
        ValueError: If a node reports an unparseable version
    """
    versions = node_versions(session)
    if not is_version_eligible(versions):
        logger.info(f"Lowest node version {min(versions)} does not support TWCS, skipping")
        return MigrationResult(MigrationStatus.NOT_ELIGIBLE)

    return migrate(session, keyspace, logger=logger, keyspace_qualified=keyspace_qualified)
