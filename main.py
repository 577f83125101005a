#!/usr/bin/env python3
"""
Main entrypoint for the Cassandra TWCS migration step.

This script loads the YAML configuration, connects to the cluster and runs
the version-gated compaction migration once. Failures while altering tables
are reported but do not change the exit code, so a surrounding migration
sequence can carry on.
"""

import argparse
import json
import logging
import sys

from schema_migrations.common.config import ConfigError, load_settings
from schema_migrations.cassandra.connector import CassandraConnector
from schema_migrations.cassandra.version_gate import NoNodesAvailable
from schema_migrations.cassandra import twcs_migration

logger = logging.getLogger(__name__)


def configure_logging(level):
    """Configures root logging for command-line runs."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


def run_migration(settings):
    """
    Connects with the given settings and runs the TWCS migration.

    Returns:
        MigrationResult: Outcome of the migration step
    """
    keyspace = settings['keyspace']
    with CassandraConnector(settings) as connector:
        return twcs_migration.run(connector.session, keyspace)


def main(argv=None):
    """Parses command line arguments and runs the migration. Returns the exit code."""
    parser = argparse.ArgumentParser(description='Apply TimeWindowCompactionStrategy to metrics tables')
    parser.add_argument('--config', default='config/config.yaml', help='Path to configuration file')
    parser.add_argument('--keyspace', help='Keyspace holding the tables (overrides config)')
    parser.add_argument('--json', action='store_true', help='Print the outcome as JSON')
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.keyspace:
        settings['keyspace'] = args.keyspace

    configure_logging(settings['log_level'])

    try:
        result = run_migration(settings)
    except (ConnectionError, NoNodesAvailable, ValueError) as e:
        logger.error(f"Migration could not run: {e}")
        return 1

    if args.json:
        print(json.dumps(result.to_dict()))
    else:
        print(f"TWCS migration on {settings['keyspace']}: {result.status.value}")
        if result.failed_table:
            print(f"   - Failed on {result.failed_table}: {result.error}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
