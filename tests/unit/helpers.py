from unittest.mock import MagicMock

STCS = 'org.apache.cassandra.db.compaction.SizeTieredCompactionStrategy'
TWCS = 'org.apache.cassandra.db.compaction.TimeWindowCompactionStrategy'


def make_host(address, release_version):
    host = MagicMock()
    host.address = address
    host.release_version = release_version
    return host


def make_session(versions=('3.11.4',), keyspace='reaper_db', compaction=None):
    """
    Builds a mock driver Session.

    Args:
        versions: Release version reported by each host
        keyspace: Keyspace present in the schema metadata
        compaction: Mapping of table name to compaction class
    """
    if compaction is None:
        compaction = {
            'node_metrics_v1': STCS,
            'node_metrics_v2': STCS,
            'node_operations': STCS,
        }

    session = MagicMock()
    hosts = [make_host(f"10.0.0.{i + 1}", v) for i, v in enumerate(versions)]
    session.cluster.metadata.all_hosts.return_value = hosts

    tables = {}
    for name, cls in compaction.items():
        table = MagicMock()
        table.options = {'compaction': {'class': cls}}
        tables[name] = table

    keyspace_meta = MagicMock()
    keyspace_meta.tables = tables
    session.cluster.metadata.keyspaces = {keyspace: keyspace_meta}
    return session


def executed_statements(session):
    return [c.args[0] for c in session.execute.call_args_list]
