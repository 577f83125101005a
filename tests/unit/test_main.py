import os
import tempfile
import unittest
from unittest.mock import patch

import main
from schema_migrations.cassandra.version_gate import NoNodesAvailable
from schema_migrations.common.results import MigrationResult, MigrationStatus


class TestMain(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.config = os.path.join(self.tmpdir.name, 'config.yaml')
        with open(self.config, 'w') as f:
            f.write('keyspace: reaper_db\n')

    @patch('main.run_migration')
    def test_partial_failure_exits_zero(self, run_migration):
        run_migration.return_value = MigrationResult(
            MigrationStatus.PARTIALLY_FAILED, failed_table='node_metrics_v1', error='boom'
        )
        self.assertEqual(main.main(['--config', self.config]), 0)

    @patch('main.run_migration')
    def test_keyspace_override(self, run_migration):
        run_migration.return_value = MigrationResult(MigrationStatus.APPLIED)
        main.main(['--config', self.config, '--keyspace', 'other_ks', '--json'])
        self.assertEqual(run_migration.call_args.args[0]['keyspace'], 'other_ks')

    @patch('main.run_migration', side_effect=NoNodesAvailable('no nodes'))
    def test_no_nodes_exits_one(self, run_migration):
        self.assertEqual(main.main(['--config', self.config]), 1)

    @patch('main.run_migration', side_effect=ConnectionError('refused'))
    def test_connection_error_exits_one(self, run_migration):
        self.assertEqual(main.main(['--config', self.config]), 1)

    @patch('main.run_migration', side_effect=ValueError("Couldn't parse version garbage"))
    def test_bad_node_version_exits_one(self, run_migration):
        self.assertEqual(main.main(['--config', self.config]), 1)

    def test_bad_config_exits_one(self):
        self.assertEqual(main.main(['--config', os.path.join(self.tmpdir.name, 'missing.yaml')]), 1)


class TestMigrationResult(unittest.TestCase):
    def test_to_dict(self):
        result = MigrationResult(
            MigrationStatus.PARTIALLY_FAILED,
            altered_tables=['node_metrics_v1'],
            failed_table='node_metrics_v2',
            error='rejected'
        )
        self.assertEqual(result.to_dict(), {
            'status': 'partially_failed',
            'altered_tables': ['node_metrics_v1'],
            'failed_table': 'node_metrics_v2',
            'error': 'rejected',
        })

    def test_to_dict_omits_empty_failure(self):
        self.assertEqual(
            MigrationResult(MigrationStatus.NOT_ELIGIBLE).to_dict(),
            {'status': 'not_eligible', 'altered_tables': []}
        )


if __name__ == '__main__':
    unittest.main()
