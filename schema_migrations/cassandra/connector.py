import logging
from cassandra.cluster import Cluster, ExecutionProfile, EXEC_PROFILE_DEFAULT
from cassandra.auth import PlainTextAuthProvider
from cassandra.policies import DCAwareRoundRobinPolicy, TokenAwarePolicy

logger = logging.getLogger(__name__)


class CassandraConnector:
    """
    Opens the CQL session a migration step runs against.

    Settings keys:
        - hosts: List of contact points (default: ['localhost'])
        - port: CQL native port (default: 9042)
        - user / password: Enables PlainTextAuthProvider when both are set
        - local_dc (or datacenter): Enables DC-aware, token-aware routing
        - keyspace: Keyspace the session is bound to
        - connect_timeout: Connection timeout in seconds (default: 10)

    Example:
        with CassandraConnector(settings) as connector:
            twcs_migration.run(connector.session, settings['keyspace'])
    """

    def __init__(self, settings):
        self.settings = settings
        self.cluster = None
        self.session = None

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.disconnect()

    def connect(self):
        """Establishes the CQL connection and binds the session to the configured keyspace."""
        try:
            contact_points = self.settings.get('hosts', ['localhost'])
            port = self.settings.get('port', 9042)

            auth_provider = None
            if self.settings.get('user') and self.settings.get('password'):
                auth_provider = PlainTextAuthProvider(
                    username=self.settings.get('user'),
                    password=self.settings.get('password')
                )

            # Setup load balancing policy (DC-aware for multi-DC clusters)
            local_dc = self.settings.get('local_dc') or self.settings.get('datacenter')
            execution_profiles = None

            if local_dc:
                execution_profiles = {
                    EXEC_PROFILE_DEFAULT: ExecutionProfile(
                        load_balancing_policy=TokenAwarePolicy(
                            DCAwareRoundRobinPolicy(local_dc=local_dc)
                        )
                    )
                }
                logger.info(f"Using DC-aware load balancing policy for datacenter: {local_dc}")

            self.cluster = Cluster(
                contact_points=contact_points,
                port=port,
                auth_provider=auth_provider,
                execution_profiles=execution_profiles,
                connect_timeout=self.settings.get('connect_timeout', 10)
            )

            self.session = self.cluster.connect()

            keyspace = self.settings.get('keyspace')
            if keyspace:
                self.session.set_keyspace(keyspace)

            logger.info(f"Connected to Cassandra cluster via {len(contact_points)} contact point(s)")

        except Exception as e:
            logger.error(f"Failed to connect to Cassandra: {e}")
            self.disconnect()
            raise ConnectionError(f"Could not connect to Cassandra: {e}") from e

    def disconnect(self):
        """Closes the CQL connection."""
        if self.cluster:
            try:
                self.cluster.shutdown()
                logger.info("Disconnected from Cassandra")
            except Exception as e:
                logger.warning(f"Error during disconnect: {e}")
            finally:
                self.cluster = None
                self.session = None

    def close(self):
        """Alias for disconnect()."""
        self.disconnect()
