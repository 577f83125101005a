import logging

import yaml

logger = logging.getLogger(__name__)

REQUIRED_SETTINGS = ['keyspace']


class ConfigError(Exception):
    """Raised when the settings file is missing, malformed or incomplete."""


def load_settings(config_file):
    """
    Loads the YAML settings file and applies defaults.

    Args:
        config_file: Path to the YAML configuration file

    Returns:
        dict: Settings with defaults applied

    Raises:
        ConfigError: If the file cannot be read or parsed, or required keys are missing
    """
    try:
        with open(config_file, 'r') as f:
            settings = yaml.safe_load(f) or {}
    except (FileNotFoundError, yaml.YAMLError) as e:
        raise ConfigError(f"Error loading settings from {config_file}: {e}") from e

    if not isinstance(settings, dict):
        raise ConfigError(f"Settings file {config_file} must contain a mapping")

    return apply_defaults(settings)


def apply_defaults(settings):
    """Fills in default values and validates required settings."""
    settings.setdefault('hosts', ['localhost'])
    settings.setdefault('port', 9042)
    settings.setdefault('user', None)
    settings.setdefault('password', None)
    settings.setdefault('local_dc', None)
    settings.setdefault('connect_timeout', 10)
    settings['log_level'] = str(settings.get('log_level', 'INFO')).upper()

    # A single host may be given as a plain string
    if isinstance(settings['hosts'], str):
        settings['hosts'] = [settings['hosts']]

    missing = [s for s in REQUIRED_SETTINGS if not settings.get(s)]
    if missing:
        raise ConfigError(f"Missing required setting(s): {', '.join(missing)}")

    logger.debug(f"Loaded settings for keyspace '{settings['keyspace']}' on {len(settings['hosts'])} contact point(s)")
    return settings
