"""
Common utilities shared across migration steps.

This module provides reusable components for:
- Migration outcome reporting
- Settings loading
"""

from .results import MigrationStatus, MigrationResult
from .config import ConfigError, load_settings, apply_defaults
