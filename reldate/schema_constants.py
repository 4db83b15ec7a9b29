"""
Central contract constants for reldate.

This module prevents circular imports and ensures schema version + schema filename
are derived from a single source of truth.
"""

SCHEMA_VERSION = "v1"

SCHEMA_RESOURCE_PACKAGE = "reldate.schemas"
SCHEMA_RESOURCE_NAME = f"rule_table.schema.{SCHEMA_VERSION}.json"
