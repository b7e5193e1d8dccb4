"""Adapter defaults and DynamoDB protocol constants.

These values define the adapter's out-of-the-box behavior and should not need
to change. For environment-driven settings, see config.py.

Guidelines:
- Use SCREAMING_SNAKE_CASE for constant names
- Keep DynamoDB wire strings (error codes, type descriptors) in one place
"""

# =============================================================================
# Table Descriptor Defaults
# =============================================================================

DEFAULT_PARTITION_KEY_NAME = "id"
DEFAULT_ATTRIBUTES_KEY_NAME = "attributes"
DEFAULT_AUTO_CREATE_TABLE = False

# One read capacity unit = one strongly consistent read per second (items up to 4 KB)
DEFAULT_READ_CAPACITY_UNITS = 5
DEFAULT_WRITE_CAPACITY_UNITS = 5

# =============================================================================
# DynamoDB Protocol
# =============================================================================

# Partition key is always a string attribute
PARTITION_KEY_ATTRIBUTE_TYPE = "S"
PARTITION_KEY_TYPE = "HASH"

# ClientError codes the adapter distinguishes
TABLE_NOT_FOUND_ERROR_CODE = "ResourceNotFoundException"
TABLE_IN_USE_ERROR_CODE = "ResourceInUseException"

TABLE_EXISTS_WAITER = "table_exists"
