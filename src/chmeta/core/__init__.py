"""
Metadata value objects handed to the dialect by the host.
"""

from .connection import (
    STRICT_BIGNUMBER_INTERPRETATION,
    SUPPORTS_BOOLEAN_DATA_TYPE,
    AccessType,
    ConnectionConfig,
)
from .errors import (
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterError,
    AdapterExecutionError,
    UnsupportedAccessTypeError,
)
from .fields import ColumnDescriptor, FieldType

__all__ = [
    "AccessType",
    "AdapterConfigurationError",
    "AdapterConnectionError",
    "AdapterError",
    "AdapterExecutionError",
    "ColumnDescriptor",
    "ConnectionConfig",
    "FieldType",
    "STRICT_BIGNUMBER_INTERPRETATION",
    "SUPPORTS_BOOLEAN_DATA_TYPE",
    "UnsupportedAccessTypeError",
]
