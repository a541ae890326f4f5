"""
Homematic CCU API client.

This package provides read-only access to the devices and channels of a
Homematic CCU through its REST interface.
"""

__version__ = "0.1.0"

from .config import CCUConfig
from .connection import CCUConnection
from .cache import DataCache
from .mapping import Mapping
from .container import Container
from .entities import DeviceData, ChannelData
from .models import DeviceRecord, ChannelRecord
from .export import export_csv, export_json, to_dict_list
from .exceptions import (
    CCUError,
    CCUConnectionError,
    CCUDataError,
    CCUCacheError,
    CCUInvalidArgumentError,
)

__all__ = [
    "CCUConfig",
    "CCUConnection",
    "DataCache",
    "Mapping",
    "Container",
    "DeviceData",
    "ChannelData",
    "DeviceRecord",
    "ChannelRecord",
    "export_csv",
    "export_json",
    "to_dict_list",
    "CCUError",
    "CCUConnectionError",
    "CCUDataError",
    "CCUCacheError",
    "CCUInvalidArgumentError",
]
