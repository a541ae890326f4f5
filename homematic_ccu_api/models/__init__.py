"""
Data models for Homematic CCU responses.

.. note::
    The records hold the commonly reported fields of the CCU's device and
    channel descriptions. Fields the CCU reports beyond those are kept in the
    ``_extra_fields`` dictionary attribute of each record and are included
    by ``to_dict()``.
"""

from .device import DeviceRecord
from .channel import ChannelRecord, DIRECTION_NONE, DIRECTION_SENDER, DIRECTION_RECEIVER

__all__ = [
    "DeviceRecord",
    "ChannelRecord",
    "DIRECTION_NONE",
    "DIRECTION_SENDER",
    "DIRECTION_RECEIVER",
]
