"""
Models for channels of Homematic devices.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..utils import map_api_data_to_model

# Link direction of a channel
DIRECTION_NONE = 0
DIRECTION_SENDER = 1
DIRECTION_RECEIVER = 2


@dataclass
class ChannelRecord:
    """
    Description of one channel (sensor or actuator function) of a device.
    """
    address: str
    type: Optional[str] = None
    name: Optional[str] = field(default=None, metadata={"ccu_api_field": "title"})
    index: Optional[int] = None
    direction: int = DIRECTION_NONE

    _extra_fields: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ChannelRecord":
        """Build a record from a ``device/<id>/<n>`` response."""
        model_fields, extra_fields = map_api_data_to_model(data, cls)
        extra_fields.pop("~links", None)
        record = cls(**model_fields)
        record._extra_fields = extra_fields
        return record

    def to_dict(self) -> Dict[str, Any]:
        result = {k: v for k, v in self.__dict__.items()
                  if not k.startswith('_')}
        result.update(self._extra_fields)
        return result
