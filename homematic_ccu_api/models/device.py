"""
Models for Homematic devices.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..utils import map_api_data_to_model, extract_links


@dataclass
class DeviceRecord:
    """
    Description of a physical device as reported by the CCU.

    ``secured`` tells whether the device talks to the CCU with AES signing.
    """
    address: str
    type: Optional[str] = None
    name: Optional[str] = field(default=None, metadata={"ccu_api_field": "title"})
    firmware: Optional[str] = None
    secured: bool = field(default=False, metadata={"ccu_api_field": "aesActive"})
    channel_numbers: List[int] = field(default_factory=list)

    # Store any additional fields that aren't explicitly defined
    _extra_fields: Dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self):
        self.secured = bool(self.secured)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "DeviceRecord":
        """Build a record from a ``device/<id>`` response."""
        model_fields, extra_fields = map_api_data_to_model(data, cls)
        extra_fields.pop("~links", None)
        model_fields["channel_numbers"] = [
            int(href) for href in extract_links(data, "channel") if href.isdigit()
        ]
        record = cls(**model_fields)
        record._extra_fields = extra_fields
        return record

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the DeviceRecord to a dictionary.

        Returns:
            Dictionary representation of the device with all fields.
        """
        result = {k: v for k, v in self.__dict__.items()
                  if not k.startswith('_')}
        result.update(self._extra_fields)
        return result
