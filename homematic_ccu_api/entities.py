"""
Handles for devices and channels known to the CCU.

An entity holds nothing but its identifier and the shared container. Each
accessor asks the container's mapping for the current record, so caching and
staleness are decided by the mapping and its cache, never by the entity.
Errors raised there (:class:`CCUConnectionError`, :class:`CCUCacheError`,
:class:`CCUInvalidArgumentError`) reach the caller unchanged.
"""

from typing import Any, Dict, Iterator

from .exceptions import CCUInvalidArgumentError
from .models.channel import ChannelRecord
from .models.device import DeviceRecord
from .utils import parse_channel_id


class _Entity:
    __slots__ = ("_container", "_id")

    def __init__(self, container, id: str):
        if not isinstance(id, str) or not id:
            raise CCUInvalidArgumentError(f"Identifier must be a non-empty string, got {id!r}")
        object.__setattr__(self, "_container", container)
        object.__setattr__(self, "_id", id)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def id(self) -> str:
        """The identifier of this entity."""
        return self._id

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._id == other._id

    def __hash__(self):
        return hash((type(self).__name__, self._id))

    def __repr__(self):
        return f"{type(self).__name__}(id={self._id!r})"


class DeviceData(_Entity):
    """
    A physical device registered with the CCU.

    Raises (all accessors except ``id``):
        CCUConnectionError: Some HTTP error occurred while fetching the device.
        CCUCacheError: The cached data could not be read or written.
        CCUInvalidArgumentError: The cache key derived from the identifier is malformed.
    """

    __slots__ = ()

    def record(self) -> DeviceRecord:
        """Return the current description of this device."""
        return self._container.get_mapping().get_device_data(self._id)

    @property
    def type(self) -> str:
        """The type name of this device, e.g. ``HM-Sec-SC-2``."""
        return self.record().type

    @property
    def name(self) -> str:
        """The name of this device."""
        return self.record().name

    @property
    def firmware(self) -> str:
        """The version of the firmware of this device."""
        return self.record().firmware

    @property
    def is_secured(self) -> bool:
        """Whether this device's communication with the CCU is secured."""
        return self.record().secured

    def channels(self) -> Iterator["ChannelData"]:
        """
        Iterate over the channels of this device.

        The iterator is lazy and can be consumed once; call ``channels()``
        again to query the mapping anew.
        """
        yield from self._container.get_mapping().get_channels(self._id)

    def channel(self, number: int) -> "ChannelData":
        """Return the channel with the given number."""
        return self._container.get_mapping().get_channel(f"{self._id}/{number}")

    def to_dict(self) -> Dict[str, Any]:
        result = {"id": self._id}
        result.update(self.record().to_dict())
        return result


class ChannelData(_Entity):
    """
    One channel of a device, addressed as ``"<deviceId>/<number>"``.

    Raises (``type``, ``name``, ``direction``, ``record`` and ``to_dict``):
        CCUConnectionError: Some HTTP error occurred while fetching the channel.
        CCUCacheError: The cached data could not be read or written.
        CCUInvalidArgumentError: The cache key derived from the identifier is malformed.
    """

    __slots__ = ()

    def __init__(self, container, id: str):
        parse_channel_id(id)
        super().__init__(container, id)

    @property
    def device_id(self) -> str:
        return parse_channel_id(self._id)[0]

    @property
    def number(self) -> int:
        return parse_channel_id(self._id)[1]

    def device(self) -> DeviceData:
        """Return the device this channel belongs to."""
        return self._container.get_mapping().get_device(self.device_id)

    def record(self) -> ChannelRecord:
        return self._container.get_mapping().get_channel_data(self._id)

    @property
    def type(self) -> str:
        return self.record().type

    @property
    def name(self) -> str:
        return self.record().name

    @property
    def direction(self) -> int:
        return self.record().direction

    def to_dict(self) -> Dict[str, Any]:
        result = {"id": self._id}
        result.update(self.record().to_dict())
        return result
