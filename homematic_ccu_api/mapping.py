from typing import Any, Dict, Iterator, List
from urllib.parse import quote

from .entities import ChannelData, DeviceData
from .models.channel import ChannelRecord
from .models.device import DeviceRecord
from .logging import get_logger, log_extra_fields
from .utils import extract_links, parse_channel_id
from .exceptions import CCUDataError

logger = get_logger(__name__)

DEVICE_LIST_KEY = "devices"


class Mapping:
    """
    Translates identifiers into records and entity handles.

    Responses are fetched through the container's connection and kept in its
    cache under ``devices``, ``device.<id>`` and ``channel.<id>.<number>``.
    Cache keys are validated before any request is made, so an identifier
    that cannot be cached is rejected with :class:`CCUInvalidArgumentError`.
    Errors from the connection and the cache propagate unchanged.
    """

    def __init__(self, container):
        self._container = container

    def _fetch(self, key: str, path: str) -> Dict[str, Any]:
        connection = self._container.get_connection()
        return self._container.get_cache().get_or_load(key, lambda: connection.get(path))

    def get_device_ids(self) -> List[str]:
        """
        Return the identifiers of all devices known to the CCU.

        Raises:
            CCUConnectionError: If the device list cannot be fetched.
            CCUCacheError: If the cache cannot be read or written.
        """
        data = self._fetch(DEVICE_LIST_KEY, "device")
        device_ids = extract_links(data, "device")
        logger.debug(f"CCU reports {len(device_ids)} devices")
        return device_ids

    def get_devices(self) -> Iterator[DeviceData]:
        """Iterate over handles for all devices, in the order reported by the CCU."""
        for device_id in self.get_device_ids():
            yield DeviceData(self._container, device_id)

    def get_device(self, device_id: str) -> DeviceData:
        """Return a handle for the given device without contacting the CCU."""
        return DeviceData(self._container, device_id)

    def get_device_data(self, device_id: str) -> DeviceRecord:
        """
        Return the description of a device.

        Raises:
            CCUConnectionError: If the device cannot be fetched.
            CCUDataError: If the response lacks required fields.
            CCUCacheError: If the cache cannot be read or written.
            CCUInvalidArgumentError: If ``device_id`` does not form a valid cache key.
        """
        data = self._fetch(f"device.{device_id}", f"device/{quote(device_id, safe='')}")
        try:
            record = DeviceRecord.from_api(data)
        except (TypeError, ValueError) as e:
            error_msg = f"Invalid description for device {device_id}: {e}"
            logger.error(error_msg)
            raise CCUDataError(error_msg) from e
        log_extra_fields(logger, record)
        return record

    def get_channels(self, device_id: str) -> Iterator[ChannelData]:
        """
        Iterate over handles for the channels of a device.

        The device description is fetched when iteration starts; channels
        follow the order reported by the CCU.
        """
        for number in self.get_device_data(device_id).channel_numbers:
            yield ChannelData(self._container, f"{device_id}/{number}")

    def get_channel(self, channel_id: str) -> ChannelData:
        """
        Return a handle for the channel ``"<deviceId>/<number>"``.

        Raises:
            CCUInvalidArgumentError: If ``channel_id`` is malformed.
        """
        return ChannelData(self._container, channel_id)

    def get_channel_data(self, channel_id: str) -> ChannelRecord:
        """
        Return the description of a channel.

        Raises:
            CCUConnectionError: If the channel cannot be fetched.
            CCUDataError: If the response lacks required fields.
            CCUCacheError: If the cache cannot be read or written.
            CCUInvalidArgumentError: If ``channel_id`` is malformed or does not
                form a valid cache key.
        """
        device_id, number = parse_channel_id(channel_id)
        data = self._fetch(
            f"channel.{device_id}.{number}",
            f"device/{quote(device_id, safe='')}/{number}",
        )
        try:
            record = ChannelRecord.from_api(data)
        except (TypeError, ValueError) as e:
            error_msg = f"Invalid description for channel {channel_id}: {e}"
            logger.error(error_msg)
            raise CCUDataError(error_msg) from e
        log_extra_fields(logger, record)
        return record
