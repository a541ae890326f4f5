from typing import Iterator, Optional

from .cache import DataCache
from .config import CCUConfig
from .connection import CCUConnection
from .entities import DeviceData
from .mapping import Mapping
from .logging import get_logger

logger = get_logger(__name__)


class Container:
    """
    Shared services for all device and channel handles of one CCU.

    Entities keep a reference to the container and reach the mapping through
    it; the container must stay open as long as its entities are used.

    Example:
        >>> with Container(CCUConfig("http://ccu.local:2121")) as ccu:
        ...     for device in ccu.get_devices():
        ...         print(device.id, device.name)
    """

    def __init__(
        self,
        config: CCUConfig,
        connection: Optional[CCUConnection] = None,
        cache: Optional[DataCache] = None,
    ):
        self._config = config
        self._connection = connection if connection is not None else CCUConnection(config)
        self._cache = cache if cache is not None else DataCache(
            ttl=config.cache_ttl, path=config.cache_path)
        self._mapping = None
        logger.info(f"Container ready for CCU at {config.url}")

    def get_config(self) -> CCUConfig:
        return self._config

    def get_connection(self) -> CCUConnection:
        return self._connection

    def get_cache(self) -> DataCache:
        return self._cache

    def get_mapping(self) -> Mapping:
        if self._mapping is None:
            self._mapping = Mapping(self)
        return self._mapping

    def get_devices(self) -> Iterator[DeviceData]:
        """Iterate over all devices known to the CCU."""
        return self.get_mapping().get_devices()

    def get_device(self, device_id: str) -> DeviceData:
        return self.get_mapping().get_device(device_id)

    def close(self) -> None:
        """Close the connection to the CCU."""
        self._connection.close()
        logger.debug("Container closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
