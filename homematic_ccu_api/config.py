"""
Configuration for connecting to a Homematic CCU.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union
from urllib.parse import urlparse

from .logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CCUConfig:
    """
    Settings shared by the connection and the cache.

    Args:
        url: Base URL of the CCU REST interface, e.g. ``http://ccu.local:2121``.
        verify_ssl: Whether to verify SSL certificates. Can be:
                   - True: Verify SSL certificates (default, recommended)
                   - False: Disable verification (insecure, not recommended)
                   - str: Path to a CA bundle file or directory with certificates of trusted CAs
        timeout: Request timeout in seconds (0.1-300). Defaults to 10.
        cache_ttl: Seconds a cached response stays fresh. 0 keeps entries until
                   they are deleted. Defaults to 60.
        cache_path: Optional JSON file the cache is persisted to.
    """
    url: str
    verify_ssl: Union[bool, str] = True
    timeout: float = 10
    cache_ttl: float = 60
    cache_path: Optional[str] = None

    def __post_init__(self):
        parsed = urlparse(self.url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"url must be an http(s) URL, got {self.url!r}")
        if self.timeout < 0.1 or self.timeout > 300:
            raise ValueError("timeout must be between 0.1 and 300")
        if self.cache_ttl < 0:
            raise ValueError("cache_ttl must not be negative")
        object.__setattr__(self, "url", self.url.rstrip("/"))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CCUConfig":
        """
        Build a configuration from a plain dictionary, e.g. parsed from a settings file.

        Unknown keys are ignored.

        Raises:
            ValueError: If a value is invalid or ``url`` is missing.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(k for k in data if k not in known)
        if unknown:
            logger.debug(f"Ignoring unknown configuration keys: {unknown}")
        if "url" not in data:
            raise ValueError("url is required")
        return cls(**{k: v for k, v in data.items() if k in known})
