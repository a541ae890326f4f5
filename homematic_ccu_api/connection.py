import time

import requests
import urllib3

from typing import Any, Dict, Optional

from .config import CCUConfig
from .logging import get_logger, log_ccu_response
from .exceptions import CCUConnectionError, CCUDataError

logger = get_logger(__name__)


class CCUConnection:
    """
    HTTP transport for the REST interface of a Homematic CCU.

    Every call is a single blocking GET. Failed requests are reported as
    :class:`CCUConnectionError`; there is no retry and no authentication.
    """

    def __init__(self, config: CCUConfig, session: Optional[requests.Session] = None):
        """
        Initialize the connection.

        Args:
            config: Connection settings.
            session: Optional pre-configured session. A new one is created if omitted.
        """
        logger.debug(f"Initializing CCUConnection with URL: {config.url}")
        self.config = config
        self.session = session if session is not None else requests.Session()
        self.session.headers.setdefault("Accept", "application/json")

        if config.verify_ssl is False:
            logger.warning(
                "SSL certificate verification is disabled. This is not recommended for production use."
            )
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def url_for(self, path: str) -> str:
        """Return the absolute URL of a resource path such as ``device/ABC123``."""
        return f"{self.config.url}/{path.lstrip('/')}"

    def get(self, path: str) -> Dict[str, Any]:
        """
        Fetch one resource from the CCU.

        Args:
            path: Resource path relative to the configured base URL.

        Returns:
            The decoded JSON object.

        Raises:
            CCUConnectionError: If the request fails or the CCU answers with an error status.
            CCUDataError: If the body is not a JSON object.
        """
        url = self.url_for(path)
        started = time.monotonic()
        try:
            response = self.session.get(
                url, verify=self.config.verify_ssl, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            error_msg = f"GET request to {url} failed: {e}"
            logger.error(error_msg)
            raise CCUConnectionError(error_msg, url=url, status_code=status_code) from e
        except requests.exceptions.RequestException as e:
            error_msg = f"GET request to {url} failed: {e}"
            logger.error(error_msg)
            raise CCUConnectionError(error_msg, url=url) from e

        try:
            data = response.json()
        except ValueError as e:
            error_msg = f"Failed to parse response from {url}: {e}"
            logger.error(error_msg)
            raise CCUDataError(error_msg) from e

        if not isinstance(data, dict):
            error_msg = f"Unexpected response format for {url}: expected an object"
            logger.warning(error_msg)
            raise CCUDataError(error_msg)

        elapsed_ms = (time.monotonic() - started) * 1000
        log_ccu_response(logger, url, data, response.status_code, elapsed_ms=elapsed_ms)
        return data

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
