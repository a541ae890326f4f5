"""Shared fixtures for the homematic_ccu_api tests."""

from unittest.mock import MagicMock

import pytest

from homematic_ccu_api.cache import DataCache
from homematic_ccu_api.config import CCUConfig
from homematic_ccu_api.connection import CCUConnection
from homematic_ccu_api.container import Container

CCU_URL = "http://ccu.local:2121"

RESPONSES = {
    "device": {
        "identifier": "device",
        "~links": [
            {"rel": "device", "href": "ABC123", "title": "Door Sensor"},
            {"rel": "device", "href": "DEF456", "title": "Wall Switch"},
            {"rel": "root", "href": "..", "title": "Root"},
        ],
    },
    "device/ABC123": {
        "address": "ABC123",
        "type": "HM-Sec-SC-2",
        "title": "Door Sensor",
        "firmware": "1.2.3",
        "aesActive": 1,
        "rxMode": 28,
        "~links": [
            {"rel": "channel", "href": "0", "title": "Door Sensor:0"},
            {"rel": "channel", "href": "1", "title": "Door Sensor:1"},
            {"rel": "parameter", "href": "$MASTER"},
        ],
    },
    "device/ABC123/1": {
        "address": "ABC123:1",
        "type": "SHUTTER_CONTACT",
        "title": "Door Sensor:1",
        "index": 1,
        "direction": 1,
        "aesActive": 1,
        "~links": [{"rel": "parameter", "href": "VALUES"}],
    },
}


@pytest.fixture
def config():
    return CCUConfig(CCU_URL)


@pytest.fixture
def connection():
    """A connection stub answering from RESPONSES."""
    conn = MagicMock(spec=CCUConnection)
    conn.get.side_effect = lambda path: RESPONSES[path]
    return conn


@pytest.fixture
def container(config, connection):
    return Container(config, connection=connection, cache=DataCache(ttl=0))
