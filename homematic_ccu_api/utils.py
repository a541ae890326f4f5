"""
Utility functions for the Homematic CCU API package.
"""

import dataclasses
import inspect
from typing import Any, Dict, List, Tuple, Type

from .logging import get_logger
from .exceptions import CCUInvalidArgumentError

logger = get_logger(__name__)


def get_api_field_mapping(model_class: Type) -> Dict[str, str]:
    """
    Create a mapping between CCU field names and model attribute names.

    Examines dataclass fields with metadata to find mappings between
    CCU field names (like 'aesActive') and Python attribute names (like 'secured').

    Args:
        model_class: The dataclass model to examine for field mappings

    Returns:
        Dictionary mapping CCU field names to Python model attribute names
    """
    if not dataclasses.is_dataclass(model_class):
        return {}

    field_mapping = {}

    for field in dataclasses.fields(model_class):
        if "ccu_api_field" in field.metadata:
            field_mapping[field.metadata["ccu_api_field"]] = field.name

    return field_mapping


def map_api_data_to_model(
    data: Dict[str, Any], model_class: Type
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Maps CCU data to model fields, separating model fields from extra fields.

    A CCU field is taken when its name is a constructor parameter of the model
    or when a model field declares it through ``ccu_api_field`` metadata. A
    field declaring an alias is only filled through that alias.

    Args:
        data: Input dictionary from a CCU response
        model_class: The dataclass model to map data to

    Returns:
        Tuple containing (model_fields, extra_fields)
    """
    signature = inspect.signature(model_class.__init__)
    valid_params = set(signature.parameters.keys())
    valid_params.discard("self")

    field_map = get_api_field_mapping(model_class)
    aliased = set(field_map.values())

    model_fields = {}
    extra_fields = {}

    for api_key, value in data.items():
        mapped_key = None

        if api_key in field_map and field_map[api_key] in valid_params:
            mapped_key = field_map[api_key]
        elif api_key in valid_params and api_key not in aliased:
            mapped_key = api_key

        if mapped_key is not None:
            model_fields[mapped_key] = value
        else:
            extra_fields[api_key] = value

    return model_fields, extra_fields


def extract_links(data: Dict[str, Any], rel: str) -> List[str]:
    """
    Return the targets of all ``~links`` entries with the given relation.

    Order follows the response.
    """
    links = data.get("~links") or []
    return [str(link["href"]) for link in links
            if isinstance(link, dict) and link.get("rel") == rel and "href" in link]


def parse_channel_id(channel_id: str) -> Tuple[str, int]:
    """
    Split a composite channel identifier ``"<deviceId>/<number>"``.

    Raises:
        CCUInvalidArgumentError: If the identifier is not of that form.
    """
    if not isinstance(channel_id, str):
        raise CCUInvalidArgumentError(f"Invalid channel identifier: {channel_id!r}")
    device_id, sep, number = channel_id.rpartition("/")
    if not sep or not device_id or not number.isdigit():
        raise CCUInvalidArgumentError(f"Invalid channel identifier: {channel_id!r}")
    return device_id, int(number)
