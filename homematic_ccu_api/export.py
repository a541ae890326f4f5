"""
Functions for exporting device and channel information to various formats.

Accepts records, device/channel handles and plain dictionaries. Exporting a
handle fetches its current record through the mapping.
"""

import csv
import json
from typing import Any, Dict, Iterable, List, Optional

from .logging import get_logger

logger = get_logger(__name__)


class CCUEncoder(json.JSONEncoder):
    def default(self, obj):
        if hasattr(obj, "to_dict") and callable(getattr(obj, "to_dict")):
            return obj.to_dict()
        try:
            return super().default(obj)
        except TypeError:
            return str(obj)


def to_dict_list(items: Iterable[Any]) -> List[Dict[str, Any]]:
    """
    Convert records or entities to a list of dictionaries.

    Items that are neither dictionaries nor provide ``to_dict()`` are skipped.

    Args:
        items: DeviceRecord, ChannelRecord, DeviceData or ChannelData objects, or dicts

    Returns:
        List of dictionaries
    """
    result = []

    for item in items:
        if hasattr(item, "to_dict") and callable(getattr(item, "to_dict")):
            result.append(item.to_dict())
        elif isinstance(item, dict):
            result.append(item)
        else:
            logger.debug(f"Skipping item without dictionary form: {item!r}")

    return result


def _flatten_dict(
    d: Dict[str, Any], parent_key: str = "", sep: str = "_"
) -> Dict[str, Any]:
    items = []
    for k, v in d.items():
        new_key = f"{parent_key}{sep}{k}" if parent_key else k
        if isinstance(v, dict):
            items.extend(_flatten_dict(v, new_key, sep=sep).items())
        elif isinstance(v, list):
            if v and all(isinstance(i, dict) for i in v):
                for i, item in enumerate(v):
                    items.extend(_flatten_dict(item, f"{new_key}_{i}", sep=sep).items())
            else:
                items.append((new_key, ", ".join(str(i) for i in v)))
        else:
            items.append((new_key, v))

    return dict(items)


def export_csv(
    items: Iterable[Any],
    path: str,
    fields: Optional[List[str]] = None,
    flatten_nested: bool = False,
) -> None:
    """
    Export records or entities to a CSV file.

    Args:
        items: Objects to export
        path: Path where the CSV file will be saved
        fields: Optional list of columns. Defaults to the keys of the first item.
        flatten_nested: Whether to flatten nested structures (default: False),
                        e.g. a list ``channel_numbers`` becomes ``"0, 1, 2"``
    """
    item_dicts = to_dict_list(items)

    if flatten_nested:
        item_dicts = [d for d in (_flatten_dict(item) for item in item_dicts) if d]

    if not item_dicts:
        with open(path, "w", newline="", encoding="utf-8") as csvfile:
            csvfile.write("")
        return

    final_fields = fields if fields else list(item_dicts[0].keys())

    with open(path, "w", newline="", encoding="utf-8") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=final_fields, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(item_dicts)
    logger.info(f"Exported {len(item_dicts)} items to {path}")


def export_json(items: Iterable[Any], path: str, indent: int = 2) -> None:
    """
    Export records or entities to a JSON file.

    Args:
        items: Objects to export
        path: Path where the JSON file will be saved
        indent: Number of spaces for indentation in the JSON file (default: 2)
    """
    item_dicts = to_dict_list(items)

    with open(path, "w", encoding="utf-8") as jsonfile:
        json.dump(item_dicts, jsonfile, indent=indent, cls=CCUEncoder)
    logger.info(f"Exported {len(item_dicts)} items to {path}")
