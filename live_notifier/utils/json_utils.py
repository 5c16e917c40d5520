"""JSON serialization and deserialization for the settings file."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, TypeVar, cast

from yarl import URL

from live_notifier.config import JsonType


_JSON_T = TypeVar("_JSON_T", bound=Mapping[Any, Any])
_MISSING = object()


# Maps stored type names back to their constructors
SERIALIZE_ENV: dict[str, Callable[[Any], object]] = {
    "URL": URL,
}


def _serialize(obj: Any) -> Any:
    """
    Encode the types plain JSON can't hold, tagging them with their type name.
    """
    if isinstance(obj, URL):
        return {
            "__type": type(obj).__name__,
            "data": str(obj),
        }
    raise TypeError(obj)


def _remove_missing(obj: JsonType) -> JsonType:
    """
    Remove _MISSING sentinel values from a dictionary recursively.

    This modifies obj in place, but returns it for convenience.
    """
    for key, value in obj.copy().items():
        if value is _MISSING:
            del obj[key]
        elif isinstance(value, dict):
            _remove_missing(value)
            if not value:
                # the dict is empty now, so remove it's key entirely
                del obj[key]
    return obj


def _deserialize(obj: JsonType) -> Any:
    if "__type" in obj:
        obj_type = obj["__type"]
        if obj_type in SERIALIZE_ENV:
            return SERIALIZE_ENV[obj_type](obj["data"])
        return _MISSING
    return obj


def merge_json(obj: JsonType, template: Mapping[Any, Any]) -> None:
    """
    Merge a JSON object with a template, ensuring all expected keys exist.

    NOTE: This modifies object in place.

    - Removes keys not present in template
    - Overwrites values with wrong type from template
    - Recursively merges nested dictionaries
    - Adds missing keys from template
    """
    for k, v in list(obj.items()):
        if k not in template:
            del obj[k]
        elif type(v) is not type(template[k]):
            obj[k] = template[k]
        elif isinstance(v, dict):
            assert isinstance(template[k], dict)
            merge_json(v, template[k])
    for k in template:
        if k not in obj:
            obj[k] = template[k]


def json_load(path: Path, defaults: _JSON_T, *, merge: bool = True) -> _JSON_T:
    """
    Load JSON from a file, falling back to (or merging with) the defaults.

    Args:
        path: Path to JSON file
        defaults: Values used when the file doesn't exist, and the merge template otherwise
        merge: If True, merge loaded data with defaults template

    Returns:
        Loaded and optionally merged JSON data
    """
    defaults_dict: JsonType = dict(defaults)
    if path.exists():
        with open(path, encoding="utf8") as file:
            combined: JsonType = _remove_missing(json.load(file, object_hook=_deserialize))
        if merge:
            merge_json(combined, defaults_dict)
    else:
        combined = defaults_dict
    return cast(_JSON_T, combined)


def json_save(path: Path, contents: Mapping[Any, Any], *, sort: bool = False) -> None:
    with open(path, "w", encoding="utf8") as file:
        json.dump(contents, file, default=_serialize, sort_keys=sort, indent=4)
