"""
Binder configuration (``mapstruct.config``).

Responsibility
--------------
Holds the handful of settings shared by decode and encode, and loads them
from a YAML file for applications that keep binder settings next to the
rest of their configuration::

    # mapstruct.yaml
    tag: form
    payload_tag: json
    list_separator: ","
    float_precision: 2

Failure modes
-------------
* Missing YAML file -> ``FileNotFoundError`` propagates.
* Malformed YAML -> ``yaml.YAMLError`` propagates.
* Unknown keys or invalid values -> ``ValueError`` with the offending key.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from mapstruct.domain.tags import DEFAULT_TAG, PAYLOAD_TAG


@dataclass(frozen=True)
class BinderConfig:
    """Settings for one binder. Immutable; build a new one to change it."""

    tag: str = DEFAULT_TAG  # Tag namespace read by decode/encode
    payload_tag: str = PAYLOAD_TAG  # Tag namespace for JSON payload records
    list_separator: str = ","
    float_precision: int = 2  # Digits after the point for the "string" option

    def __post_init__(self) -> None:
        if not isinstance(self.tag, str) or not self.tag:
            raise ValueError("tag must be a non-empty string")
        if not isinstance(self.payload_tag, str) or not self.payload_tag:
            raise ValueError("payload_tag must be a non-empty string")
        if not isinstance(self.list_separator, str) or not self.list_separator:
            raise ValueError("list_separator must be a non-empty string")
        if (
            isinstance(self.float_precision, bool)
            or not isinstance(self.float_precision, int)
            or self.float_precision < 0
        ):
            raise ValueError("float_precision must be a non-negative integer")


_DEFAULT = BinderConfig()


def get_default_config() -> BinderConfig:
    return _DEFAULT


def config_from_dict(data: dict[str, Any]) -> BinderConfig:
    """
    Build a ``BinderConfig`` from a plain dict.

    Raises:
        ValueError: if *data* has unknown keys or invalid values.
    """
    if not isinstance(data, dict):
        raise ValueError(f"binder config must be a mapping, got {type(data).__name__}")
    known = {f.name for f in fields(BinderConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"unknown binder config keys: {', '.join(unknown)}")
    return BinderConfig(**data)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file; an empty file yields an empty dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_config(path: Path | str) -> BinderConfig:
    """
    Load binder settings from a YAML file.

    The file may hold the settings at top level or under a ``mapstruct``
    key, so the section can live inside a larger application config.
    """
    data = load_yaml_file(Path(path))
    if isinstance(data, dict) and isinstance(data.get("mapstruct"), dict):
        data = data["mapstruct"]
    return config_from_dict(data)
