"""Binder: a config bundled with decode/encode."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from mapstruct.config import BinderConfig, get_default_config, load_config
from mapstruct.mapping.decoder import decode
from mapstruct.mapping.encoder import encode


class Binder:
    """
    Decode/encode with fixed settings.

    >>> form = Binder(BinderConfig(tag="form"))
    >>> form.decode(request_params, args)
    >>> form.encode(args)
    """

    def __init__(self, config: BinderConfig | None = None):
        self._config = config or get_default_config()

    @classmethod
    def from_yaml(cls, path: Path | str) -> "Binder":
        return cls(load_config(path))

    @property
    def config(self) -> BinderConfig:
        return self._config

    def decode(self, values: Mapping[str, Any], dst: Any, tag: str | None = None) -> None:
        decode(values, dst, tag, config=self._config)

    def encode(self, src: Any, tag: str | None = None) -> dict[str, Any] | None:
        return encode(src, tag, config=self._config)
