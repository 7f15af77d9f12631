"""
Field tag grammar.

A tag is the string stored under a namespace key in a dataclass field's
metadata::

    user_id: int = field(default=0, metadata={"map": "user_id,required"})

Grammar: ``name`` optionally followed by ``,option``. The option is one of
the reserved words below or else a literal default value. Everything after
the first comma is the option text, so ``"tags,a,b"`` has the default
``"a,b"``. A name of ``"-"`` excludes the field.

The reserved words cannot be used as default values.
"""

from __future__ import annotations

DEFAULT_TAG = "map"
PAYLOAD_TAG = "json"

SKIP = "-"

OPTION_REQUIRED = "required"
OPTION_OMITEMPTY = "omitempty"
OPTION_STRING = "string"

RESERVED_OPTIONS: frozenset[str] = frozenset(
    {OPTION_REQUIRED, OPTION_OMITEMPTY, OPTION_STRING}
)


def parse_tag(tag: str) -> tuple[str, str]:
    """Split a tag into ``(name, option)`` on the first comma."""
    name, _, option = (tag or "").partition(",")
    return name, option


def is_default_option(option: str) -> bool:
    """True when *option* is literal default text rather than a keyword."""
    return bool(option) and option not in RESERVED_OPTIONS
