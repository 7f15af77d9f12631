"""
Typed Exception Hierarchy for mapstruct.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from MapstructError:

    MapstructError (base)
    |
    +-- DecodeError
    |   +-- InvalidTargetError
    |   +-- InvalidSourceError
    |   +-- MissingRequiredError
    |   +-- CoercionError
    |   |   +-- InvalidBooleanError
    |   |   +-- InvalidIntegerError
    |   |   +-- InvalidUnsignedError
    |   |   +-- InvalidFloatError
    |   +-- InvalidPayloadError
    |   +-- UnsupportedValueTypeError
    |   +-- UnsupportedFieldTypeError
    |   +-- InternalDecodeError
    |       +-- InternalNotAddressableError
    |
    +-- PayloadError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Target          | INVALID_TARGET              | dst is not a mutable dataclass instance
                | INVALID_SOURCE              | values is not a mapping
----------------|-----------------------------|-----------------------------------------
Presence        | MISSING_REQUIRED            | "required" key absent from the input
----------------|-----------------------------|-----------------------------------------
Coercion        | INVALID_BOOLEAN             | text is not true/false/1/0
                | INVALID_INTEGER             | text is not a base-10 integer
                | INVALID_UNSIGNED            | text is not an unsigned base-10 integer
                | INVALID_FLOAT               | text is not a decimal number
                | INVALID_PAYLOAD             | structured payload did not parse
----------------|-----------------------------|-----------------------------------------
Types           | UNSUPPORTED_VALUE_TYPE      | input value shape cannot be coerced
                | UNSUPPORTED_FIELD_TYPE      | field kind has no string coercion
----------------|-----------------------------|-----------------------------------------
Internal        | INTERNAL_ERROR              | unexpected fault inside the field walk
                | NOT_ADDRESSABLE             | field could not be written in place
----------------|-----------------------------|-----------------------------------------
Codec           | PAYLOAD_ERROR               | JSON value does not fit the target type

===============================================================================
HANDLING PATTERNS
===============================================================================

    try:
        decode(request.args, params)
    except MissingRequiredError as e:
        return bad_request(f"missing parameter {e.key}")
    except CoercionError as e:
        return bad_request(f"{e.field}: cannot read {e.text!r}")
    except DecodeError as e:
        log.error("decode failed", extra={"error_code": e.code})
        raise

Decode stops at the first failing field. Fields written before the failure
keep their new values.
"""

from typing import Any


class MapstructError(Exception):
    """
    Base exception for all mapstruct errors.

    All subclasses carry a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "MAPSTRUCT_ERROR"


class DecodeError(MapstructError):
    """Base exception for mapping -> record failures."""

    code: str = "DECODE_ERROR"


class InvalidTargetError(DecodeError):
    """Decode target is not a mutable dataclass instance."""

    code: str = "INVALID_TARGET"

    def __init__(self, target_type: str, reason: str):
        self.target_type = target_type
        self.reason = reason
        super().__init__(f"Invalid decode target {target_type}: {reason}")


class InvalidSourceError(DecodeError):
    """Decode input is not a mapping."""

    code: str = "INVALID_SOURCE"

    def __init__(self, source_type: str):
        self.source_type = source_type
        super().__init__(f"Decode input must be a mapping, got {source_type}")


class MissingRequiredError(DecodeError):
    """A field tagged ``required`` has no key in the input mapping."""

    code: str = "MISSING_REQUIRED"

    def __init__(self, field: str, key: str):
        self.field = field
        self.key = key
        super().__init__(f"'{key}' is required")


class CoercionError(DecodeError):
    """Base exception for text that does not parse as the field's kind."""

    code: str = "INVALID_VALUE"
    expected: str = "value"

    def __init__(self, field: str, text: str):
        self.field = field
        self.text = text
        super().__init__(f"invalid {self.expected}: {field} value={text}")


class InvalidBooleanError(CoercionError):
    code: str = "INVALID_BOOLEAN"
    expected: str = "bool"


class InvalidIntegerError(CoercionError):
    code: str = "INVALID_INTEGER"
    expected: str = "int"


class InvalidUnsignedError(CoercionError):
    code: str = "INVALID_UNSIGNED"
    expected: str = "uint"


class InvalidFloatError(CoercionError):
    code: str = "INVALID_FLOAT"
    expected: str = "float"


class InvalidPayloadError(DecodeError):
    """A structured (JSON) payload could not be loaded into the field."""

    code: str = "INVALID_PAYLOAD"

    def __init__(self, field: str, text: str, reason: str = ""):
        self.field = field
        self.text = text
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"invalid json '{field}'{detail}, {text}")


class UnsupportedValueTypeError(DecodeError):
    """The input value's runtime type has no coercion path to the field."""

    code: str = "UNSUPPORTED_VALUE_TYPE"

    def __init__(self, field: str, source_type: str, value: Any = None):
        self.field = field
        self.source_type = source_type
        self.value = value
        super().__init__(
            f"value type not supported: field={field} "
            f"type={source_type} value={value!r}"
        )


class UnsupportedFieldTypeError(DecodeError):
    """The field's kind cannot be parsed from text."""

    code: str = "UNSUPPORTED_FIELD_TYPE"

    def __init__(self, field: str, kind: str, text: str = ""):
        self.field = field
        self.kind = kind
        self.text = text
        super().__init__(f"type not supported: {field}({kind}) value={text}")


class InternalDecodeError(DecodeError):
    """
    Unexpected fault raised while walking the record.

    Decode converts anything that is not a MapstructError into this type;
    the original exception is chained as ``__cause__``.
    """

    code: str = "INTERNAL_ERROR"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"internal decode failure: {detail}")


class InternalNotAddressableError(InternalDecodeError):
    """A field could not be written on the target instance."""

    code: str = "NOT_ADDRESSABLE"

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"can not addr: {field}")


class PayloadError(MapstructError):
    """A parsed JSON value does not fit the type it is loaded into."""

    code: str = "PAYLOAD_ERROR"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        where = path or "<root>"
        super().__init__(f"{where}: {reason}")
