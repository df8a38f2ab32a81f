"""Big-endian byte encodings for primitive values and sequences of them.

Numeric kinds are encoded at a fixed width so that both ends of a connection
agree on the size regardless of platform. Decoding is lenient in the same way
as the wire format it mirrors: single values read only their leading bytes, and
sequences ignore a trailing partial element.
"""

from __future__ import annotations

import operator
import struct
from collections.abc import Iterable
from enum import Enum
from typing import Any

__all__ = ["Kind", "encode", "decode", "encode_seq", "decode_seq"]


class Kind(Enum):
    """The primitive types that have a byte encoding."""

    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    F32 = "f32"
    F64 = "f64"
    BOOL = "bool"
    CHAR = "char"
    STRING = "string"
    UNIT = "unit"

    @property
    def size(self) -> int | None:
        """Width in bytes of one encoded value, or None for variable width."""
        return _SIZES.get(self)


_INT_SPECS: dict[Kind, tuple[int, bool]] = {
    Kind.I8: (1, True),
    Kind.I16: (2, True),
    Kind.I32: (4, True),
    Kind.I64: (8, True),
    Kind.I128: (16, True),
    Kind.U8: (1, False),
    Kind.U16: (2, False),
    Kind.U32: (4, False),
    Kind.U64: (8, False),
    Kind.U128: (16, False),
}

_FLOAT_FORMATS: dict[Kind, struct.Struct] = {
    Kind.F32: struct.Struct(">f"),
    Kind.F64: struct.Struct(">d"),
}

_SIZES: dict[Kind, int] = {
    **{kind: size for kind, (size, _) in _INT_SPECS.items()},
    **{kind: fmt.size for kind, fmt in _FLOAT_FORMATS.items()},
    Kind.BOOL: 1,
    Kind.CHAR: 4,
    Kind.UNIT: 0,
}

_SURROGATES = range(0xD800, 0xE000)
_MAX_CODE_POINT = 0x10FFFF


def _encode_int(value: Any, kind: Kind) -> bytes:
    size, signed = _INT_SPECS[kind]
    number = operator.index(value)
    try:
        return number.to_bytes(size, "big", signed=signed)
    except OverflowError as exc:
        raise ValueError(f"{number} does not fit in {kind.value}") from exc


def _decode_int(data: bytes, kind: Kind) -> int:
    size, signed = _INT_SPECS[kind]
    if len(data) < size:
        raise ValueError(f"{kind.value} needs {size} bytes, got {len(data)}")
    return int.from_bytes(data[:size], "big", signed=signed)


def _encode_float(value: Any, kind: Kind) -> bytes:
    try:
        return _FLOAT_FORMATS[kind].pack(value)
    except (OverflowError, struct.error) as exc:
        raise ValueError(f"cannot encode {value!r} as {kind.value}") from exc


def _decode_float(data: bytes, kind: Kind) -> float:
    fmt = _FLOAT_FORMATS[kind]
    if len(data) < fmt.size:
        raise ValueError(f"{kind.value} needs {fmt.size} bytes, got {len(data)}")
    return fmt.unpack_from(data)[0]


def _char_code(value: Any) -> int:
    if not isinstance(value, str) or len(value) != 1:
        raise ValueError(f"a char must be a single character, got {value!r}")
    code = ord(value)
    if code in _SURROGATES:
        raise ValueError(f"surrogate code point {code:#x} is not a char")
    return code


def _code_char(code: int) -> str:
    if code in _SURROGATES or code > _MAX_CODE_POINT:
        raise ValueError(f"{code:#x} is not a valid char")
    return chr(code)


def encode(value: Any, kind: Kind) -> bytes:
    """Encode a single value of the given kind."""
    if kind in _INT_SPECS:
        return _encode_int(value, kind)
    if kind in _FLOAT_FORMATS:
        return _encode_float(value, kind)
    if kind is Kind.BOOL:
        return b"\x01" if value else b"\x00"
    if kind is Kind.CHAR:
        return _encode_int(_char_code(value), Kind.U32)
    if kind is Kind.STRING:
        if not isinstance(value, str):
            raise TypeError(f"expected str, got {type(value).__name__}")
        return value.encode("utf-8")
    if kind is Kind.UNIT:
        return b""
    raise TypeError(f"unsupported kind {kind!r}")


def decode(data: bytes | bytearray | memoryview, kind: Kind) -> Any:
    """Decode a single value of the given kind from its leading bytes."""
    raw = bytes(data)
    if kind in _INT_SPECS:
        return _decode_int(raw, kind)
    if kind in _FLOAT_FORMATS:
        return _decode_float(raw, kind)
    if kind is Kind.BOOL:
        if not raw:
            raise ValueError("bool needs 1 byte, got 0")
        return raw[0] == 1
    if kind is Kind.CHAR:
        return _code_char(_decode_int(raw, Kind.U32))
    if kind is Kind.STRING:
        return raw.decode("utf-8")
    if kind is Kind.UNIT:
        return None
    raise TypeError(f"unsupported kind {kind!r}")


def encode_seq(values: Iterable[Any], kind: Kind) -> bytes:
    """Encode a sequence of values as the concatenation of their encodings."""
    if kind is Kind.U8:
        return bytes(values)
    if kind is Kind.BOOL:
        return bytes(1 if value else 0 for value in values)
    if kind in (Kind.STRING, Kind.UNIT):
        raise TypeError(f"sequences of {kind.value} have no encoding")
    return b"".join(encode(value, kind) for value in values)


def decode_seq(data: bytes | bytearray | memoryview, kind: Kind) -> list[Any]:
    """Decode a sequence of fixed-width values; a trailing partial element is ignored."""
    raw = bytes(data)
    if kind is Kind.U8:
        return list(raw)
    if kind is Kind.BOOL:
        return [byte == 1 for byte in raw]
    if kind in (Kind.STRING, Kind.UNIT):
        raise TypeError(f"sequences of {kind.value} have no encoding")
    size = _SIZES[kind]
    end = len(raw) // size * size
    return [decode(raw[start:start + size], kind) for start in range(0, end, size)]