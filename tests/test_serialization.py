import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from actorcall.serialization import Kind, decode, decode_seq, encode, encode_seq


def _int_range(bits, signed):
    if signed:
        return st.integers(-(2 ** (bits - 1)), 2 ** (bits - 1) - 1)
    return st.integers(0, 2**bits - 1)


_chars = st.characters().filter(lambda c: not 0xD800 <= ord(c) <= 0xDFFF)

STRATEGIES = [
    (Kind.I8, _int_range(8, True)),
    (Kind.I16, _int_range(16, True)),
    (Kind.I32, _int_range(32, True)),
    (Kind.I64, _int_range(64, True)),
    (Kind.I128, _int_range(128, True)),
    (Kind.U8, _int_range(8, False)),
    (Kind.U16, _int_range(16, False)),
    (Kind.U32, _int_range(32, False)),
    (Kind.U64, _int_range(64, False)),
    (Kind.U128, _int_range(128, False)),
    (Kind.F32, st.floats(width=32, allow_nan=False)),
    (Kind.F64, st.floats(allow_nan=False)),
    (Kind.CHAR, _chars),
    (Kind.BOOL, st.booleans()),
]


@pytest.mark.parametrize(("kind", "strategy"), STRATEGIES, ids=lambda v: getattr(v, "value", ""))
@given(data=st.data())
def test_bytes_conversion_basic(kind, strategy, data):
    value = data.draw(strategy)
    encoded = encode(value, kind)
    assert len(encoded) == kind.size
    assert decode(encoded, kind) == value


@pytest.mark.parametrize(("kind", "strategy"), STRATEGIES, ids=lambda v: getattr(v, "value", ""))
@given(data=st.data())
def test_bytes_conversion_vec(kind, strategy, data):
    values = data.draw(st.lists(strategy, min_size=10, max_size=49))
    encoded = encode_seq(values, kind)
    assert len(encoded) == len(values) * kind.size
    assert decode_seq(encoded, kind) == values


@given(st.text(alphabet=st.characters(min_codepoint=48, max_codepoint=122), min_size=30, max_size=30))
def test_bytes_conversion_string(text):
    assert decode(encode(text, Kind.STRING), Kind.STRING) == text


def test_string_is_utf8():
    assert encode("héllo", Kind.STRING) == "héllo".encode("utf-8")
    assert decode(b"h\xc3\xa9llo", Kind.STRING) == "héllo"


def test_invalid_utf8_rejected():
    with pytest.raises(ValueError):
        decode(b"\xff\xfe", Kind.STRING)


def test_numeric_encoding_is_big_endian():
    assert encode(1, Kind.U16) == b"\x00\x01"
    assert encode(-1, Kind.I8) == b"\xff"
    assert encode(0x01020304, Kind.U32) == b"\x01\x02\x03\x04"
    assert encode(-2, Kind.I32) == b"\xff\xff\xff\xfe"
    assert encode(1.0, Kind.F64) == b"\x3f\xf0\x00\x00\x00\x00\x00\x00"
    assert encode(1.0, Kind.F32) == b"\x3f\x80\x00\x00"


def test_decode_reads_only_leading_bytes():
    assert decode(b"\x00\x05\xaa\xbb", Kind.U16) == 5


def test_decode_too_short_raises():
    with pytest.raises(ValueError):
        decode(b"\x00", Kind.U32)
    with pytest.raises(ValueError):
        decode(b"\x00\x00", Kind.F64)
    with pytest.raises(ValueError):
        decode(b"", Kind.BOOL)


def test_encode_out_of_range_raises():
    with pytest.raises(ValueError):
        encode(256, Kind.U8)
    with pytest.raises(ValueError):
        encode(-1, Kind.U32)
    with pytest.raises(ValueError):
        encode(128, Kind.I8)


def test_nan_round_trip():
    nan64 = b"\x7f\xf8\x00\x00\x00\x00\x00\x00"
    decoded64 = decode(nan64, Kind.F64)
    assert math.isnan(decoded64)
    assert encode(decoded64, Kind.F64) == nan64

    nan32 = b"\x7f\xc0\x00\x00"
    decoded32 = decode(nan32, Kind.F32)
    assert math.isnan(decoded32)
    assert encode(decoded32, Kind.F32) == nan32


def test_bool_encoding():
    assert encode(True, Kind.BOOL) == b"\x01"
    assert encode(False, Kind.BOOL) == b"\x00"
    assert decode(b"\x01", Kind.BOOL) is True
    assert decode(b"\x02", Kind.BOOL) is False


def test_char_encoding():
    assert encode("A", Kind.CHAR) == b"\x00\x00\x00A"
    assert decode(b"\x00\x01\xf6\x00", Kind.CHAR) == "\U0001f600"


def test_invalid_char_rejected():
    with pytest.raises(ValueError):
        decode(b"\x00\x00\xd8\x00", Kind.CHAR)
    with pytest.raises(ValueError):
        decode(b"\x00\x11\x00\x00", Kind.CHAR)
    with pytest.raises(ValueError):
        encode("ab", Kind.CHAR)


def test_unit():
    assert encode(None, Kind.UNIT) == b""
    assert decode(b"anything", Kind.UNIT) is None


def test_u8_sequence_is_raw_bytes():
    assert encode_seq([1, 2, 255], Kind.U8) == b"\x01\x02\xff"
    assert decode_seq(b"\x01\x02\xff", Kind.U8) == [1, 2, 255]


def test_bool_sequence():
    assert encode_seq([True, False, True], Kind.BOOL) == b"\x01\x00\x01"
    assert decode_seq(b"\x01\x00\x07", Kind.BOOL) == [True, False, False]


def test_sequence_ignores_trailing_partial_element():
    assert decode_seq(b"\x00\x01\x00\x02\x03", Kind.U16) == [1, 2]


def test_char_sequence():
    assert encode_seq("hi", Kind.CHAR) == b"\x00\x00\x00h\x00\x00\x00i"
    assert decode_seq(b"\x00\x00\x00h\x00\x00\x00i", Kind.CHAR) == ["h", "i"]


def test_sequence_of_strings_unsupported():
    with pytest.raises(TypeError):
        encode_seq(["a"], Kind.STRING)
    with pytest.raises(TypeError):
        decode_seq(b"a", Kind.UNIT)


def test_kind_sizes():
    assert len(encode(0, Kind.I128)) == Kind.I128.size == 16
    assert len(encode(0.5, Kind.F32)) == Kind.F32.size == 4
    assert len(encode("x", Kind.CHAR)) == Kind.CHAR.size == 4
    assert Kind.STRING.size is None
    assert len(encode("abc", Kind.STRING)) == 3