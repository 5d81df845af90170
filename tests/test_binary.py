import struct

import pytest

from sfntkit.binary import (
    Reader,
    fixed_div,
    fixed_from_f2dot14,
    fixed_mul,
    fixed_to_float,
    make_tag,
    tag_to_str,
)


@pytest.mark.parametrize(
    "method, fmt, value",
    [
        ("u8", ">B", 200),
        ("u16", ">H", 0xBEEF),
        ("i16", ">h", -1234),
        ("u32", ">I", 0xDEADBEEF),
        ("i32", ">i", -70000),
        ("u64", ">Q", 0x0123456789ABCDEF),
        ("tag", ">I", 0x68656164),
    ],
)
def test_round_trip_reads(method, fmt, value):
    data = b"\x00\x00" + struct.pack(fmt, value)
    assert getattr(Reader(data), method)(2) == value


@pytest.mark.parametrize("method", ["u8", "u16", "i16", "u24", "u32", "i32", "u64", "tag"])
def test_reads_past_end_return_none(method):
    reader = Reader(b"")
    assert getattr(reader, method)(0) is None


def test_negative_offset_returns_none():
    assert Reader(b"\x01\x02\x03\x04").u16(-1) is None


def test_u24_reads_three_bytes():
    value = 0xABCDEF
    data = value.to_bytes(3, "big") + b"\xff"
    reader = Reader(data)
    assert reader.u24(0) == value
    assert reader.u24(2) is None


def test_partial_read_is_none():
    reader = Reader(b"\x01\x02\x03")
    assert reader.u32(0) is None
    assert reader.u16(1) == struct.unpack(">H", b"\x02\x03")[0]


def test_bytes_range():
    data = b"abcdefgh"
    reader = Reader(data)
    assert reader.bytes(2, 3) == data[2:5]
    assert reader.bytes(6, 3) is None
    assert reader.bytes(8, 0) == b""


def test_sub_reader_offsets_are_relative():
    data = b"\x00\x00" + struct.pack(">H", 513)
    sub = Reader(data).sub(2)
    assert sub.u16(0) == 513
    assert len(sub) == 2
    assert Reader(data).sub(len(data)).data == b""
    assert Reader(data).sub(len(data) + 1) is None


def test_tag_round_trip():
    tag = make_tag(b"head")
    assert tag == int.from_bytes(b"head", "big")
    assert tag_to_str(tag) == "head"
    assert make_tag("OS/2") == make_tag(b"OS/2")


def test_make_tag_rejects_wrong_length():
    with pytest.raises(ValueError):
        make_tag(b"abc")


def test_f2dot14_one_is_fixed_one():
    assert fixed_to_float(fixed_from_f2dot14(0x4000)) == 1.0
    assert fixed_from_f2dot14(-0x4000) == -0x10000


@pytest.mark.parametrize("a", [0, 0x10000, -0x28000, 0x7FFF0000 // 4])
def test_fixed_identity(a):
    assert fixed_mul(a, 0x10000) == a
    assert fixed_div(a, 0x10000) == a


@pytest.mark.parametrize("a, b", [(2, 3), (-4, 5), (7, -2)])
def test_fixed_mul_div_inverse(a, b):
    fa, fb = a * 0x10000, b * 0x10000
    assert fixed_div(fixed_mul(fa, fb), fb) == fa
    assert fixed_div(fa, fa) == 0x10000


def test_fixed_div_by_zero():
    with pytest.raises(ZeroDivisionError):
        fixed_div(0x10000, 0)