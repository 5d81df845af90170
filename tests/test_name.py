import struct

from sfntkit.name import Entry, Name, NameId, NameRecord


def build_name(entries, version=0):
    """entries: list of (platform, encoding, language, name_id, bytes)."""
    storage = b""
    records = b""
    for platform, encoding, language, name_id, raw in entries:
        records += struct.pack(">6H", platform, encoding, language, name_id, len(raw), len(storage))
        storage += raw
    storage_offset = 6 + 12 * len(entries)
    header = struct.pack(">3H", version, len(entries), storage_offset)
    return header + records + storage


def only_entry(raw, platform=3, encoding=1):
    table = Name(build_name([(platform, encoding, 0x409, NameId.FULL_NAME, raw)]))
    return next(table.entries())


def test_windows_entry_round_trip():
    text = "Sample Sans"
    table = Name(build_name([(3, 1, 0x409, NameId.FAMILY_NAME, text.encode("utf-16-be"))], version=1))
    assert table.version() == 1
    entries = list(table.entries())
    assert len(entries) == 1
    assert entries[0].text() == text
    assert entries[0].record.name_id == NameId.FAMILY_NAME


def test_records_fields_come_from_data():
    raw = "Hi".encode("utf-16-be")
    table = Name(build_name([(0, 3, 7, NameId.DESIGNER, raw), (1, 0, 0, NameId.TRADEMARK, b"ab")]))
    records = table.records()
    assert [r.platform_id for r in records] == [0, 1]
    assert records[0].language_id == 7
    assert records[1].name_id == NameId.TRADEMARK
    assert records[1].offset == len(raw)
    assert records[1].storage_range() == range(len(raw), len(raw) + 2)


def test_surrogate_pair_decodes():
    text = "a\U0001F600b"
    assert only_entry(text.encode("utf-16-be")).text() == text


def test_lone_low_surrogate_is_replaced():
    assert only_entry(b"\xdc\x00").text() == "\ufffd"


def test_odd_trailing_byte_is_dropped():
    assert only_entry("A".encode("utf-16-be") + b"\x00").text() == "A"


def test_mac_roman_high_byte():
    entry = only_entry(b"\x80", platform=1, encoding=0)
    assert entry.record.is_decodable()
    assert entry.text() == "\u00c4"


def test_mac_roman_ascii_passthrough():
    entry = only_entry(b"Mac", platform=1, encoding=0)
    assert list(entry.decode()) == ["M", "a", "c"]


def test_unsupported_encoding_yields_nothing():
    entry = only_entry(b"data", platform=3, encoding=5)
    assert not entry.record.is_decodable()
    assert entry.text() == ""
    assert entry.data() == b"data"


def test_entry_data_out_of_storage_is_none():
    data = build_name([(3, 1, 0, 1, b"\x00A")])
    table = Name(data)
    record = NameRecord(platform_id=3, encoding_id=1, name_id=1, length=40, offset=0)
    entry = Entry(table, record)
    assert entry.data() is None
    assert list(entry.decode()) == []


def test_truncated_records_are_empty():
    data = build_name([(3, 1, 0, 1, b"\x00A")])
    assert Name(data[:10]).records() == []
    assert list(Name(b"").entries()) == []


def test_storage_without_offset_is_empty():
    assert Name(struct.pack(">3H", 0, 0, 0) + b"xyz").storage() == b""


def test_storage_starts_at_offset():
    raw = "Q".encode("utf-16-be")
    data = build_name([(3, 1, 0, 1, raw)])
    assert Name(data).storage() == raw