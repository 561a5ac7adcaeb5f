"""
Shared test fixtures.
"""

import struct

import pytest

MO_HEADER = "Content-Type: text/plain; charset=UTF-8\n"


def build_mo(messages):
    """Compile a {msgid: msgstr} dict into GNU .mo bytes."""
    messages = {"": MO_HEADER, **messages}
    keys = sorted(messages)

    ids = b""
    strs = b""
    offsets = []
    for key in keys:
        msgid = key.encode("utf-8")
        msgstr = messages[key].encode("utf-8")
        offsets.append((len(ids), len(msgid), len(strs), len(msgstr)))
        ids += msgid + b"\0"
        strs += msgstr + b"\0"

    count = len(keys)
    key_start = 7 * 4 + 16 * count
    value_start = key_start + len(ids)

    key_table = []
    value_table = []
    for id_offset, id_length, str_offset, str_length in offsets:
        key_table += [id_length, id_offset + key_start]
        value_table += [str_length, str_offset + value_start]

    output = struct.pack("<7I", 0x950412DE, 0, count, 7 * 4, 7 * 4 + count * 8, 0, 0)
    output += struct.pack(f"<{len(key_table)}I", *key_table)
    output += struct.pack(f"<{len(value_table)}I", *value_table)
    return output + ids + strs


@pytest.fixture
def write_mo(tmp_path):
    """Write a catalog under tmp_path and return its path."""
    def write(name, messages):
        path = tmp_path / name
        path.write_bytes(build_mo(messages))
        return path
    return write
