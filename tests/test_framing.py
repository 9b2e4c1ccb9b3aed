"""Tests for frame building, checksum and escaping."""

import pytest

from lightswarm_mcp.protocol.framing import (
    END,
    ESC,
    ESC_END,
    ESC_ESC,
    Frame,
    build_frame,
    checksum,
    escape_wrap,
    split_address,
)


def _unwrap(frame: bytes) -> bytes:
    """Strip the delimiters and reverse the escapes."""
    assert frame[0] == END and frame[-1] == END
    body = frame[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        if body[i] == ESC:
            out.append({ESC_END: END, ESC_ESC: ESC}[body[i + 1]])
            i += 2
        else:
            out.append(body[i])
            i += 1
    return bytes(out)


@pytest.mark.parametrize(
    "address, expected",
    [(1, (0, 1)), (690, (2, 178)), (65535, (255, 255)), (0, (0, 0))],
)
def test_split_address(address, expected):
    """Addresses split big-endian and reassemble exactly."""
    hi, lo = split_address(address)
    assert (hi, lo) == expected
    assert hi * 256 + lo == address


def test_split_address_out_of_range():
    with pytest.raises(ValueError):
        split_address(65536)
    with pytest.raises(ValueError):
        split_address(-1)


def test_checksum_simple_bytes():
    assert checksum(bytes([0, 1, 2, 3, 4])) == 4


def test_checksum_real_world_bytes():
    """Checksum of address 690 + ON."""
    assert checksum(bytes([2, 178, 0x20])) == 144


def test_checksum_empty():
    assert checksum(b"") == 0


def test_escape_wrap_empty():
    """An empty payload is still a well-formed frame."""
    assert escape_wrap(b"") == bytes([END, END])


def test_escape_wrap_end_byte():
    assert escape_wrap(bytes([END])) == bytes([END, ESC, ESC_END, END])


def test_escape_wrap_esc_byte():
    assert escape_wrap(bytes([ESC])) == bytes([END, ESC, ESC_ESC, END])


def test_escape_wrap_plain_bytes():
    assert escape_wrap(bytes([2, 178, 0x20, 144])) == bytes([END, 2, 178, 0x20, 144, END])


def test_build_frame_power_on_690():
    assert build_frame(690, 0x20) == bytes([END, 2, 178, 0x20, 144, END])


def test_build_frame_fade_690():
    """Fade 690 to 255 at 1 step per 1 interval."""
    frame = build_frame(690, 0x23, bytes([255, 1, 1]))
    assert frame == bytes([END, 2, 178, 0x23, 255, 1, 1, 108, END])


def test_build_frame_escapes_checksum():
    """Address 738 ON has checksum 0xC0, which must itself be escaped."""
    frame = build_frame(738, 0x20)
    assert frame == bytes([END, 2, 226, 0x20, ESC, ESC_END, END])


def test_build_frame_escapes_address():
    """Reserved bytes in the address are escaped, checksum uses raw values."""
    frame = build_frame(0xC0DB, 0x20)
    assert frame == bytes([END, ESC, ESC_END, ESC, ESC_ESC, 0x20, 0x3B, END])


def test_build_frame_delimiter_only_at_ends():
    frame = build_frame(0xC0C0, 0xDB, bytes([END, ESC, END]))
    assert END not in frame[1:-1]


def test_build_frame_deterministic():
    assert build_frame(690, 0x23, b"\xff\x01\x01") == build_frame(690, 0x23, b"\xff\x01\x01")


def test_build_frame_roundtrip_payload():
    """Unescaping between the delimiters gives back payload and checksum."""
    args = bytes([END, ESC, 0x00, ESC, END])
    payload = bytes([0xC0, 0xDB, 0x2C]) + args
    frame = build_frame(0xC0DB, 0x2C, args)
    assert _unwrap(frame) == payload + bytes([checksum(payload)])


def test_build_frame_invalid_command():
    with pytest.raises(ValueError):
        build_frame(1, 0x100)


def test_build_frame_invalid_arg_byte():
    with pytest.raises(ValueError):
        build_frame(1, 0x22, [256])


def test_frame_to_bytes():
    frame = Frame(address=690, command=0x20)
    assert frame.to_bytes() == build_frame(690, 0x20)


def test_frame_repr():
    """Frame repr should be readable."""
    r = repr(Frame(address=690, command=0x23, args=b"\xff\x01\x01"))
    assert "0x23" in r
    assert "ff 01 01" in r
