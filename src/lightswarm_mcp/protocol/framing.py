"""Frame builder for the LightSwarm serial protocol.

Frame layout::

    +-----+---------+---------+---------+------------------+----------+-----+
    | END | Addr Hi | Addr Lo | Command |    Arguments     | Checksum | END |
    | C0  | 1 byte  | 1 byte  | 1 byte  |  variable length |  1 byte  | C0  |
    +-----+---------+---------+---------+------------------+----------+-----+

- Address: 16-bit node address, big-endian
- Checksum: XOR of every byte from Addr Hi through the last argument
- Everything between the two END bytes is SLIP-escaped: END (0xC0) becomes
  ESC 0xDC and ESC (0xDB) becomes ESC 0xDD, so END only ever marks a frame
  boundary on the wire
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

END = 0xC0
ESC = 0xDB
ESC_END = 0xDC
ESC_ESC = 0xDD

MAX_ADDRESS = 0xFFFF


def split_address(address: int) -> tuple[int, int]:
    """Split a 16-bit node address into (high, low) bytes."""
    if not 0 <= address <= MAX_ADDRESS:
        raise ValueError(f"Node address must be 0-{MAX_ADDRESS}, got {address}")
    return address >> 8, address & 0xFF


def checksum(data: Iterable[int]) -> int:
    """XOR every byte of ``data`` together, starting from zero."""
    result = 0
    for b in data:
        result ^= b
    return result


def escape_wrap(payload: bytes) -> bytes:
    """Escape reserved bytes in ``payload`` and wrap it in END delimiters.

    An empty payload still yields a well-formed (empty) frame of two END
    bytes.
    """
    out = bytearray([END])
    for b in payload:
        if b == END:
            out += bytes([ESC, ESC_END])
        elif b == ESC:
            out += bytes([ESC, ESC_ESC])
        else:
            out.append(b)
    out.append(END)
    return bytes(out)


def build_frame(address: int, command: int, args: bytes = b"") -> bytes:
    """Build the wire bytes for a single command.

    Args:
        address: Node address 0-65535.
        command: Single-byte command code.
        args: Command-specific argument bytes.

    Returns:
        The escaped frame, delimited by END bytes, ready to write to the port.
    """
    if not 0 <= command <= 0xFF:
        raise ValueError(f"Command must be a single byte, got {command}")
    hi, lo = split_address(address)
    # bytes() rejects values outside 0-255
    payload = bytes([hi, lo, command]) + bytes(args)
    # Checksum covers the unescaped payload and is escaped along with it
    return escape_wrap(payload + bytes([checksum(payload)]))


@dataclass(frozen=True)
class Frame:
    """A single command addressed to one node."""

    address: int
    command: int
    args: bytes = b""

    def to_bytes(self) -> bytes:
        return build_frame(self.address, self.command, self.args)

    def __repr__(self) -> str:
        return (
            f"Frame(address={self.address}, command=0x{self.command:02X}, "
            f"args={self.args.hex(' ') if self.args else '(empty)'})"
        )
