"""Serial port connection to a LightSwarm bus controller.

LightSwarm controllers listen on a plain serial line at 38400 baud, 8N1.
The connection is write-only: nodes never answer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import serial

logger = logging.getLogger(__name__)

DEFAULT_BAUDRATE = 38400
DEFAULT_WRITE_TIMEOUT = 1.0  # seconds


@dataclass
class PortInfo:
    """Settings of the opened port."""

    port: str = ""
    baudrate: int = DEFAULT_BAUDRATE

    def to_dict(self) -> dict:
        return {"port": self.port, "baudrate": self.baudrate}


class SerialConnection:
    """Manages the serial port an :class:`~lightswarm_mcp.led.LED` writes to.

    Usage::

        conn = SerialConnection("/dev/ttyUSB0")
        conn.open()
        conn.write(frame_bytes)
        conn.close()
    """

    def __init__(
        self,
        port: str,
        baudrate: int = DEFAULT_BAUDRATE,
        write_timeout: float = DEFAULT_WRITE_TIMEOUT,
    ) -> None:
        self._port = port
        self._baudrate = baudrate
        self._write_timeout = write_timeout
        self._serial: serial.Serial | None = None
        self._port_info = PortInfo(port=port, baudrate=baudrate)

    @property
    def connected(self) -> bool:
        return self._serial is not None and self._serial.is_open

    @property
    def port_info(self) -> PortInfo:
        return self._port_info

    def open(self) -> PortInfo:
        """Open the serial port.

        Raises:
            ConnectionError: If the port cannot be opened.
        """
        try:
            self._serial = serial.Serial(
                port=self._port,
                baudrate=self._baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                write_timeout=self._write_timeout,
            )
        except serial.SerialException as e:
            raise ConnectionError(
                f"Could not open serial port {self._port} "
                f"at {self._baudrate} baud: {e}"
            ) from e

        logger.info("Connected to %s at %d baud", self._port, self._baudrate)
        return self._port_info

    def close(self) -> None:
        """Close the serial port."""
        if self._serial is None:
            return

        try:
            self._serial.close()
        except serial.SerialException as e:
            logger.warning("Error closing port: %s", e)
        finally:
            self._serial = None
            logger.info("Disconnected")

    def write(self, data: bytes) -> int:
        """Write raw bytes to the port.

        Returns:
            Number of bytes written.

        Raises:
            ConnectionError: If not connected.
            serial.SerialException: If the write fails or times out.
        """
        if not self.connected:
            raise ConnectionError("Not connected to serial port")

        written = self._serial.write(data)
        self._serial.flush()
        return len(data) if written is None else written

    def __enter__(self) -> SerialConnection:
        self.open()
        return self

    def __exit__(self, *exc) -> None:
        self.close()
