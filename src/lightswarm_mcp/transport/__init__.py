"""Transport layer: serial port connection."""
