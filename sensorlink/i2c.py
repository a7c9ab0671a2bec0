"""Minimal access to a Linux I2C bus character device."""

from __future__ import annotations

import fcntl
import os

I2C_SLAVE = 0x0703


class I2CError(OSError):
    """Raised when the I2C bus cannot be opened, written or read."""


class I2CDevice:
    """One slave device on an I2C bus, addressed through ``/dev/i2c-N``."""

    def __init__(self, path, address):
        self.path = os.fspath(path)
        self.address = address
        try:
            fd = os.open(self.path, os.O_RDWR)
        except OSError as exc:
            raise I2CError(f"cannot open I2C bus {self.path}: {exc.strerror}") from exc
        try:
            fcntl.ioctl(fd, I2C_SLAVE, address)
        except OSError as exc:
            os.close(fd)
            raise I2CError(
                f"cannot select I2C device 0x{address:02x} on {self.path}: {exc.strerror}"
            ) from exc
        self._fd: int | None = fd

    def _require_open(self) -> int:
        if self._fd is None:
            raise I2CError(f"I2C device on {self.path} is closed")
        return self._fd

    def write(self, data):
        """Write all of ``data`` to the device in one transfer."""
        fd = self._require_open()
        payload = bytes(data)
        try:
            written = os.write(fd, payload)
        except OSError as exc:
            raise I2CError(f"I2C write failed: {exc.strerror}") from exc
        if written != len(payload):
            raise I2CError(f"I2C short write: {written} of {len(payload)} bytes")

    def read(self, size):
        """Read exactly ``size`` bytes from the device."""
        fd = self._require_open()
        try:
            data = os.read(fd, size)
        except OSError as exc:
            raise I2CError(f"I2C read failed: {exc.strerror}") from exc
        if len(data) != size:
            raise I2CError(f"I2C short read: {len(data)} of {size} bytes")
        return data

    def close(self):
        """Release the bus file descriptor; closing twice is harmless."""
        if self._fd is not None:
            fd, self._fd = self._fd, None
            os.close(fd)

    @property
    def closed(self) -> bool:
        return self._fd is None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()