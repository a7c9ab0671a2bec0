"""TCS3472 colour sensor over I2C."""

from __future__ import annotations

import struct
import time
from dataclasses import dataclass

from .i2c import I2CDevice, I2CError

TCS3472_ADDR = 0x29
COMMAND_BIT = 0x80
REG_ENABLE = 0x00
REG_ATIME = 0x01
REG_CDATAL = 0x14

_RAW_FORMAT = struct.Struct("<HHHH")


@dataclass(frozen=True)
class ColorReading:
    """Raw channel counts; the clear channel is not read and stays 0."""

    clear: int
    red: int
    green: int
    blue: int


def decode_colors(data):
    """Turn the eight little-endian bytes CL CH RL RH GL GH BL BH into a ColorReading."""
    raw = bytes(data)
    if len(raw) != _RAW_FORMAT.size:
        raise ValueError(f"expected {_RAW_FORMAT.size} bytes, got {len(raw)}")
    _, red, green, blue = _RAW_FORMAT.unpack(raw)
    return ColorReading(clear=0, red=red, green=green, blue=blue)


class Tcs3472:
    """Driver for a TCS3472 reached through any object with write/read/close."""

    def __init__(self, device):
        self.device = device

    def initialize(self):
        """Power on, enable the ADC and set the shortest integration time."""
        try:
            self.device.write(bytes([COMMAND_BIT | REG_ENABLE, 0x03]))
        except I2CError as exc:
            raise I2CError(f"cannot enable TCS3472: {exc}") from exc
        time.sleep(0.003)
        try:
            self.device.write(bytes([COMMAND_BIT | REG_ATIME, 0xFF]))
        except I2CError as exc:
            raise I2CError(f"cannot set TCS3472 integration time: {exc}") from exc
        time.sleep(0.003)

    def read_colors(self):
        """Read the red, green and blue channels."""
        try:
            self.device.write(bytes([COMMAND_BIT | REG_CDATAL]))
        except I2CError as exc:
            raise I2CError(f"cannot select colour register: {exc}") from exc
        try:
            data = self.device.read(_RAW_FORMAT.size)
        except I2CError as exc:
            raise I2CError(f"cannot read colour data: {exc}") from exc
        return decode_colors(data)

    def close(self):
        self.device.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def open_tcs3472(path):
    """Open the I2C bus at ``path`` and address the TCS3472 on it."""
    return Tcs3472(I2CDevice(path, TCS3472_ADDR))