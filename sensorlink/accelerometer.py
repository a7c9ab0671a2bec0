"""MPU6000 accelerometer over I2C."""

from __future__ import annotations

import struct
import time
from dataclasses import dataclass

from .i2c import I2CDevice, I2CError

MPU6000_ADDR = 0x68
REG_PWR_MGMT_1 = 0x6B
REG_ACCEL_XOUT_H = 0x3B
REG_ACCEL_CONFIG = 0x1C

LSB_PER_G = 16384.0
_RAW_FORMAT = struct.Struct(">hhh")


@dataclass(frozen=True)
class Acceleration:
    """Acceleration along each axis, in g."""

    x: float
    y: float
    z: float


def decode_acceleration(data):
    """Turn the six big-endian bytes XH XL YH YL ZH ZL into an Acceleration (±2 g range)."""
    raw = bytes(data)
    if len(raw) != _RAW_FORMAT.size:
        raise ValueError(f"expected {_RAW_FORMAT.size} bytes, got {len(raw)}")
    x, y, z = _RAW_FORMAT.unpack(raw)
    return Acceleration(x / LSB_PER_G, y / LSB_PER_G, z / LSB_PER_G)


class Mpu6000:
    """Driver for an MPU6000 reached through any object with write/read/close."""

    def __init__(self, device):
        self.device = device

    def initialize(self):
        """Wake the sensor and set the accelerometer to ±2 g."""
        try:
            self.device.write(bytes([REG_PWR_MGMT_1, 0x00]))
        except I2CError as exc:
            raise I2CError(f"cannot initialise MPU6000: {exc}") from exc
        time.sleep(0.1)
        try:
            self.device.write(bytes([REG_ACCEL_CONFIG, 0x00]))
        except I2CError as exc:
            raise I2CError(f"cannot configure accelerometer range: {exc}") from exc
        time.sleep(0.01)

    def read_acceleration(self):
        """Read X, Y and Z acceleration in g."""
        try:
            self.device.write(bytes([REG_ACCEL_XOUT_H]))
        except I2CError as exc:
            raise I2CError(f"cannot select accelerometer register: {exc}") from exc
        try:
            data = self.device.read(_RAW_FORMAT.size)
        except I2CError as exc:
            raise I2CError(f"cannot read accelerometer data: {exc}") from exc
        return decode_acceleration(data)

    def close(self):
        self.device.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def open_mpu6000(path):
    """Open the I2C bus at ``path`` and address the MPU6000 on it."""
    return Mpu6000(I2CDevice(path, MPU6000_ADDR))