"""MPU6000 and TCS3472 sampling over I2C, UDP batch transfer and summary statistics."""

__version__ = "0.1.0"