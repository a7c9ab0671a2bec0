[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sensorlink"
version = "0.1.0"
description = "Read an MPU6000 accelerometer and a TCS3472 colour sensor over I2C and stream batches of samples over UDP to a statistics server"
requires-python = ">=3.10"
dependencies = []
keywords = ["i2c", "mpu6000", "tcs3472", "accelerometer", "colour sensor", "udp", "telemetry"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sensorlink-server = "sensorlink.server:main"
sensorlink-client = "sensorlink.client:main"

[tool.hatch.build.targets.wheel]
packages = ["sensorlink"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
