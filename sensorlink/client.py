"""UDP client that samples both sensors and sends batches to the server."""

from __future__ import annotations

import argparse
import socket
import sys
import time

from .accelerometer import open_mpu6000
from .colorimeter import open_tcs3472
from .i2c import I2CError
from .protocol import SensorSample, encode_samples

DEFAULT_SERVER = "192.168.0.21"
DEFAULT_PORT = 12345
DEFAULT_DEVICE = "/dev/i2c-1"
BUF_SIZE = 2048
SAMPLES = 10


def collect_sample(accelerometer, colorimeter):
    """Take one reading from each sensor; a failed reading leaves zeros."""
    values = {}
    try:
        accel = accelerometer.read_acceleration()
    except I2CError as exc:
        print(f"{exc}", file=sys.stderr)
        print("Error leyendo acelerómetro", file=sys.stderr)
    else:
        values.update(ax=accel.x, ay=accel.y, az=accel.z)
    try:
        colors = colorimeter.read_colors()
    except I2CError as exc:
        print(f"{exc}", file=sys.stderr)
        print("Error leyendo colorímetro", file=sys.stderr)
    else:
        values.update(
            clear=colors.clear, red=colors.red, green=colors.green, blue=colors.blue
        )
    return SensorSample(**values)


def exchange_batch(sock, address, samples):
    """Send one batch and return the server's reply, or None if there was none."""
    data = encode_samples(samples).encode()[: BUF_SIZE - 1]
    try:
        sock.sendto(data, address)
    except OSError as exc:
        print(f"sendto: {exc}", file=sys.stderr)
    try:
        reply, _ = sock.recvfrom(BUF_SIZE - 1)
    except OSError:
        return None
    if not reply:
        return None
    text = reply.decode("utf-8", errors="replace")
    print(f"Respuesta del servidor: {text}", flush=True)
    return text


def run(accelerometer, colorimeter, sock, address):
    """Sample once a second forever, sending every full batch of ten."""
    batch = []
    while True:
        batch.append(collect_sample(accelerometer, colorimeter))
        if len(batch) == SAMPLES:
            exchange_batch(sock, address, batch)
            batch = []
        time.sleep(1)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Send sensor sample batches over UDP.")
    parser.add_argument("--server", default=DEFAULT_SERVER, help="server IPv4 address")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="server UDP port")
    parser.add_argument("--device", default=DEFAULT_DEVICE, help="I2C bus device")
    args = parser.parse_args(argv)

    try:
        accelerometer = open_mpu6000(args.device)
    except I2CError as exc:
        print(f"{exc}\nError inicializando acelerómetro", file=sys.stderr)
        return 1
    with accelerometer:
        try:
            accelerometer.initialize()
        except I2CError as exc:
            print(f"{exc}\nError inicializando acelerómetro", file=sys.stderr)
            return 1
        try:
            colorimeter = open_tcs3472(args.device)
        except I2CError as exc:
            print(f"{exc}\nError inicializando colorímetro", file=sys.stderr)
            return 1
        with colorimeter:
            try:
                colorimeter.initialize()
            except I2CError as exc:
                print(f"{exc}\nError inicializando colorímetro", file=sys.stderr)
                return 1
            try:
                socket.inet_pton(socket.AF_INET, args.server)
            except OSError as exc:
                print(f"inet_pton: {exc}", file=sys.stderr)
                return 1
            with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
                try:
                    run(accelerometer, colorimeter, sock, (args.server, args.port))
                except KeyboardInterrupt:
                    return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())