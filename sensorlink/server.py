"""UDP server that receives sample batches, reports statistics and acknowledges."""

from __future__ import annotations

import argparse
import socket
import sys

from .protocol import FormatError, parse_samples
from .stats import summarize_samples

DEFAULT_PORT = 12345
BUF_SIZE = 4096
ACK = b"acknowledgement"


def _xyz(label_stats, fmt):
    x, y, z = label_stats
    return f"X: {x:{fmt}} | Y: {y:{fmt}} | Z: {z:{fmt}}"


def _rgb(values, fmt):
    r, g, b = values
    return f"R: {r:{fmt}} | G: {g:{fmt}} | B: {b:{fmt}}"


def format_report(samples):
    """Render the received values and their statistics; empty for no samples."""
    batch = list(samples)
    if not batch:
        return ""
    lines = ["VALORES RECIBIDOS:"]
    for sample in batch:
        lines.append(f"  ACCEL => {_xyz((sample.ax, sample.ay, sample.az), '.4f')}")
        lines.append(f"  COLOR => {_rgb((sample.red, sample.green, sample.blue), 'd')}")

    stats = summarize_samples(batch)
    axes = (stats.x, stats.y, stats.z)
    channels = (stats.red, stats.green, stats.blue)
    lines += [
        "MEASURES:",
        "  ACCEL =>",
        f"    media => {_xyz([s.mean for s in axes], '.4f')}",
        f"    máximo => {_xyz([s.maximum for s in axes], '.4f')}",
        f"    mínimo => {_xyz([s.minimum for s in axes], '.4f')}",
        f"    desviación típica => {_xyz([s.std for s in axes], '.4f')}",
        "  COLOR =>",
        f"    media => {_rgb([s.mean for s in channels], '.2f')}",
        f"    máximo => {_rgb([s.maximum for s in channels], 'd')}",
        f"    mínimo => {_rgb([s.minimum for s in channels], 'd')}",
        f"    desviación típica => {_rgb([s.std for s in channels], '.2f')}",
    ]
    return "\n".join(lines) + "\n"


def handle_datagram(payload):
    """Return the text the server prints for one received datagram."""
    text = payload.decode("utf-8", errors="replace") if isinstance(payload, bytes) else payload
    text = text.split("\0", 1)[0]
    try:
        samples = parse_samples(text)
    except FormatError:
        return f"Datos recibidos (sin formato esperado):\n{text}\n"
    return format_report(samples)


def serve(host, port):
    """Bind a UDP socket and answer every datagram with an acknowledgement."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind((host, port))
        print("Servidor esperando datos...", flush=True)
        while True:
            try:
                payload, client = sock.recvfrom(BUF_SIZE - 1)
            except OSError as exc:
                print(f"recvfrom: {exc}", file=sys.stderr)
                continue
            sys.stdout.write(handle_datagram(payload))
            sys.stdout.flush()
            try:
                sock.sendto(ACK, client)
            except OSError:
                pass


def main(argv=None):
    parser = argparse.ArgumentParser(description="Receive sensor sample batches over UDP.")
    parser.add_argument("--host", default="0.0.0.0", help="address to bind")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="UDP port")
    args = parser.parse_args(argv)
    try:
        serve(args.host, args.port)
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"bind: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())