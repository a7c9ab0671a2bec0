import socket
import threading
from unittest import mock

import pytest

from sensorlink.accelerometer import Acceleration
from sensorlink.client import SAMPLES, collect_sample, exchange_batch, main, run
from sensorlink.colorimeter import ColorReading
from sensorlink.i2c import I2CError
from sensorlink.protocol import SensorSample, parse_samples
from sensorlink.server import ACK, handle_datagram


class _Stop(Exception):
    pass


class FakeAccel:
    def __init__(self, reading=Acceleration(0.5, -0.25, 1.0), fail=False, limit=None):
        self.reading = reading
        self.fail = fail
        self.limit = limit
        self.calls = 0

    def read_acceleration(self):
        self.calls += 1
        if self.limit is not None and self.calls > self.limit:
            raise _Stop
        if self.fail:
            raise I2CError("bus gone")
        return self.reading


class FakeColor:
    def __init__(self, reading=ColorReading(0, 10, 20, 30), fail=False):
        self.reading = reading
        self.fail = fail

    def read_colors(self):
        if self.fail:
            raise I2CError("bus gone")
        return self.reading


class FakeSocket:
    def __init__(self, reply=b"acknowledgement", send_error=None):
        self.reply = reply
        self.send_error = send_error
        self.sent = []

    def sendto(self, data, address):
        if self.send_error:
            raise self.send_error
        self.sent.append((data, address))
        return len(data)

    def recvfrom(self, size):
        return self.reply[:size], ("127.0.0.1", 12345)


def test_collect_sample_combines_readings():
    sample = collect_sample(FakeAccel(), FakeColor())
    assert sample == SensorSample(ax=0.5, ay=-0.25, az=1.0, clear=0, red=10, green=20, blue=30)


def test_collect_sample_accel_failure(capsys):
    sample = collect_sample(FakeAccel(fail=True), FakeColor())
    assert (sample.ax, sample.ay, sample.az) == (0.0, 0.0, 0.0)
    assert sample.red == 10
    assert "Error leyendo acelerómetro" in capsys.readouterr().err


def test_collect_sample_color_failure(capsys):
    sample = collect_sample(FakeAccel(), FakeColor(fail=True))
    assert (sample.red, sample.green, sample.blue) == (0, 0, 0)
    assert sample.ax == 0.5
    assert "Error leyendo colorímetro" in capsys.readouterr().err


def test_exchange_batch_sends_parseable_batch(capsys):
    sock = FakeSocket()
    samples = [SensorSample(ax=0.5, ay=0.25, az=-1.0, red=1, green=2, blue=3)] * SAMPLES
    reply = exchange_batch(sock, ("127.0.0.1", 12345), samples)
    assert reply == "acknowledgement"
    assert len(sock.sent) == 1
    data, address = sock.sent[0]
    assert address == ("127.0.0.1", 12345)
    assert parse_samples(data.decode()) == samples
    assert "Respuesta del servidor: acknowledgement" in capsys.readouterr().out


def test_exchange_batch_send_failure_still_waits(capsys):
    sock = FakeSocket(send_error=OSError("unreachable"))
    reply = exchange_batch(sock, ("127.0.0.1", 1), [SensorSample()])
    assert reply == "acknowledgement"
    assert "sendto" in capsys.readouterr().err


def test_exchange_batch_empty_reply():
    assert exchange_batch(FakeSocket(reply=b""), ("127.0.0.1", 1), [SensorSample()]) is None


def test_exchange_batch_with_real_server():
    server = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    server.bind(("127.0.0.1", 0))
    server.settimeout(5)
    received = []

    def answer():
        payload, client = server.recvfrom(4095)
        received.append(handle_datagram(payload))
        server.sendto(ACK, client)

    thread = threading.Thread(target=answer)
    thread.start()
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as client:
            client.settimeout(5)
            samples = [SensorSample(ax=0.25, red=5)] * 3
            reply = exchange_batch(client, server.getsockname(), samples)
        thread.join(5)
    finally:
        server.close()
    assert reply == "acknowledgement"
    assert received[0].startswith("VALORES RECIBIDOS:")


@mock.patch("sensorlink.client.time.sleep")
def test_run_sends_full_batches(sleep):
    accel = FakeAccel(limit=SAMPLES + 2)
    sock = FakeSocket()
    with pytest.raises(_Stop):
        run(accel, FakeColor(), sock, ("127.0.0.1", 12345))
    assert len(sock.sent) == 1
    batch = parse_samples(sock.sent[0][0].decode())
    assert len(batch) == SAMPLES
    assert all(sample.red == 10 for sample in batch)
    assert sleep.call_count == SAMPLES + 2
    sleep.assert_called_with(1)


def test_main_fails_without_bus(tmp_path, capsys):
    assert main(["--device", str(tmp_path / "missing-bus")]) == 1
    assert "Error inicializando acelerómetro" in capsys.readouterr().err