import socket

import pytest

from sensorlink.protocol import SensorSample, encode_samples
from sensorlink.server import format_report, handle_datagram, main, serve


def _batch():
    return [
        SensorSample(ax=0.5, ay=-0.25, az=1.0, red=100, green=200, blue=300),
        SensorSample(ax=0.25, ay=0.0, az=0.5, red=10, green=20, blue=30),
    ]


def test_report_lists_each_sample():
    report = format_report(_batch())
    lines = report.splitlines()
    assert lines[0] == "VALORES RECIBIDOS:"
    assert lines[1] == "  ACCEL => X: 0.5000 | Y: -0.2500 | Z: 1.0000"
    assert lines[2] == "  COLOR => R: 100 | G: 200 | B: 300"
    assert lines[3] == "  ACCEL => X: 0.2500 | Y: 0.0000 | Z: 0.5000"
    assert lines[4] == "  COLOR => R: 10 | G: 20 | B: 30"
    assert lines[5] == "MEASURES:"


def test_report_extremes():
    report = format_report(_batch())
    assert "    máximo => X: 0.5000 | Y: 0.0000 | Z: 1.0000" in report
    assert "    mínimo => X: 0.2500 | Y: -0.2500 | Z: 0.5000" in report
    assert "    máximo => R: 100 | G: 200 | B: 300" in report
    assert "    mínimo => R: 10 | G: 20 | B: 30" in report


def test_single_sample_report_has_zero_deviation():
    sample = SensorSample(ax=0.125, ay=0.5, az=-1.0, red=7, green=8, blue=9)
    report = format_report([sample])
    assert "    media => X: 0.1250 | Y: 0.5000 | Z: -1.0000" in report
    assert "    desviación típica => X: 0.0000 | Y: 0.0000 | Z: 0.0000" in report
    assert "    media => R: 7.00 | G: 8.00 | B: 9.00" in report
    assert "    desviación típica => R: 0.00 | G: 0.00 | B: 0.00" in report
    assert report.endswith("\n")


def test_empty_report():
    assert format_report([]) == ""


def test_handle_round_trip_matches_report():
    batch = _batch()
    payload = encode_samples(batch).encode()
    assert handle_datagram(payload) == format_report(batch)


def test_handle_accepts_text():
    batch = _batch()
    assert handle_datagram(encode_samples(batch)) == format_report(batch)


def test_handle_unexpected_format():
    assert handle_datagram(b"hello") == "Datos recibidos (sin formato esperado):\nhello\n"


def test_handle_stops_at_nul():
    assert handle_datagram(b"abc\0[]") == "Datos recibidos (sin formato esperado):\nabc\n"


def test_handle_empty_list_prints_nothing():
    assert handle_datagram(b'{ "samples": [] }') == ""


def test_serve_fails_on_busy_port():
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as blocker:
        blocker.bind(("127.0.0.1", 0))
        port = blocker.getsockname()[1]
        with pytest.raises(OSError):
            serve("127.0.0.1", port)


def test_main_reports_bind_failure(capsys):
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as blocker:
        blocker.bind(("127.0.0.1", 0))
        port = blocker.getsockname()[1]
        assert main(["--host", "127.0.0.1", "--port", str(port)]) == 1
    assert "bind" in capsys.readouterr().err