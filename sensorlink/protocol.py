"""Text format of sample batches exchanged between client and server."""

from __future__ import annotations

import re
import struct
from dataclasses import dataclass

MAX_SAMPLES = 100


class FormatError(ValueError):
    """Raised when a datagram does not hold a bracketed sample list."""

    def __init__(self, text):
        super().__init__("data does not have the expected format")
        self.text = text


@dataclass(frozen=True)
class SensorSample:
    """One accelerometer and colour reading taken together."""

    ax: float = 0.0
    ay: float = 0.0
    az: float = 0.0
    clear: int = 0
    red: int = 0
    green: int = 0
    blue: int = 0


def _encode_sample(sample: SensorSample) -> str:
    return (
        f'{{"ax":{sample.ax:.4f},"ay":{sample.ay:.4f},"az":{sample.az:.4f},'
        f'"clear":{sample.clear},"red":{sample.red},"green":{sample.green},'
        f'"blue":{sample.blue}}}'
    )


def encode_samples(samples):
    """Render samples as the batch text the client sends."""
    body = ",".join(_encode_sample(sample) for sample in samples)
    return '{ "samples": [' + body + "] }"


_FLOAT = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_UINT = re.compile(r"\s*([+-]?)(\d+)")

_ULONG_MAX = 2**64 - 1


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return float("inf") if value > 0 else float("-inf")


def _convert_float(match: re.Match) -> float:
    return _to_float32(float(match.group(1)))


def _convert_uint(match: re.Match) -> int:
    sign, digits = match.group(1), int(match.group(2))
    if digits > _ULONG_MAX:
        value = _ULONG_MAX
    elif sign == "-":
        value = -digits % (_ULONG_MAX + 1)
    else:
        value = digits
    return value & 0xFFFFFFFF


# (literal prefix, field name or None to skip, pattern, converter)
_SAMPLE_FIELDS = (
    ('{"ax":', "ax", _FLOAT, _convert_float),
    (',"ay":', "ay", _FLOAT, _convert_float),
    (',"az":', "az", _FLOAT, _convert_float),
    (',"clear":', None, _UINT, _convert_uint),
    (',"red":', "red", _UINT, _convert_uint),
    (',"green":', "green", _UINT, _convert_uint),
    (',"blue":', "blue", _UINT, _convert_uint),
)


def _scan_sample(text: str, pos: int) -> SensorSample:
    """Read as many fields as match in order; unmatched fields stay zero."""
    values = {}
    for literal, name, pattern, convert in _SAMPLE_FIELDS:
        if not text.startswith(literal, pos):
            break
        pos += len(literal)
        match = pattern.match(text, pos)
        if match is None:
            break
        pos = match.end()
        if name is not None:
            values[name] = convert(match)
    return SensorSample(**values)


def parse_samples(text):
    """Extract up to 100 samples from the first ``[ ... ]`` of a batch text.

    Fields that cannot be read are left at zero; the clear channel is not kept.
    """
    start = text.find("[")
    end = text.find("]")
    if start < 0 or end < 0 or end <= start:
        raise FormatError(text)

    samples = []
    pos = start + 1
    while pos < end and len(samples) < MAX_SAMPLES:
        samples.append(_scan_sample(text, pos))
        close = text.find("}", pos)
        if close < 0 or close >= end:
            break
        pos = close + 1
        while pos < len(text) and text[pos] in ", \n":
            pos += 1
    return samples