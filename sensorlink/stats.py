"""Summary statistics over batches of sensor samples."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class SummaryStats:
    """Mean, extremes and population standard deviation of one series."""

    mean: float
    maximum: float
    minimum: float
    std: float


@dataclass(frozen=True)
class BatchStats:
    """Per-channel statistics of a batch of samples."""

    x: SummaryStats
    y: SummaryStats
    z: SummaryStats
    red: SummaryStats
    green: SummaryStats
    blue: SummaryStats


def summarize(values):
    """Summarise a non-empty series; the deviation divides by n, not n - 1."""
    series = list(values)
    if not series:
        raise ValueError("cannot summarise an empty series")
    count = len(series)
    mean = sum(series, 0.0) / count
    variance = sum((value - mean) * (value - mean) for value in series) / count
    return SummaryStats(
        mean=mean,
        maximum=max(series),
        minimum=min(series),
        std=math.sqrt(variance),
    )


def summarize_samples(samples):
    """Summarise the acceleration axes and colour channels of a batch."""
    batch = list(samples)
    if not batch:
        raise ValueError("cannot summarise an empty batch")
    return BatchStats(
        x=summarize(sample.ax for sample in batch),
        y=summarize(sample.ay for sample in batch),
        z=summarize(sample.az for sample in batch),
        red=summarize(sample.red for sample in batch),
        green=summarize(sample.green for sample in batch),
        blue=summarize(sample.blue for sample in batch),
    )