"""CrimeCast Backend — Weather/Crime Correlation Matrix"""

import logging
import math

import numpy as np

from config import STRONG_CORRELATION
from models import (
    CorrelationRow, CrimeCategory, MergedMonthRecord, StrongCorrelation,
    WeatherVariable,
)

logger = logging.getLogger("crimecast.correlation")


def pearson(x, y) -> float:
    """Pearson product-moment coefficient of two equal-length series.

    r = (nΣxy − ΣxΣy) / sqrt((nΣx² − (Σx)²)(nΣy² − (Σy)²))

    Returns 0.0 for empty input or when either series has no variance,
    including a near-constant series whose variance term rounds to <= 0.
    Non-finite inputs propagate as NaN; finite inputs never give NaN.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    n = x.size
    if n == 0:
        return 0.0
    if not (np.isfinite(x).all() and np.isfinite(y).all()):
        return float("nan")
    if np.ptp(x) == 0 or np.ptp(y) == 0:
        return 0.0

    with np.errstate(invalid="ignore", over="ignore"):
        sum_x, sum_y = x.sum(), y.sum()
        numerator = n * (x * y).sum() - sum_x * sum_y
        spread = (n * (x * x).sum() - sum_x * sum_x) * (n * (y * y).sum() - sum_y * sum_y)
        # Raw sums lose precision on near-constant series; the product can go negative
        if not spread > 0:
            return 0.0
        r = float(numerator / np.sqrt(spread))

    if math.isnan(r):
        return 0.0
    return min(1.0, max(-1.0, r))


def analyze_correlations(dataset: list[MergedMonthRecord]) -> list[CorrelationRow]:
    """One row per weather variable (temp, precip, wind, humidity) × four crime categories."""
    counts = {
        cat: [d.count_for(cat) for d in dataset] for cat in CrimeCategory
    }
    rows = []
    for var in WeatherVariable:
        values = [d.value_for(var) for d in dataset]
        rows.append(CorrelationRow(
            variable=var.label,
            theft=pearson(values, counts[CrimeCategory.THEFT]),
            assault=pearson(values, counts[CrimeCategory.ASSAULT]),
            sexual=pearson(values, counts[CrimeCategory.SEXUAL_OFFENSE]),
            homicide=pearson(values, counts[CrimeCategory.HOMICIDE]),
        ))
    logger.debug(f"Correlation matrix computed over {len(dataset)} months")
    return rows


def strong_correlations(
    rows: list[CorrelationRow],
    threshold: float = STRONG_CORRELATION,
) -> list[StrongCorrelation]:
    """Cells with |r| above the threshold, in table order."""
    strong = []
    for row in rows:
        for cat in CrimeCategory:
            r = row.coefficient(cat)
            if abs(r) > threshold:
                strong.append(StrongCorrelation(variable=row.variable, category=cat, coefficient=r))
    return strong
