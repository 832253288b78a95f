"""Monthly weather + crime dataset loader.

Reads the two monthly CSV feeds and joins them into one MergedMonthRecord
per month:
  - crime_monthly.csv   → date (YYYY-MM-01), crime type label, count
  - weather_monthly.csv → month (YYYY-MM), avg temp, precipitation, wind, humidity

Months where neither theft nor assault was recorded are treated as having
no crime data and are left out of the merged set.
"""

import csv
import io
import logging
import threading
from pathlib import Path

from cachetools import TTLCache, cached

from config import CRIME_CSV_PATH, WEATHER_CSV_PATH, DATASET_TTL
from models import (
    CrimeCategory, CrimeMonthRecord, WeatherMonthRecord, MergedMonthRecord,
    month_key,
)

logger = logging.getLogger("crimecast.loader")

_DATASET_CACHE = TTLCache(maxsize=1, ttl=DATASET_TTL)
_DATASET_LOCK = threading.Lock()


# ── parsers ──────────────────────────────────────────────────────


def _rows(text: str):
    """Yield non-blank CSV rows after the header line."""
    reader = csv.reader(io.StringIO(text.strip()))
    next(reader, None)
    for row in reader:
        if not row or not "".join(row).strip():
            continue
        yield [cell.strip() for cell in row]


def parse_crime_csv(text: str) -> list[CrimeMonthRecord]:
    """Parse 'date,type,count' rows. Short rows and unknown types are skipped."""
    records = []
    for row in _rows(text):
        if len(row) < 3:
            continue
        category = CrimeCategory.from_label(row[1])
        if category is None:
            logger.warning(f"Skipping crime row with unknown type: {row[1]!r}")
            continue
        records.append(CrimeMonthRecord(
            month=month_key(row[0]),
            category=category,
            count=int(row[2]),
        ))
    return records


def parse_weather_csv(text: str) -> list[WeatherMonthRecord]:
    """Parse 'month,avgTemp,avgPrecip,avgWind,avgHumid' rows."""
    records = []
    for row in _rows(text):
        if len(row) < 5:
            continue
        records.append(WeatherMonthRecord(
            month=month_key(row[0]),
            avgTemp=float(row[1]),
            avgPrecip=float(row[2]),
            avgWind=float(row[3]),
            avgHumid=float(row[4]),
        ))
    return records


# ── merge ────────────────────────────────────────────────────────


def merge_records(
    crime_records: list[CrimeMonthRecord],
    weather_records: list[WeatherMonthRecord],
) -> list[MergedMonthRecord]:
    """Join crime counts onto weather months, in weather order.

    A category missing for a month counts as 0. If a month lists the same
    category twice, the first row wins.
    """
    by_month: dict[str, dict[CrimeCategory, int]] = {}
    for c in crime_records:
        by_month.setdefault(c.month, {}).setdefault(c.category, c.count)

    merged = []
    for w in weather_records:
        counts = by_month.get(w.month, {})
        theft = counts.get(CrimeCategory.THEFT, 0)
        assault = counts.get(CrimeCategory.ASSAULT, 0)
        if not (theft > 0 or assault > 0):
            continue
        merged.append(MergedMonthRecord(
            month=w.month,
            avgTemp=w.avgTemp,
            avgPrecip=w.avgPrecip,
            avgWind=w.avgWind,
            avgHumid=w.avgHumid,
            theftCount=theft,
            assaultCount=assault,
            sexualCount=counts.get(CrimeCategory.SEXUAL_OFFENSE, 0),
            homicideCount=counts.get(CrimeCategory.HOMICIDE, 0),
        ))

    dropped = len(weather_records) - len(merged)
    if dropped:
        logger.debug(f"Dropped {dropped} weather months without theft/assault counts")
    return merged


# ── loaders (cached) ─────────────────────────────────────────────


def _read_source(path: Path, label: str, parser) -> list:
    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        logger.warning(f"{label} data not found: {path}")
        return []
    try:
        records = parser(text)
    except ValueError as e:
        logger.warning(f"Failed to parse {label} data from {path.name}: {e}")
        return []
    logger.info(f"Loaded {len(records)} {label} rows from {path.name}")
    return records


@cached(_DATASET_CACHE, lock=_DATASET_LOCK)
def _load_merged() -> tuple[MergedMonthRecord, ...]:
    crimes = _read_source(CRIME_CSV_PATH, "crime", parse_crime_csv)
    weather = _read_source(WEATHER_CSV_PATH, "weather", parse_weather_csv)
    merged = merge_records(crimes, weather)
    logger.info(f"Merged dataset ready: {len(merged)} months")
    return tuple(merged)


def load_dataset() -> list[MergedMonthRecord]:
    """Return the merged dataset, re-reading the sources after DATASET_TTL."""
    return list(_load_merged())


def reload_dataset() -> list[MergedMonthRecord]:
    """Drop the cached dataset and read the sources again."""
    with _DATASET_LOCK:
        _DATASET_CACHE.clear()
    return load_dataset()
