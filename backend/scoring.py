"""CrimeCast Backend — Analogue-Month Risk Scoring

Scores a weather scenario by finding the historically most similar months
and comparing their average crime counts against the full dataset range.
"""

import logging
import math
from typing import Optional

from config import (
    NEIGHBOR_COUNT, TEMP_WEIGHT, HUMIDITY_WEIGHT, PRECIP_WEIGHT,
    RISK_THRESHOLDS, WARM_TEMP_THRESHOLD, HEAVY_RAIN_THRESHOLD,
    HIGH_SCORE_RATIONALE,
)
from models import (
    CrimeCategory, MergedMonthRecord, RiskAssessment, RiskLevel, ScenarioQuery,
    WeatherVariable,
)

# Setup logger
logger = logging.getLogger("crimecast.scoring")

_RATIONALE_LEAD = "Based on historical data from similar weather conditions: "


def weighted_distance(
    record: MergedMonthRecord,
    scenario: ScenarioQuery,
    temp_weight: float = TEMP_WEIGHT,
    humidity_weight: float = HUMIDITY_WEIGHT,
    precip_weight: float = PRECIP_WEIGHT,
) -> float:
    """Dissimilarity of a historical month to the scenario.

    Wind speed, min/max temperature and the date are not part of the metric.
    """
    return (
        temp_weight * abs(record.avgTemp - scenario.avgTemp)
        + humidity_weight * abs(record.avgHumid - scenario.humidity)
        + precip_weight * abs(record.avgPrecip - scenario.precipitation)
    )


def _distance_key(distance: float) -> tuple[bool, float]:
    # NaN compares false both ways; push it behind every real distance
    return (math.isnan(distance), distance)


def find_similar_months(
    scenario: ScenarioQuery,
    dataset: list[MergedMonthRecord],
    k: int = NEIGHBOR_COUNT,
    **weights,
) -> list[MergedMonthRecord]:
    """The k closest months, nearest first. Ties keep dataset order."""
    scored = [(weighted_distance(d, scenario, **weights), d) for d in dataset]
    scored.sort(key=lambda pair: _distance_key(pair[0]))
    return [d for _, d in scored[:max(k, 0)]]


def average_counts(neighbors: list[MergedMonthRecord]) -> dict[CrimeCategory, float]:
    if not neighbors:
        return {cat: 0.0 for cat in CrimeCategory}
    n = len(neighbors)
    return {
        cat: sum(d.count_for(cat) for d in neighbors) / n
        for cat in CrimeCategory
    }


def normalize_score(value: float, population: list[float]) -> int:
    """Min-max scale value against population onto 0-100, rounded half up.

    A degenerate range (empty, or max == min) scores 0.
    """
    if not population:
        return 0
    lo, hi = min(population), max(population)
    if hi == lo:
        return 0
    pct = (value - lo) / (hi - lo) * 100
    pct = min(100.0, max(0.0, pct))
    return int(math.floor(pct + 0.5))


def classify_risk_level(score: int) -> RiskLevel:
    """Map a 0-100 score to a risk level.

    Mapping:
      < 30   → Low
      30-59  → Moderate
      60-79  → High
      >= 80  → Very High
    """
    for bound, level in RISK_THRESHOLDS:
        if score < bound:
            return RiskLevel(level)
    return RiskLevel.VERY_HIGH


def build_rationale(category: CrimeCategory, score: int, scenario: ScenarioQuery) -> str:
    """Explain a score. First matching rule wins."""
    if category is CrimeCategory.SEXUAL_OFFENSE and scenario.avgTemp > WARM_TEMP_THRESHOLD:
        detail = "Incidents tend to rise when the average temperature is high."
    elif category is CrimeCategory.THEFT and scenario.precipitation > HEAVY_RAIN_THRESHOLD:
        detail = "Theft patterns tend to shift during periods of heavy precipitation."
    elif score > HIGH_SCORE_RATIONALE:
        detail = "Current conditions resemble periods with historically high incidence."
    else:
        detail = "No clear weather-driven increase in risk was found."
    return _RATIONALE_LEAD + detail


def predict_risk(
    scenario: ScenarioQuery,
    dataset: list[MergedMonthRecord],
    k: int = NEIGHBOR_COUNT,
    neighbors: Optional[list[MergedMonthRecord]] = None,
    **weights,
) -> list[RiskAssessment]:
    """One RiskAssessment per crime category (theft, assault, sexual offense, homicide).

    Extra keyword arguments (temp_weight, humidity_weight, precip_weight)
    override the distance weights. An empty dataset yields score 0 / Low
    for every category.
    """
    if neighbors is None:
        neighbors = find_similar_months(scenario, dataset, k, **weights)
    averages = average_counts(neighbors)

    assessments = []
    for cat in CrimeCategory:
        score = normalize_score(averages[cat], [d.count_for(cat) for d in dataset])
        assessments.append(RiskAssessment(
            crimeType=cat,
            score=score,
            level=classify_risk_level(score),
            reasoning=build_rationale(cat, score, scenario),
        ))

    logger.info(
        f"Risk prediction over {len(neighbors)}/{len(dataset)} months: "
        + ", ".join(f"{a.crimeType.value}={a.score}" for a in assessments)
    )
    return assessments


# ─────────────────────── Dashboard series ───────────────────────

def monthly_trend(dataset: list[MergedMonthRecord]) -> list[MergedMonthRecord]:
    """Dataset in chronological order."""
    return sorted(dataset, key=lambda d: d.month)


def scatter_points(
    dataset: list[MergedMonthRecord],
    category: CrimeCategory,
    variable: WeatherVariable = WeatherVariable.TEMPERATURE,
) -> list[tuple[str, float, int]]:
    """(month, weather value, crime count) triples for a scatter plot."""
    return [(d.month, d.value_for(variable), d.count_for(category)) for d in dataset]
