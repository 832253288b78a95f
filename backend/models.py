"""CrimeCast Backend — Pydantic Models"""

from datetime import date as _date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from config import CRIME_LABELS, DEFAULT_SCENARIO


def month_key(value: str) -> str:
    """Normalise 'YYYY-MM-DD' / 'YYYY-MM' strings to a 'YYYY-MM' month key."""
    return value.strip()[:7]


# ─────────────────────────── Enumerations ───────────────────────

class CrimeCategory(str, Enum):
    THEFT = "theft"
    ASSAULT = "assault"
    SEXUAL_OFFENSE = "sexual_offense"
    HOMICIDE = "homicide"

    @property
    def count_field(self) -> str:
        return _COUNT_FIELDS[self]

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> Optional["CrimeCategory"]:
        """Resolve a raw feed label (Korean or English) to a category, or None."""
        label = label.strip()
        value = CRIME_LABELS.get(label, label.lower().replace("-", "_"))
        try:
            return cls(value)
        except ValueError:
            return None


_COUNT_FIELDS = {
    CrimeCategory.THEFT: "theftCount",
    CrimeCategory.ASSAULT: "assaultCount",
    CrimeCategory.SEXUAL_OFFENSE: "sexualCount",
    CrimeCategory.HOMICIDE: "homicideCount",
}

_CATEGORY_LABELS = {
    CrimeCategory.THEFT: "Theft",
    CrimeCategory.ASSAULT: "Assault",
    CrimeCategory.SEXUAL_OFFENSE: "Sexual Offense",
    CrimeCategory.HOMICIDE: "Homicide",
}


class RiskLevel(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    VERY_HIGH = "Very High"

    @property
    def rank(self) -> int:
        return list(RiskLevel).index(self)

    # str ordering would compare alphabetically; order by severity instead
    def __lt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank >= other.rank


class WeatherVariable(str, Enum):
    TEMPERATURE = "temperature"
    PRECIPITATION = "precipitation"
    WIND = "wind"
    HUMIDITY = "humidity"

    @property
    def field(self) -> str:
        return _WEATHER_FIELDS[self]

    @property
    def label(self) -> str:
        return _WEATHER_LABELS[self]


_WEATHER_FIELDS = {
    WeatherVariable.TEMPERATURE: "avgTemp",
    WeatherVariable.PRECIPITATION: "avgPrecip",
    WeatherVariable.WIND: "avgWind",
    WeatherVariable.HUMIDITY: "avgHumid",
}

_WEATHER_LABELS = {
    WeatherVariable.TEMPERATURE: "Average Temperature",
    WeatherVariable.PRECIPITATION: "Precipitation",
    WeatherVariable.WIND: "Wind Speed",
    WeatherVariable.HUMIDITY: "Humidity",
}


# ─────────────────────────── Source records ─────────────────────

class WeatherMonthRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: str  # YYYY-MM
    avgTemp: float
    avgPrecip: float
    avgWind: float
    avgHumid: float


class CrimeMonthRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: str  # YYYY-MM
    category: CrimeCategory
    count: int = Field(ge=0)


class MergedMonthRecord(BaseModel):
    """One month of joined weather aggregates and crime counts."""

    model_config = ConfigDict(frozen=True)

    month: str  # YYYY-MM
    avgTemp: float
    avgPrecip: float
    avgWind: float
    avgHumid: float
    theftCount: int = Field(default=0, ge=0)
    assaultCount: int = Field(default=0, ge=0)
    sexualCount: int = Field(default=0, ge=0)
    homicideCount: int = Field(default=0, ge=0)

    def count_for(self, category: CrimeCategory) -> int:
        return getattr(self, category.count_field)

    def value_for(self, variable: WeatherVariable) -> float:
        return getattr(self, variable.field)


# ─────────────────────────── Analysis input / output ────────────

class ScenarioQuery(BaseModel):
    """Weather snapshot to assess.

    Only avgTemp, precipitation and humidity feed the similarity metric;
    the other fields are carried for the input form.
    """

    model_config = ConfigDict(frozen=True)

    date: _date = Field(default_factory=_date.today)
    avgTemp: float = DEFAULT_SCENARIO["avgTemp"]
    minTemp: float = DEFAULT_SCENARIO["minTemp"]
    maxTemp: float = DEFAULT_SCENARIO["maxTemp"]
    precipitation: float = DEFAULT_SCENARIO["precipitation"]
    windSpeed: float = DEFAULT_SCENARIO["windSpeed"]
    humidity: float = DEFAULT_SCENARIO["humidity"]


class CorrelationRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    variable: str
    theft: float
    assault: float
    sexual: float
    homicide: float

    def coefficient(self, category: CrimeCategory) -> float:
        return getattr(self, _CORRELATION_FIELDS[category])


_CORRELATION_FIELDS = {
    CrimeCategory.THEFT: "theft",
    CrimeCategory.ASSAULT: "assault",
    CrimeCategory.SEXUAL_OFFENSE: "sexual",
    CrimeCategory.HOMICIDE: "homicide",
}


class StrongCorrelation(BaseModel):
    variable: str
    category: CrimeCategory
    coefficient: float


class RiskAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    crimeType: CrimeCategory
    score: int  # 0-100
    level: RiskLevel
    reasoning: str


# ─────────────────────────── API responses ──────────────────────

class DatasetResponse(BaseModel):
    count: int
    records: list[MergedMonthRecord]


class CorrelationResponse(BaseModel):
    rows: list[CorrelationRow]
    strong: list[StrongCorrelation] = []
    sampleSize: int


class PredictionResponse(BaseModel):
    assessments: list[RiskAssessment]
    similarMonths: list[str]  # month keys of the analogue set, closest first
    disclaimer: str = ""


class ScatterPoint(BaseModel):
    month: str
    x: float
    y: int


class ScatterResponse(BaseModel):
    category: CrimeCategory
    variable: WeatherVariable
    points: list[ScatterPoint]
