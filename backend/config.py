"""CrimeCast Backend — Configuration & Constants"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from project root (one level up from backend/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

APP_VERSION = "1.0.0"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# ── Data sources ──
_DATASETS_BASE = _PROJECT_ROOT / "datasets"
CRIME_CSV_PATH = Path(os.environ.get("CRIME_CSV_PATH", _DATASETS_BASE / "crime_monthly.csv"))
WEATHER_CSV_PATH = Path(os.environ.get("WEATHER_CSV_PATH", _DATASETS_BASE / "weather_monthly.csv"))
DATASET_TTL = int(os.environ.get("DATASET_TTL", "3600"))  # seconds

# ── Analogue-month predictor policy ──
# Number of historically similar months averaged per prediction
NEIGHBOR_COUNT = 10

# Distance = TEMP·|Δtemp| + HUMIDITY·|Δhumidity| + PRECIP·|Δprecip|
TEMP_WEIGHT = 2.0
HUMIDITY_WEIGHT = 1.0
PRECIP_WEIGHT = 0.5

# Score → level, upper bounds are exclusive; anything above is "Very High"
RISK_THRESHOLDS = (
    (30, "Low"),
    (60, "Moderate"),
    (80, "High"),
)

# Rationale triggers
WARM_TEMP_THRESHOLD = 20.0     # °C, sexual offense rationale
HEAVY_RAIN_THRESHOLD = 10.0    # mm, theft rationale
HIGH_SCORE_RATIONALE = 70      # score above which months look "high-incidence"

# |r| above this is highlighted on the correlation table
STRONG_CORRELATION = 0.5

# Raw crime feed labels → category values
CRIME_LABELS = {
    "절도": "theft",
    "폭행": "assault",
    "성범죄": "sexual_offense",
    "살인": "homicide",
}

# Defaults for an empty scenario form
DEFAULT_SCENARIO = {
    "avgTemp": 20.0,
    "minTemp": 15.0,
    "maxTemp": 25.0,
    "precipitation": 0.0,
    "windSpeed": 2.5,
    "humidity": 50.0,
}

DISCLAIMER = (
    "This tool estimates risk trends from historical statistical associations. "
    "It is not a definitive forecast of future incidents; actual crime rates "
    "depend on many social factors beyond the weather."
)
