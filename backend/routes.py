"""CrimeCast Backend — FastAPI Routes"""

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from config import APP_VERSION, DISCLAIMER
from models import (
    CrimeCategory, WeatherVariable, ScenarioQuery, MergedMonthRecord,
    DatasetResponse, CorrelationResponse, PredictionResponse,
    ScatterPoint, ScatterResponse,
)
from data_loader import load_dataset, reload_dataset
from correlation import analyze_correlations, strong_correlations
from scoring import (
    predict_risk, find_similar_months, monthly_trend, scatter_points,
)

logger = logging.getLogger("crimecast")


# ─────────────────────────── App Setup ──────────────────────────

app = FastAPI(title="CrimeCast API", version=APP_VERSION)

_allowed_origins = [
    f"http://localhost:{p}" for p in range(3000, 3010)
] + [
    f"http://localhost:{p}" for p in range(5173, 5180)
] + [
    f"http://127.0.0.1:{p}" for p in range(3000, 3010)
] + [
    f"http://127.0.0.1:{p}" for p in range(5173, 5180)
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ─────────────────────────── Dataset ────────────────────────────

@app.get("/api/dataset", response_model=DatasetResponse)
async def get_dataset(chronological: bool = False):
    """Merged monthly records, in source order or chronologically."""
    data = load_dataset()
    if chronological:
        data = monthly_trend(data)
    return DatasetResponse(count=len(data), records=data)


@app.get("/api/dataset/{month}", response_model=MergedMonthRecord)
async def get_month(month: str):
    for d in load_dataset():
        if d.month == month:
            return d
    raise HTTPException(status_code=404, detail=f"No merged record for {month}")


@app.post("/api/dataset/reload", response_model=DatasetResponse)
async def reload():
    """Re-read the CSV sources, bypassing the cache."""
    data = reload_dataset()
    logger.info(f"Dataset reloaded: {len(data)} months")
    return DatasetResponse(count=len(data), records=data)


# ─────────────────────────── Analysis ───────────────────────────

@app.get("/api/correlations", response_model=CorrelationResponse)
async def get_correlations():
    data = load_dataset()
    rows = analyze_correlations(data)
    return CorrelationResponse(rows=rows, strong=strong_correlations(rows), sampleSize=len(data))


@app.post("/api/predict", response_model=PredictionResponse)
async def predict(scenario: ScenarioQuery):
    """Score a weather scenario against the most similar historical months."""
    data = load_dataset()
    logger.info(
        f"Prediction request: {scenario.date} temp={scenario.avgTemp} "
        f"precip={scenario.precipitation} humid={scenario.humidity}"
    )
    neighbors = find_similar_months(scenario, data)
    assessments = predict_risk(scenario, data, neighbors=neighbors)
    return PredictionResponse(
        assessments=assessments,
        similarMonths=[d.month for d in neighbors],
        disclaimer=DISCLAIMER,
    )


@app.get("/api/scatter", response_model=ScatterResponse)
async def get_scatter(
    category: CrimeCategory = CrimeCategory.ASSAULT,
    variable: WeatherVariable = WeatherVariable.TEMPERATURE,
):
    points = scatter_points(load_dataset(), category, variable)
    return ScatterResponse(
        category=category,
        variable=variable,
        points=[ScatterPoint(month=m, x=x, y=y) for m, x, y in points],
    )


# ─────────────────────────── Utility Endpoints ──────────────────

@app.get("/api/health")
async def health():
    return {"status": "ok", "version": APP_VERSION, "months": len(load_dataset())}
