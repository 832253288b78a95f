"""
CrimeCast Backend — FastAPI
Modular entry point. All logic is split across:
  config.py, models.py, data_loader.py, correlation.py, scoring.py, routes.py
"""

import logging

from config import LOG_LEVEL

logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))

from routes import app  # noqa: F401,E402

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
