import os
from dotenv import load_dotenv

load_dotenv()

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash-exp")
GEMINI_API_BASE = os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com")
GEMINI_TIMEOUT_SECONDS = float(os.getenv("GEMINI_TIMEOUT_SECONDS", "15"))

# Estimator constants (see models.schemas.EstimatorConstants for defaults)
SOLAR_DERATE_FACTOR = float(os.getenv("SOLAR_DERATE_FACTOR", "0.85"))
SOLAR_EMISSION_FACTOR = float(os.getenv("SOLAR_EMISSION_FACTOR", "0.85"))
SOLAR_DAYS_PER_MONTH = float(os.getenv("SOLAR_DAYS_PER_MONTH", "30"))

CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "₹")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", "3001"))
