from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional

RAW_INPUT_FIELDS = ("area", "efficiency", "irradiance", "hours", "tariff")


class RawInputs(BaseModel):
    """Five free-text values as entered by the user."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    area: Optional[str] = None
    efficiency: Optional[str] = None
    irradiance: Optional[str] = None
    hours: Optional[str] = None
    tariff: Optional[str] = None


class PhysicalInputs(BaseModel):
    model_config = ConfigDict(frozen=True)

    area: float          # m²
    efficiency: float    # percent
    irradiance: float    # W/m²
    hours: float         # sunlight hours/day
    tariff: float        # currency/kWh


class EstimatorConstants(BaseModel):
    """Fixed factors used by the estimator.

    - derate_factor: system losses (wiring, inverter, soiling) applied to theoretical output.
    - emission_factor: kg CO2 offset per kWh of grid energy displaced.
    - days_per_month: month length used to scale daily energy.
    """
    model_config = ConfigDict(frozen=True)

    derate_factor: float = 0.85
    emission_factor: float = 0.85
    days_per_month: float = 30


class PerformanceResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    power_output: float     # W
    daily_energy: float     # kWh
    monthly_energy: float   # kWh
    savings: float          # currency/month
    co2_savings: float      # kg/month


class InsightStatus(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    RESOLVED = "resolved"
    FAILED = "failed"


class InsightRequestState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: InsightStatus = InsightStatus.IDLE
    text: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (InsightStatus.RESOLVED, InsightStatus.FAILED)


class Notice(BaseModel):
    title: str
    description: str
    severity: Literal["info", "destructive"] = "info"


class InsightOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    source: Literal["remote", "fallback"]
    # Notices raised while producing this outcome; travel with it, not in its JSON
    notices: List[Notice] = Field(default_factory=list, exclude=True)


class PipelineSnapshot(BaseModel):
    """Everything the presentation layer observes, replaced as a whole on every change."""
    model_config = ConfigDict(frozen=True)

    sequence: int = 0
    inputs: Optional[PhysicalInputs] = None
    result: Optional[PerformanceResult] = None
    insight: InsightRequestState = InsightRequestState()
    notices: List[Notice] = []


class EstimationReport(BaseModel):
    sequence: int
    result: PerformanceResult
    insight: InsightOutcome
    state: InsightRequestState
    notices: List[Notice] = []


class EstimateResponse(BaseModel):
    sequence: int
    result: PerformanceResult
    insight: Optional[InsightOutcome] = None
    state: InsightRequestState
    notices: List[Notice] = []
    message: str


class ValidationErrorResponse(BaseModel):
    error: Literal["missing_field", "not_a_number"]
    message: str
    fields: List[str]
    notices: List[Notice] = []
