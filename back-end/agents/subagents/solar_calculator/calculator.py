import logging
import math

from models.schemas import EstimatorConstants, PerformanceResult, PhysicalInputs

DEFAULT_CONSTANTS = EstimatorConstants()

logger = logging.getLogger(__name__)


def estimate(
	inputs: PhysicalInputs,
	constants: EstimatorConstants = DEFAULT_CONSTANTS,
) -> PerformanceResult:
	"""Compute panel output and monthly savings.

	Algorithm:
	  power_output   = area * irradiance * (efficiency / 100)              # W
	  daily_energy   = power_output * hours * derate_factor / 1000          # kWh
	  monthly_energy = daily_energy * days_per_month                        # kWh
	  savings        = monthly_energy * tariff
	  co2_savings    = monthly_energy * emission_factor                     # kg

	No rounding and no plausibility checks: zero or negative inputs flow straight
	through. Formatting for display belongs to the caller.
	"""
	power_output = inputs.area * inputs.irradiance * (inputs.efficiency / 100)
	daily_energy = (power_output * inputs.hours * constants.derate_factor) / 1000
	monthly_energy = daily_energy * constants.days_per_month
	savings = monthly_energy * inputs.tariff
	co2_savings = monthly_energy * constants.emission_factor

	result = PerformanceResult(
		power_output=power_output,
		daily_energy=daily_energy,
		monthly_energy=monthly_energy,
		savings=savings,
		co2_savings=co2_savings,
	)
	non_finite = [name for name, value in result.model_dump().items() if not math.isfinite(value)]
	if non_finite:
		logger.warning(f"Estimate overflowed to a non-finite value in: {', '.join(non_finite)}")
	return result
