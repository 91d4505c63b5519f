TASK_PROMPT = """Based on this solar performance data, analyze the system efficiency and suggest 2-3 practical ways to improve performance:
- Panel Area: {area:.2f} m²
- Panel Efficiency: {efficiency:.2f}%
- Solar Irradiance: {irradiance:.2f} W/m²
- Average Sunlight Hours: {hours:.2f} hours/day
- Electricity Tariff: {currency}{tariff:.2f}/kWh
- Power Output: {power_output:.2f} W
- Daily Energy: {daily_energy:.2f} kWh
- Monthly Energy: {monthly_energy:.2f} kWh
- Monthly Savings: {currency}{savings:.2f}
- CO₂ Savings: {co2_savings:.2f} kg/month

Please provide concise, actionable recommendations such as tilt angle adjustment, panel cleaning frequency, or inverter efficiency improvements."""

NO_SUGGESTIONS_FALLBACK = "Unable to generate suggestions at this time."
CONNECTION_FALLBACK = "Unable to connect to AI service."

ERROR_NOTICE_TITLE = "AI Analysis Error"
ERROR_NOTICE_DESCRIPTION = "Could not generate AI suggestions. Please try again."
