"""
Configuration constants for the clinic sheets client.
Centralizes sheet names and request defaults.
"""
from typing import Final

# Sheet names (constants to avoid typos in callers)
SHEET_PATIENTS: Final[str] = "Patients"
SHEET_ANAMNESIS_FORMS: Final[str] = "AnamnesisForms"
SHEET_BLOOD_PRESSURE_READINGS: Final[str] = "BloodPressureReadings"
SHEET_TREATMENT_PLANS: Final[str] = "TreatmentPlans"

KNOWN_SHEETS: Final[tuple[str, ...]] = (
    SHEET_PATIENTS,
    SHEET_ANAMNESIS_FORMS,
    SHEET_BLOOD_PRESSURE_READINGS,
    SHEET_TREATMENT_PLANS,
)

# Web App request defaults
DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0

# Characters of a malformed response body kept in errorDetails
ERROR_BODY_PREVIEW_CHARS: Final[int] = 500

# Hosts accepted by the MCP server's DNS rebinding protection
DEFAULT_ALLOWED_HOSTS: Final[list[str]] = [
    "localhost:8080",
    "127.0.0.1:8080",
]
