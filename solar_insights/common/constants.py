"""Application constants."""

USER_AGENT = "property-solar-insights/0.1"
DEFAULT_ADDRESS = "4711 N Vía Zurburan, Tucson AZ"

MODES = ("live", "mock")
STAGE_VALIDATE = "validate"
STAGE_VERIFY_CREDENTIALS = "verify-credentials"
STAGE_GEOCODE = "geocode"
STAGE_FETCH_MAP = "fetch-map"
STAGE_FETCH_SOLAR = "fetch-solar"
STAGES = (
    STAGE_VALIDATE,
    STAGE_VERIFY_CREDENTIALS,
    STAGE_GEOCODE,
    STAGE_FETCH_MAP,
    STAGE_FETCH_SOLAR,
)

MAPS_API_KEY_ENV = "GOOGLE_MAPS_API_KEY"
SOLAR_API_KEY_ENV = "GOOGLE_SOLAR_API_KEY"
SOLAR_API_KEY_HEADER = "X-Goog-Api-Key"

MAP_ZOOM = 18
MAP_SIZE = "600x400"
MAP_TYPE = "satellite"
KEY_CHECK_MAP_PARAMS = {"center": "0,0", "zoom": "1", "size": "100x100"}
KEY_CHECK_GEOCODE_ADDRESS = "test"

ELECTRICITY_RATE_USD_PER_KWH = 0.12
SAVINGS_HORIZON_YEARS = 20
HOURS_PER_YEAR = 365 * 24

PLACEHOLDER_INSIGHTS = {
    "yearly_generation_kwh": 12000,
    "potential_savings_usd": 25000,
    "annual_sunshine_hours": 2800,
    "roof_space_m2": 85,
    "number_of_panels": 24,
}

EXIT_SUCCESS = 0
EXIT_SUBMISSION_FAILED = 10
EXIT_HARD_FAIL = 20

JSON_LOG_FIELDS = (
    "timestamp",
    "submission_id",
    "stage",
    "provider",
    "event",
    "status",
    "http_status",
    "duration_ms",
    "error_code",
    "message",
    "exc_info",
)
