"""
Application constants.
"""
from enum import Enum


class ConfigFile:
    """Configuration file paths."""
    PRODUCTION = "production.toml"
    DEVELOPMENT = "development.toml"
    TEST = "test.toml"


class ActivityCategory:
    """Activity category constants used for dashboard grouping."""
    ENERGY = "energy"
    HOUSEHOLD = "household"
    TRANSPORT = "transport"
    FOOD = "food"


class ActivityCategoryEnum(str, Enum):
    """Activity category enum for API parameters."""
    ENERGY = "energy"
    HOUSEHOLD = "household"
    TRANSPORT = "transport"
    FOOD = "food"


class ParameterName(str, Enum):
    """Request field carrying the user's quantity in an estimate call."""
    ENERGY = "energy"
    MONEY = "money"
    DISTANCE = "distance"
    WEIGHT = "weight"


class Unit:
    """Units paired with each parameter."""
    KWH = "kWh"
    INR = "inr"
    KM = "km"
    KG = "kg"


class UnitType:
    """Climatiq unit type names."""
    ENERGY = "Energy"
    MONEY = "Money"
    DISTANCE = "Distance"
    WEIGHT = "Weight"


class ErrorCode:
    """Machine-readable error codes returned by the API."""
    INVALID_INPUT = "INVALID_INPUT"
    UNSUPPORTED_ACTIVITY = "UNSUPPORTED_ACTIVITY"
    SERVICE_MISCONFIGURED = "SERVICE_MISCONFIGURED"
    API_AUTH_ERROR = "API_AUTH_ERROR"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    EXTERNAL_API_ERROR = "EXTERNAL_API_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DATABASE_UNAVAILABLE = "DATABASE_UNAVAILABLE"
    DATABASE_ERROR = "DATABASE_ERROR"
    MISSING_TOKEN = "MISSING_TOKEN"
    INVALID_TOKEN = "INVALID_TOKEN"
    AUTH_ERROR = "AUTH_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# Climatiq
CLIMATIQ_BASE_URL = "https://api.climatiq.io/data/v1"
CLIMATIQ_DATA_VERSION = "27.27"
CLIMATIQ_TIMEOUT_SECONDS = 10.0
UNPROCESSABLE_ENTITY = 422

# Persistence
DEFAULT_REGION = "IN"

# Environment variables holding secrets
CLIMATIQ_API_KEY_ENV = "CLIMATIQ_API_KEY"
SUPABASE_ANON_KEY_ENV = "SUPABASE_ANON_KEY"
