"""
Activity registry.

Static table of the activities a user can log, each mapped to the Climatiq
emission factor used to estimate it. Built once at import and read-only after.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from app.utils.constants import ActivityCategory, ParameterName, Unit, UnitType


@dataclass(frozen=True)
class ActivityDefinition:
    """Calculation parameters for a single activity key."""

    key: str
    primary_factor_id: str
    parameter_name: ParameterName
    unit: str
    unit_type: str
    category: str
    fallback_factor_ids: tuple[str, ...] = field(default_factory=tuple)
    region: str | None = None
    note: str = ""

    @property
    def factor_ids(self) -> tuple[str, ...]:
        """Primary factor id followed by the fallbacks, in attempt order."""
        return (self.primary_factor_id, *self.fallback_factor_ids)


def _energy(key: str, factor_id: str, note: str = "", **kwargs) -> ActivityDefinition:
    return ActivityDefinition(
        key=key,
        primary_factor_id=factor_id,
        parameter_name=ParameterName.ENERGY,
        unit=Unit.KWH,
        unit_type=UnitType.ENERGY,
        note=note,
        **kwargs,
    )


def _money(key: str, factor_id: str, note: str = "", **kwargs) -> ActivityDefinition:
    return ActivityDefinition(
        key=key,
        primary_factor_id=factor_id,
        parameter_name=ParameterName.MONEY,
        unit=Unit.INR,
        unit_type=UnitType.MONEY,
        note=note,
        **kwargs,
    )


def _distance(key: str, factor_id: str, note: str = "", **kwargs) -> ActivityDefinition:
    return ActivityDefinition(
        key=key,
        primary_factor_id=factor_id,
        parameter_name=ParameterName.DISTANCE,
        unit=Unit.KM,
        unit_type=UnitType.DISTANCE,
        category=ActivityCategory.TRANSPORT,
        note=note,
        **kwargs,
    )


def _weight(key: str, factor_id: str, note: str = "", **kwargs) -> ActivityDefinition:
    return ActivityDefinition(
        key=key,
        primary_factor_id=factor_id,
        parameter_name=ParameterName.WEIGHT,
        unit=Unit.KG,
        unit_type=UnitType.WEIGHT,
        note=note,
        **kwargs,
    )


ACTIVITY_DEFINITIONS: tuple[ActivityDefinition, ...] = (
    # Energy
    _energy(
        "electricity_residential",
        "electricity-supply_grid-source_supplier_mix",
        category=ActivityCategory.ENERGY,
        note='India grid mix, use region "IN" and year when possible.',
    ),
    _energy(
        "electricity_commercial",
        "electricity-supply_grid-source_supplier_mix",
        category=ActivityCategory.ENERGY,
        note="Same grid mix as residential.",
    ),
    # Household fuel (spend based)
    _money(
        "lpg",
        "fuel-type_liquefied_petroleum_gases-fuel_use_na",
        category=ActivityCategory.HOUSEHOLD,
        fallback_factor_ids=(
            "fuel_combustion-fuel_type_lpg",
            "household_fuel-fuel_type_lpg",
            "fuel-type_lpg",
        ),
        note="LPG spend-based calculation in Indian Rupees.",
    ),
    _money(
        "natural_gas",
        "fuel-type_natural_gas_distribution-fuel_use_na",
        category=ActivityCategory.HOUSEHOLD,
        fallback_factor_ids=(
            "fuel_combustion-fuel_type_natural_gas",
            "household_fuel-fuel_type_natural_gas",
            "fuel-type_natural_gas",
        ),
        note="Natural gas spend-based calculation in Indian Rupees.",
    ),
    # Road
    _distance(
        "car_petrol",
        "passenger_vehicle-vehicle_type_car-fuel_source_petrol-engine_size_na-vehicle_age_na-vehicle_weight_na",
        note="Engine size and age variants exist for better accuracy.",
    ),
    _distance(
        "car_diesel",
        "passenger_vehicle-vehicle_type_car-fuel_source_diesel-engine_size_na-vehicle_age_na-vehicle_weight_na",
    ),
    _distance(
        "motorcycle_petrol",
        "passenger_vehicle-vehicle_type_motorcycle-fuel_source_gasoline-engine_size_na-vehicle_age_na-vehicle_weight_na",
        note="Motorcycle engine size variants (e.g. <150cc) may exist.",
    ),
    # Rail
    _distance(
        "train_urban_metro",
        "passenger_train-route_type_urban-fuel_source_na",
        note="Metro and urban rail.",
    ),
    _distance(
        "train_intercity",
        "passenger_train-route_type_intercity-fuel_source_na",
    ),
    # Air
    _distance(
        "flight_domestic",
        "passenger_flight-route_type_domestic-aircraft_type_na-distance_na-class_na-rf_included-distance_uplift_included",
        note="Radiative forcing included.",
    ),
    _distance(
        "flight_international",
        "passenger_flight-route_type_outside_uk-aircraft_type_na-distance_na-class_economy-rf_included-distance_uplift_included",
        fallback_factor_ids=(
            "passenger_flight-route_type_short_haul",
            "passenger_flight-route_type_long_haul",
        ),
        note="International flight, economy class.",
    ),
    # Food
    _money(
        "rice",
        "consumer_goods-type_processed_rice",
        category=ActivityCategory.FOOD,
        fallback_factor_ids=("food-type_rice", "consumer_goods-type_rice", "food_rice"),
        note="Rice spend-based calculation in Indian Rupees.",
    ),
    _weight(
        "wheat",
        "food-type_wheat_grain_dried_at_farm-origin_region_multi_region",
        category=ActivityCategory.FOOD,
        fallback_factor_ids=("food-type_wheat", "consumer_goods-type_wheat", "food_wheat"),
        note="Wheat consumption in kilograms.",
    ),
    _weight(
        "pulses",
        "food-type_beans_pulses-origin_region_global",
        category=ActivityCategory.FOOD,
        fallback_factor_ids=("food-type_legumes", "consumer_goods-type_pulses", "food_pulses"),
        note="Lentils, beans etc. consumption in kilograms.",
    ),
    _money(
        "eggs",
        "livestock_farming-type_poultry_and_egg_production",
        category=ActivityCategory.FOOD,
        fallback_factor_ids=("food-type_eggs", "consumer_goods-type_eggs", "food_eggs"),
        note="Eggs spend-based calculation in Indian Rupees.",
    ),
    _weight(
        "chicken_meat",
        "food-type_chicken_meat-origin_region_oceania",
        category=ActivityCategory.FOOD,
        fallback_factor_ids=("food-type_chicken", "consumer_goods-type_chicken", "food_chicken"),
        note="Chicken meat consumption in kilograms.",
    ),
)


def _build_registry(
    definitions: Iterable[ActivityDefinition],
) -> Mapping[str, ActivityDefinition]:
    registry: dict[str, ActivityDefinition] = {}
    for definition in definitions:
        if definition.key in registry:
            raise ValueError(f"Duplicate activity key in registry: {definition.key}")
        registry[definition.key] = definition
    return MappingProxyType(registry)


ACTIVITY_REGISTRY: Mapping[str, ActivityDefinition] = _build_registry(ACTIVITY_DEFINITIONS)

CATEGORIES: tuple[str, ...] = (
    ActivityCategory.ENERGY,
    ActivityCategory.HOUSEHOLD,
    ActivityCategory.TRANSPORT,
    ActivityCategory.FOOD,
)


def lookup(activity_key: str) -> ActivityDefinition | None:
    """Return the definition registered for ``activity_key``, or None."""
    return ACTIVITY_REGISTRY.get(activity_key)


def all_keys() -> list[str]:
    """All registered activity keys in declaration order."""
    return list(ACTIVITY_REGISTRY)


def keys_by_category(category: str) -> list[str]:
    """Activity keys belonging to ``category``, in declaration order."""
    return [key for key, definition in ACTIVITY_REGISTRY.items() if definition.category == category]


def definitions(category: str | None = None) -> list[ActivityDefinition]:
    """Registered definitions, optionally filtered by category."""
    if category is None:
        return list(ACTIVITY_REGISTRY.values())
    return [definition for definition in ACTIVITY_REGISTRY.values() if definition.category == category]
