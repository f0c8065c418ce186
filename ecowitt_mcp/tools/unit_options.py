"""
Ecowitt unit selection parameters.

Each option is an optional integer enumeration accepted by the real-time and
history endpoints. The JSON-schema fragments are spread into tool input
schemas; extract_unit_options() filters them back out of tool arguments.
"""

from typing import Any, Dict

UNIT_OPTIONS_SCHEMA: Dict[str, Dict[str, Any]] = {
    "temp_unitid": {
        "type": "integer",
        "minimum": 1,
        "maximum": 2,
        "description": "Temperature unit: 1 for °C, 2 for °F (default)",
    },
    "pressure_unitid": {
        "type": "integer",
        "minimum": 3,
        "maximum": 5,
        "description": "Pressure unit: 3 for hPa, 4 for inHg (default), 5 for mmHg",
    },
    "wind_speed_unitid": {
        "type": "integer",
        "minimum": 6,
        "maximum": 11,
        "description": "Wind speed unit: 6 for m/s, 7 for km/h, 8 for knots, 9 for mph (default), 10 for BFT, 11 for fpm",
    },
    "rainfall_unitid": {
        "type": "integer",
        "minimum": 12,
        "maximum": 13,
        "description": "Rain unit: 12 for mm, 13 for in (default)",
    },
    "solar_irradiance_unitid": {
        "type": "integer",
        "minimum": 14,
        "maximum": 16,
        "description": "Solar Irradiance unit: 14 for lux, 15 for fc, 16 for W/m² (default)",
    },
    "capacity_unitid": {
        "type": "integer",
        "minimum": 24,
        "maximum": 26,
        "description": "Capacity unit: 24 for L (default), 25 for m³, 26 for gal",
    },
}

UNIT_OPTION_KEYS = tuple(UNIT_OPTIONS_SCHEMA)


def extract_unit_options(arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only recognised unit option keys that carry a value."""
    if not arguments:
        return {}
    return {key: value for key, value in arguments.items() if key in UNIT_OPTION_KEYS and value is not None}
