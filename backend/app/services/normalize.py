# backend/app/services/normalize.py
import math

WEIGHT_UNIT_ALIASES = {
    "kg": "kg",
    "kgs": "kg",
    "kilogram": "kg",
    "kilograms": "kg",
    "lb": "lbs",
    "lbs": "lbs",
    "pound": "lbs",
    "pounds": "lbs",
}


def normalize_weight_unit(unit):
    """
    Map a unit spelling onto its canonical tag ("kg" or "lbs").
    Returns None for anything unrecognised.
    """
    if not isinstance(unit, str):
        return None
    return WEIGHT_UNIT_ALIASES.get(unit.strip().lower())


def parse_magnitude(value):
    """
    Parse a weight magnitude from a number or numeric string.
    Returns a finite float, or None when the value is unusable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number
