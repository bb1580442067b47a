"""Map charger properties onto capabilities."""

import math
from typing import Iterable, List, Optional, Union

from .const import (
    CAPABILITY_MAP,
    PROP_ENERGY_TOTAL,
    PROP_POWER,
    PROP_TEMPERATURE,
    PROP_VOLTAGE_L1,
    PROP_VOLTAGE_L2,
    PROP_VOLTAGE_L3,
)
from .models import CapabilityUpdate, PropertyRecord

Value = Optional[Union[int, float, str]]

# Rounded to whole numbers
_WHOLE = frozenset({PROP_VOLTAGE_L1, PROP_VOLTAGE_L2, PROP_VOLTAGE_L3})
# Rounded to one decimal
_ONE_DECIMAL = frozenset({PROP_TEMPERATURE, PROP_POWER})


def round_half_away(value: float, digits: int = 0) -> float:
    """Round half away from zero, unlike the builtin banker's rounding."""
    factor = 10 ** digits
    scaled = abs(value) * factor
    rounded = math.floor(scaled + 0.5)
    return math.copysign(rounded, value) / factor


def transform_value(prop_id: str, value: Value) -> Value:
    """Apply the per-property rounding to a raw value.

    NaN and infinite readings become None so they are never written.
    """
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    if not math.isfinite(value):
        return None

    if prop_id in _WHOLE:
        return int(round_half_away(value))
    if prop_id in _ONE_DECIMAL:
        return round_half_away(value, 1)
    if prop_id == PROP_ENERGY_TOTAL:
        # Wh to kWh with two decimals
        return round_half_away(value / 10) / 100
    return value


def map_properties(records: Iterable[PropertyRecord]) -> List[CapabilityUpdate]:
    """Turn property records into capability updates.

    Records without a capability are dropped.
    """
    updates = []
    for record in records:
        capability_id = CAPABILITY_MAP.get(record.id)
        if capability_id is None:
            continue
        updates.append(
            CapabilityUpdate(capability_id, transform_value(record.id, record.value))
        )
    return updates
