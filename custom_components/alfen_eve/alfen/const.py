"""Constants for the Alfen Eve local API."""

API_URL = "api"
API_HEADER = "alfen/json; charset=utf-8"

# Content types the charger uses for JSON payloads
JSON_CONTENT_TYPES = ("application/json", "alfen/json")

DEFAULT_USERNAME = "admin"
DEFAULT_TIMEOUT = 15
DEFAULT_REFRESH_RATE = 30

# Property ids requested on every poll, in request order
PROPERTY_IDS = (
    "2060_0",   # uptime
    "2056_0",   # boot count
    "2221_3",   # voltage L1
    "2221_4",   # voltage L2
    "2221_5",   # voltage L3
    "2221_A",   # current L1
    "2221_B",   # current L2
    "2221_C",   # current L3
    "2221_16",  # active power
    "2201_0",   # temperature
    "2501_2",   # socket status
    "2221_22",  # total energy (Wh)
    "2129_0",   # current limit
    "2126_0",   # authorization mode
)

PROP_VOLTAGE_L1 = "2221_3"
PROP_VOLTAGE_L2 = "2221_4"
PROP_VOLTAGE_L3 = "2221_5"
PROP_CURRENT_L1 = "2221_A"
PROP_CURRENT_L2 = "2221_B"
PROP_CURRENT_L3 = "2221_C"
PROP_POWER = "2221_16"
PROP_TEMPERATURE = "2201_0"
PROP_ENERGY_TOTAL = "2221_22"
PROP_CURRENT_LIMIT = "2129_0"

CAPABILITY_POWER = "measure_power"
CAPABILITY_ENERGY = "meter_power"
CAPABILITY_CURRENT_L1 = "measure_current.l1"
CAPABILITY_CURRENT_L2 = "measure_current.l2"
CAPABILITY_CURRENT_L3 = "measure_current.l3"
CAPABILITY_VOLTAGE_L1 = "measure_voltage.l1"
CAPABILITY_VOLTAGE_L2 = "measure_voltage.l2"
CAPABILITY_VOLTAGE_L3 = "measure_voltage.l3"
CAPABILITY_TEMPERATURE = "measure_temperature"
CAPABILITY_CURRENT_LIMIT = "measure_current.limit"

CAPABILITY_MAP = {
    PROP_POWER: CAPABILITY_POWER,
    PROP_ENERGY_TOTAL: CAPABILITY_ENERGY,
    PROP_CURRENT_L1: CAPABILITY_CURRENT_L1,
    PROP_CURRENT_L2: CAPABILITY_CURRENT_L2,
    PROP_CURRENT_L3: CAPABILITY_CURRENT_L3,
    PROP_VOLTAGE_L1: CAPABILITY_VOLTAGE_L1,
    PROP_VOLTAGE_L2: CAPABILITY_VOLTAGE_L2,
    PROP_VOLTAGE_L3: CAPABILITY_VOLTAGE_L3,
    PROP_TEMPERATURE: CAPABILITY_TEMPERATURE,
    PROP_CURRENT_LIMIT: CAPABILITY_CURRENT_LIMIT,
}

CAPABILITIES = tuple(CAPABILITY_MAP.values())
