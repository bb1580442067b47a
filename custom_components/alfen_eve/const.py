"""Constants for the Alfen Eve integration."""
from .alfen.const import (
    CAPABILITY_CURRENT_L1,
    CAPABILITY_CURRENT_L2,
    CAPABILITY_CURRENT_L3,
    CAPABILITY_CURRENT_LIMIT,
    CAPABILITY_ENERGY,
    CAPABILITY_POWER,
    CAPABILITY_TEMPERATURE,
    CAPABILITY_VOLTAGE_L1,
    CAPABILITY_VOLTAGE_L2,
    CAPABILITY_VOLTAGE_L3,
)

DOMAIN = "alfen_eve"
MANUFACTURER = "Alfen"

CONF_SCAN_INTERVAL = "scan_interval"
CONF_VERIFY_SSL = "verify_ssl"

DEFAULT_SCAN_INTERVAL = 30
DEFAULT_USERNAME = "admin"
DEFAULT_VERIFY_SSL = False

MIN_SCAN_INTERVAL = 10
MAX_SCAN_INTERVAL = 3600

# Sensor per capability: name, device class, unit, state class.
# Plain strings so the table loads without Home Assistant; sensor.py turns
# them into SensorEntityDescription objects.
CAPABILITY_SENSORS = {
    CAPABILITY_POWER: ("Power", "power", "W", "measurement"),
    CAPABILITY_ENERGY: ("Energy", "energy", "kWh", "total_increasing"),
    CAPABILITY_CURRENT_L1: ("Current L1", "current", "A", "measurement"),
    CAPABILITY_CURRENT_L2: ("Current L2", "current", "A", "measurement"),
    CAPABILITY_CURRENT_L3: ("Current L3", "current", "A", "measurement"),
    CAPABILITY_CURRENT_LIMIT: ("Current limit", "current", "A", "measurement"),
    CAPABILITY_VOLTAGE_L1: ("Voltage L1", "voltage", "V", "measurement"),
    CAPABILITY_VOLTAGE_L2: ("Voltage L2", "voltage", "V", "measurement"),
    CAPABILITY_VOLTAGE_L3: ("Voltage L3", "voltage", "V", "measurement"),
    CAPABILITY_TEMPERATURE: ("Temperature", "temperature", "°C", "measurement"),
}
