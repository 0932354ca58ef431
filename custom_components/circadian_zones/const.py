"""Constants for the Circadian Zones integration."""

DOMAIN = "circadian_zones"

# Settings keys (integer percentages 0-100)
CONF_SUNSET_TEMP = "sunset_temp"
CONF_NOON_TEMP = "noon_temp"
CONF_MIN_BRIGHTNESS = "min_brightness"
CONF_MAX_BRIGHTNESS = "max_brightness"
CONF_NIGHT_TEMP = "night_temp"
CONF_NIGHT_BRIGHTNESS = "night_brightness"

SETTINGS_KEYS = (
    CONF_SUNSET_TEMP,
    CONF_NOON_TEMP,
    CONF_MIN_BRIGHTNESS,
    CONF_MAX_BRIGHTNESS,
    CONF_NIGHT_TEMP,
    CONF_NIGHT_BRIGHTNESS,
)

# Default values
DEFAULT_SUNSET_TEMP = 100
DEFAULT_NOON_TEMP = 40
DEFAULT_MIN_BRIGHTNESS = 10
DEFAULT_MAX_BRIGHTNESS = 100
DEFAULT_NIGHT_TEMP = 100
DEFAULT_NIGHT_BRIGHTNESS = 10

DEFAULT_SETTINGS = {
    CONF_SUNSET_TEMP: DEFAULT_SUNSET_TEMP,
    CONF_NOON_TEMP: DEFAULT_NOON_TEMP,
    CONF_MIN_BRIGHTNESS: DEFAULT_MIN_BRIGHTNESS,
    CONF_MAX_BRIGHTNESS: DEFAULT_MAX_BRIGHTNESS,
    CONF_NIGHT_TEMP: DEFAULT_NIGHT_TEMP,
    CONF_NIGHT_BRIGHTNESS: DEFAULT_NIGHT_BRIGHTNESS,
}

# Zone modes
MODE_ADAPTIVE = "adaptive"
MODE_NIGHT = "night"
MODE_MANUAL = "manual"

MODES = [MODE_ADAPTIVE, MODE_NIGHT, MODE_MANUAL]
DEFAULT_MODE = MODE_ADAPTIVE

# Persisted capability keys
KEY_MODE = "mode"
KEY_BRIGHTNESS = "dim"
KEY_TEMPERATURE = "light_temperature"

STORAGE_VERSION = 1
PERCENTAGE_STORAGE_KEY = f"{DOMAIN}.percentage"

# Bus event fired whenever brightness or temperature of a zone changes
EVENT_VALUES_CHANGED = f"{DOMAIN}_values_changed"

ATTR_ENTRY_ID = "entry_id"
ATTR_BRIGHTNESS = "brightness"
ATTR_TEMPERATURE = "temperature"
ATTR_PERCENTAGE = "percentage"

SERVICE_SET_PERCENTAGE = "set_percentage"
SERVICE_REFRESH_ZONE = "refresh_zone"
