"""Centralized constants for mapseq."""

# Description file written by the Mapillary tools next to the images
DESCRIPTION_FILENAME = "mapillary_image_description.json"

# Record keys
SEQUENCE_UUID_KEY = "MAPSequenceUUID"
LONGITUDE_KEY = "MAPLongitude"
LATITUDE_KEY = "MAPLatitude"
CAPTURE_TIME_KEY = "MAPCaptureTime"
ERROR_KEY = "error"

# Capture time, e.g. 2023_05_01_12_30_45_123 (milliseconds)
CAPTURE_TIME_FORMAT = "%Y_%m_%d_%H_%M_%S_%f"
CAPTURE_TIME_PATTERN = r"[0-9]{4}_[0-9]{2}_[0-9]{2}_[0-9]{2}_[0-9]{2}_[0-9]{2}_[0-9]{3}"

# Defaults
DEFAULT_TIMEZONE = "UTC"
DEFAULT_CUTOFF_TIME = 10
DEFAULT_DUPLICATE_DISTANCE = 2.0
DEFAULT_MAX_SEQUENCE_LENGTH = 200

# JSON output
JSON_INDENT = 2
