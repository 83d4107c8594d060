"""Bundled example schemas offered by the UI's schema picker."""
from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, List, Tuple

PERSON_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Person",
    "type": "object",
    "required": ["firstName", "lastName", "address"],
    "properties": {
        "firstName": {"type": "string", "description": "Given name of the person", "minLength": 1},
        "lastName": {"type": "string", "description": "Family name of the person", "minLength": 1},
        "email": {"type": "string", "format": "email", "description": "Primary contact email address"},
        "phone": {
            "type": "string",
            "pattern": "^\\+?[0-9\\-\\s]{7,15}$",
            "description": "Phone number with optional country code",
        },
        "account": {
            "type": "object",
            "description": "User account settings and preferences",
            "properties": {
                "username": {"type": "string", "description": "Unique username for login", "minLength": 3, "maxLength": 16},
                "password": {"type": "string", "description": "Secure password for account access", "minLength": 8},
                "preferences": {
                    "type": "object",
                    "description": "User interface and notification preferences",
                    "properties": {
                        "notifications": {"type": "boolean", "description": "Enable push notifications"},
                        "theme": {
                            "type": "string",
                            "description": "Visual theme preference",
                            "enum": ["light", "dark", "system"],
                        },
                        "shortcuts": {
                            "type": "array",
                            "description": "Custom keyboard shortcuts",
                            "items": {
                                "type": "object",
                                "required": ["name", "keys"],
                                "properties": {
                                    "name": {"type": "string", "description": "Shortcut action name"},
                                    "keys": {
                                        "type": "string",
                                        "description": "Keyboard combination",
                                        "pattern": "^[A-Z]+\\+[A-Z]+$",
                                    },
                                },
                            },
                        },
                    },
                },
            },
        },
        "address": {
            "type": "object",
            "description": "Primary residential address",
            "required": ["street", "city"],
            "properties": {
                "street": {"type": "string", "description": "Street name and number", "minLength": 1},
                "city": {"type": "string", "description": "City name", "minLength": 1},
                "state": {"type": "string", "description": "State or province"},
                "zip": {"type": "string", "description": "Postal code", "pattern": "^[0-9]{5}(?:-[0-9]{4})?$"},
            },
        },
        "secondary_residence": {
            "type": "object",
            "description": "Optional secondary residence; if present, street and city are required",
            "required": ["street", "city"],
            "properties": {
                "street": {"type": "string", "description": "Street name and number"},
                "city": {"type": "string", "description": "City name"},
                "coordinates": {
                    "type": "object",
                    "description": "Geographic coordinates of the residence",
                    "properties": {
                        "lat": {"type": "number", "description": "Latitude coordinate", "minimum": -90, "maximum": 90},
                        "lng": {"type": "number", "description": "Longitude coordinate", "minimum": -180, "maximum": 180},
                    },
                },
            },
        },
        "documents": {
            "type": "array",
            "description": "Collection of uploaded documents",
            "items": {
                "type": "object",
                "required": ["fileName", "mimeType"],
                "properties": {
                    "fileName": {"type": "string", "description": "Original filename of the document"},
                    "mimeType": {
                        "type": "string",
                        "description": "MIME type of the document",
                        "pattern": "^[-\\w.]+/[-\\w.]+$",
                    },
                    "sizeKb": {"type": "integer", "description": "File size in kilobytes", "minimum": 1, "maximum": 10240},
                },
            },
        },
        "age": {"type": "integer", "description": "Age in years", "minimum": 0, "maximum": 120},
        "tags": {
            "type": "array",
            "description": "User-defined tags for categorization",
            "items": {"type": "string", "maxLength": 20},
        },
    },
}

GPS_LOCATION_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "GPSLocationDevice",
    "type": "object",
    "required": ["deviceId", "location", "timestamp"],
    "properties": {
        "deviceId": {"type": "string", "description": "Unique identifier for the GPS device", "minLength": 1},
        "deviceInfo": {
            "type": "object",
            "description": "Device hardware and software information",
            "required": ["model", "firmwareVersion"],
            "properties": {
                "model": {"type": "string", "description": "Device model name", "minLength": 1},
                "manufacturer": {"type": "string", "description": "Device manufacturer", "minLength": 1},
                "firmwareVersion": {
                    "type": "string",
                    "description": "Current firmware version",
                    "pattern": "^\\d+\\.\\d+\\.\\d+$",
                },
                "batteryLevel": {"type": "number", "description": "Battery level percentage", "minimum": 0, "maximum": 100},
                "lastMaintenance": {"type": "string", "description": "Last maintenance date", "format": "date"},
            },
        },
        "location": {
            "type": "object",
            "description": "Current GPS location data",
            "required": ["latitude", "longitude", "accuracy"],
            "properties": {
                "latitude": {"type": "number", "description": "Latitude coordinate in decimal degrees", "minimum": -90, "maximum": 90},
                "longitude": {"type": "number", "description": "Longitude coordinate in decimal degrees", "minimum": -180, "maximum": 180},
                "accuracy": {"type": "number", "description": "GPS accuracy in meters", "minimum": 0, "maximum": 1000},
                "satellites": {"type": "integer", "description": "Number of GPS satellites in view", "minimum": 0, "maximum": 32},
            },
        },
        "timestamp": {"type": "string", "description": "ISO 8601 timestamp of location reading", "format": "date-time"},
    },
}

_SAMPLES: Dict[str, Tuple[str, Dict[str, Any]]] = {
    "person": ("Person", PERSON_SCHEMA),
    "gps_location": ("GPS Location Device", GPS_LOCATION_SCHEMA),
}


def sample_choices() -> List[Tuple[str, str]]:
    """(label, key) pairs for a dropdown."""
    return [(title, key) for key, (title, _) in _SAMPLES.items()]


def get_sample_schema(key: str) -> Dict[str, Any]:
    if key not in _SAMPLES:
        raise KeyError(f"Unknown sample schema: {key}")
    return deepcopy(_SAMPLES[key][1])
