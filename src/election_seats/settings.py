import os
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from election_seats.errors import InvalidInputError

load_dotenv()

SEAT_METHOD = os.getenv("SEAT_METHOD", "sainte-lague")
TOTAL_SEATS = int(os.getenv("TOTAL_SEATS", "598"))
INDEPENDENT_SEATS = int(os.getenv("INDEPENDENT_SEATS", "0"))
TIE_BREAK = os.getenv("TIE_BREAK", "party_id")
PARLIAMENT_CONFIG = os.getenv("PARLIAMENT_CONFIG", "config/parliament.yaml")

PRESET_KEYS = ("method", "total_seats", "independent_seats", "tie_break")


def default_preset() -> Dict[str, Any]:
    return {
        "method": SEAT_METHOD,
        "total_seats": TOTAL_SEATS,
        "independent_seats": INDEPENDENT_SEATS,
        "tie_break": TIE_BREAK,
    }


def load_parliament_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load a parliament preset from YAML.

    Keys missing from the document fall back to the environment defaults.
    Unknown keys are ignored.

    Args:
        path: YAML file to read (defaults to PARLIAMENT_CONFIG)

    Returns:
        Dictionary with method, total_seats, independent_seats and tie_break
    """
    path = path or PARLIAMENT_CONFIG
    with open(path) as f:
        document = yaml.safe_load(f) or {}

    if not isinstance(document, dict):
        raise InvalidInputError(f"Parliament config {path} must be a mapping")

    preset = default_preset()
    preset.update({k: document[k] for k in PRESET_KEYS if k in document})
    for key in ("total_seats", "independent_seats"):
        try:
            preset[key] = int(preset[key])
        except (TypeError, ValueError):
            raise InvalidInputError(f"{key} in {path} must be an integer, got {preset[key]!r}")
    return preset
