"""YAML loading utilities for lot configuration and scenarios."""

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from dateutil.parser import isoparse

from .lot import DEFAULT_CAPACITY, DEFAULT_NAME, ParkingLot
from .scenario import Arrival, Departure, Scenario
from .vehicle_type import VehicleType


def _parse_object(dct: Dict[str, Any]) -> Union[Arrival, Departure, Scenario, dict]:
    """Parse dictionary into appropriate object type."""
    # Arrival (vehicle entering the lot)
    if "plate" in dct and "type" in dct:
        return Arrival(
            dct["plate"],
            VehicleType.from_name(dct["type"]),
            dct.get("discountCard"),
            dct.get("atMinutes"),
        )
    # Check-out request
    elif "plate" in dct:
        return Departure(dct["plate"], dct.get("atMinutes"))
    # Top-level scenario object
    elif "arrivals" in dct or "checkOuts" in dct:
        lot = dct.get("lot") or {}
        start_time = dct.get("startTime")
        return Scenario(
            _entries(dct.get("arrivals"), Arrival, "arrivals"),
            _entries(dct.get("checkOuts"), Departure, "checkOuts"),
            lot.get("capacity", DEFAULT_CAPACITY),
            lot.get("name", DEFAULT_NAME),
            parse_time(start_time) if start_time else None,
        )
    else:
        # Return dict as-is for plain sections (like 'lot')
        return dct


def _entries(items: Any, kind: type, section: str) -> list:
    """Check every item in a section parsed into the expected class."""
    if items is None:
        return []
    if not isinstance(items, list):
        raise ValueError(f"'{section}' must be a list")
    for index, item in enumerate(items):
        # An arrival without a type parses as a Departure, and vice versa
        if not isinstance(item, kind):
            raise ValueError(f"{section}[{index}] is not a valid entry: {_describe(item)}")
    return items


def _describe(item: Any) -> str:
    if isinstance(item, (Arrival, Departure)):
        return f"plate {item.plate!r} has the wrong fields for this section"
    return repr(item)


def _to_json(value: Any) -> str:
    # YAML turns unquoted timestamps into datetimes
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Cannot serialize {type(value).__name__}")


def parse_time(text: str) -> datetime:
    """Parse an ISO 8601 timestamp, raising ValueError on bad input."""
    try:
        return isoparse(text)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid timestamp {text!r}: {e}") from e


def _load_raw(filename: Union[str, Path]) -> Dict[str, Any]:
    with open(filename, "r") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {filename}")
    return data


def load_scenario(filename: Union[str, Path]) -> Scenario:
    """Load a scenario (lot settings, arrivals, check-outs) from a YAML file."""
    data = _load_raw(filename)
    data.setdefault("arrivals", [])
    json_data = json.dumps(data, indent=4, default=_to_json)
    return json.loads(json_data, object_hook=_parse_object)


def load_lot(filename: Union[str, Path]) -> ParkingLot:
    """Build an empty lot from the 'lot' section of a YAML file."""
    lot = _load_raw(filename).get("lot") or {}
    return ParkingLot(
        capacity=lot.get("capacity", DEFAULT_CAPACITY),
        name=lot.get("name", DEFAULT_NAME),
    )
