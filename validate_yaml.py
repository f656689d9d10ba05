#!/usr/bin/env python3
"""Validate lot scenario YAML files against the schema."""
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft7Validator

from parking.loader import parse_time


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def validate_lot_data(data: Any, schema: dict) -> list[str]:
    """
    Validate an already parsed scenario document.

    Every schema violation is reported, not just the first one, each
    followed by the path it was found at. 'startTime' is only checked
    once the document matches the schema.
    """
    if not isinstance(data, dict):
        return [f"Expected a mapping at the top level, got {type(data).__name__}"]
    # The loader accepts unquoted YAML timestamps, so the schema sees them as text
    if isinstance(data.get("startTime"), (date, datetime)):
        data = {**data, "startTime": data["startTime"].isoformat()}

    errors = []
    validator = Draft7Validator(schema)
    for error in sorted(validator.iter_errors(data), key=lambda e: list(map(str, e.path))):
        errors.append(f"Schema validation error: {error.message}")
        if error.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in error.path)}")
    if errors:
        return errors

    if data.get("startTime"):
        try:
            parse_time(data["startTime"])
        except ValueError as e:
            errors.append(f"Value error: {e}")
    return errors


def validate_lot_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single lot YAML file. Returns list of errors."""
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return [f"YAML parse error: {e}"]
    except OSError as e:
        return [f"Error: {e}"]
    return validate_lot_data(data, schema)


def main():
    """Validate all lot YAML files in the lots/ directory."""
    schema = load_schema()
    lots_dir = Path(__file__).parent / "lots"

    if not lots_dir.exists():
        print(f"Error: lots directory not found: {lots_dir}")
        return 1

    yaml_files = list(lots_dir.glob("*.yaml")) + list(lots_dir.glob("*.yml"))

    if not yaml_files:
        print(f"Warning: No YAML files found in {lots_dir}")
        return 0

    all_valid = True
    for filepath in sorted(yaml_files):
        errors = validate_lot_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
