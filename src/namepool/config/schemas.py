"""
Configuration schema definitions for validating name pool configurations.
"""

from typing import Dict, List, Any


# Common configuration schema
COMMON_SCHEMA = {
    "data": {
        "path": str,
        "url": (str, type(None)),
    },
    "random": {
        "seed": (int, type(None)),
    },
    "pools": {
        "region_capacity": int,
        "recency_window": int,
        "weight_exponent": (int, float),
    },
    "parsing": {
        "name_fields": List[int],
        "score_fields": List[int],
    },
    "names": {
        "synthetic_prefix": str,
    },
}

# Optional overrides for the region table
REGIONS_SCHEMA = {
    "region_names": List[str],
}


def validate_schema(data: Dict[str, Any], schema: Dict[str, Any], path: str = "") -> List[str]:
    """
    Validate data against a schema and return list of validation errors.

    Args:
        data: Data to validate
        schema: Schema to validate against
        path: Current path in the data structure (for error messages)

    Returns:
        List of validation error messages
    """
    errors = []

    for key, expected_type in schema.items():
        current_path = f"{path}.{key}" if path else key
        if key not in data:
            errors.append(f"Missing required field: {current_path}")
            continue

        value = data[key]

        # Handle nested dictionaries
        if isinstance(expected_type, dict):
            if not isinstance(value, dict):
                errors.append(f"Expected dict at {current_path}, got {type(value).__name__}")
            else:
                errors.extend(validate_schema(value, expected_type, current_path))

        # bool is an int subclass; never accept it for numeric fields
        elif expected_type in (str, int, float, bool):
            if not isinstance(value, expected_type) or (expected_type is not bool and isinstance(value, bool)):
                errors.append(f"Expected {expected_type.__name__} at {current_path}, got {type(value).__name__}")

        # Handle tuple types (for nullable fields)
        elif isinstance(expected_type, tuple):
            if not isinstance(value, expected_type) or isinstance(value, bool):
                type_names = [t.__name__ for t in expected_type]
                errors.append(f"Expected one of {type_names} at {current_path}, got {type(value).__name__}")

        # Handle list type checking
        elif expected_type in (List[str], List[int]):
            item_type = expected_type.__args__[0]
            if not isinstance(value, list):
                errors.append(f"Expected list at {current_path}, got {type(value).__name__}")
            elif not all(isinstance(item, item_type) and not isinstance(item, bool) for item in value):
                errors.append(f"Expected list of {item_type.__name__} at {current_path}")

    return errors
