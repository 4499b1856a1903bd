from typing import Any


def coerce_int(value: Any, param_name: str) -> int:
    """Coerce a loosely-typed value from an MCP client to int.

    - int -> int
    - float -> if integral (e.g., 1.0) return int(value); else raise ValueError
    - str -> if purely integer-like (e.g., "3" or "-2") return int(value); else raise ValueError
    - other (including None and bool) -> raise ValueError

    Error messages are explicit about expected type and received value.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value

    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValueError(
            f"Invalid type for parameter '{param_name}': expected integer, got non-integer number {value!r}."
        )

    if isinstance(value, str):
        stripped = value.strip()
        digits = stripped[1:] if stripped.startswith(("+", "-")) else stripped
        if digits.isdigit():
            return int(stripped)
        raise ValueError(
            f"Invalid type for parameter '{param_name}': expected integer, got string {value!r}."
        )

    raise ValueError(
        f"Invalid type for parameter '{param_name}': expected integer, got {type(value).__name__} {value!r}."
    )
