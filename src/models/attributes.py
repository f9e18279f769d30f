"""Typed access to block attribute bags.

Block attributes are arbitrary JSON-like values. Rather than coercing values
silently, the helpers in this module return a default when an attribute is
absent and raise AttributeTypeError when it is present with the wrong shape.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from .errors import AttributeTypeError

AttributeValue = Union[str, int, float, bool, None, List[Any], Dict[str, Any]]

_MISSING = object()


def is_attribute_value(value: Any) -> bool:
    """Check that a value belongs to the JSON-like attribute union.

    Lists and mappings are checked recursively; mapping keys must be strings.
    """
    if value is None or isinstance(value, (str, bool, int, float)):
        return True
    if isinstance(value, (list, tuple)):
        return all(is_attribute_value(item) for item in value)
    if isinstance(value, Mapping):
        return all(
            isinstance(key, str) and is_attribute_value(item)
            for key, item in value.items()
        )
    return False


def scalar_key(value: Any) -> Optional[str]:
    """Render a scalar attribute value as a class-map lookup key.

    Returns None for values that cannot act as a key (lists, mappings).

    Examples:
        >>> scalar_key(2)
        '2'
        >>> scalar_key(50.0)
        '50'
        >>> scalar_key(True)
        'true'
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, str):
        return value.strip().rstrip("%")
    return None


def _lookup(attributes: Mapping[str, Any], key: str) -> Any:
    if attributes is None:
        return _MISSING
    return attributes.get(key, _MISSING)


def get_string(attributes: Mapping[str, Any], key: str,
               default: Optional[str] = None) -> Optional[str]:
    """Get a string attribute.

    Raises:
        AttributeTypeError: If the attribute is present but not a string
    """
    value = _lookup(attributes, key)
    if value is _MISSING or value is None:
        return default
    if not isinstance(value, str):
        raise AttributeTypeError(key, "string", value)
    return value


def get_int(attributes: Mapping[str, Any], key: str,
            default: Optional[int] = None) -> Optional[int]:
    """Get an integer attribute. Booleans are rejected.

    Integral floats (e.g. 2.0, as produced by some JSON encoders) are
    accepted and returned as int.
    """
    value = _lookup(attributes, key)
    if value is _MISSING or value is None:
        return default
    if isinstance(value, bool):
        raise AttributeTypeError(key, "integer", value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise AttributeTypeError(key, "integer", value)


def get_number(attributes: Mapping[str, Any], key: str,
               default: Optional[float] = None) -> Optional[Union[int, float]]:
    """Get a numeric attribute (int or float). Booleans are rejected."""
    value = _lookup(attributes, key)
    if value is _MISSING or value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise AttributeTypeError(key, "number", value)
    return value


def get_bool(attributes: Mapping[str, Any], key: str,
             default: bool = False) -> bool:
    """Get a boolean attribute."""
    value = _lookup(attributes, key)
    if value is _MISSING or value is None:
        return default
    if not isinstance(value, bool):
        raise AttributeTypeError(key, "boolean", value)
    return value


def get_list(attributes: Mapping[str, Any], key: str,
             default: Optional[List[Any]] = None) -> List[Any]:
    """Get a list attribute. Returns a new list (or the default)."""
    value = _lookup(attributes, key)
    if value is _MISSING or value is None:
        return list(default) if default is not None else []
    if not isinstance(value, (list, tuple)):
        raise AttributeTypeError(key, "list", value)
    return list(value)


def get_mapping(attributes: Mapping[str, Any], key: str,
                default: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Get a nested mapping attribute. Returns a shallow copy."""
    value = _lookup(attributes, key)
    if value is _MISSING or value is None:
        return dict(default) if default is not None else {}
    if not isinstance(value, Mapping):
        raise AttributeTypeError(key, "mapping", value)
    return dict(value)


def class_name_tokens(attributes: Mapping[str, Any]) -> List[str]:
    """Return the authored `className` tokens in order."""
    class_name = get_string(attributes, "className", "")
    return class_name.split()
