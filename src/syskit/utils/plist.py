"""Property-list reading helpers."""

from __future__ import annotations

import plistlib
from pathlib import Path
from typing import Any, TypeVar
from xml.parsers.expat import ExpatError

from syskit.utils.errors import PreferenceReadError

T = TypeVar("T")


def loads_plist(data: bytes | str, source: str = "<data>") -> Any:
    """Parse an XML or binary property list held in memory.

    Args:
        data: Raw plist bytes (text is encoded as UTF-8)
        source: Name used in error messages

    Returns:
        The decoded top-level object

    Raises:
        PreferenceReadError: If the data is not a valid property list
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    try:
        return plistlib.loads(data)
    except (plistlib.InvalidFileException, ExpatError, ValueError, TypeError) as e:
        raise PreferenceReadError(source, str(e) or "invalid property list") from e


def read_plist(path: Path | str) -> Any | None:
    """Read a property-list file.

    Args:
        path: File to read

    Returns:
        The decoded top-level object, or None if the file does not exist

    Raises:
        PreferenceReadError: If the file exists but cannot be read or parsed
    """
    path = Path(path).expanduser()
    try:
        with path.open("rb") as f:
            data = f.read()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise PreferenceReadError(str(path), e.strerror or str(e)) from e
    return loads_plist(data, source=str(path))


def read_plist_dict(path: Path | str) -> dict[str, Any] | None:
    """Read a property-list file whose top level must be a dictionary."""
    data = read_plist(path)
    if data is None:
        return None
    if not isinstance(data, dict):
        raise PreferenceReadError(str(path), f"expected a dictionary, got {type(data).__name__}")
    return data


def plist_value(path: Path | str, key: str, expected: type[T], default: T | None = None) -> T | None:
    """Read one key from a dictionary plist, tolerating any failure.

    A missing file, an unreadable file, a missing key and a value of the
    wrong type all produce ``default``.

    Args:
        path: Property-list file
        key: Top-level key
        expected: Required Python type of the value
        default: Value returned when the key cannot be used

    Returns:
        The stored value or ``default``
    """
    try:
        data = read_plist_dict(path)
    except PreferenceReadError:
        return default
    if data is None:
        return default
    value = data.get(key)
    if expected is float and isinstance(value, int) and not isinstance(value, bool):
        value = float(value)
    if not isinstance(value, expected):
        return default
    if expected is int and isinstance(value, bool):
        return default
    return value
