"""
Helper Utilities Module.

Small, generic functions shared by the intake collaborators.
"""

from pathlib import Path
from typing import Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.

    Example:
        >>> ensure_directory("outputs")
        PosixPath('outputs')
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Extract the lowercase file extension, including the dot.

    Example:
        >>> get_file_extension("invoice.PDF")
        ".pdf"
        >>> get_file_extension("noextension")
        ""
    """
    return Path(filepath).suffix.lower()


def money_to_float(value: str) -> float:
    """
    Numeric value of a matched currency string.

    Everything except digits and dots is dropped before conversion;
    anything that still does not parse counts as zero.

    Example:
        >>> money_to_float("$1,234.56")
        1234.56
        >>> money_to_float("n/a")
        0.0
    """
    cleaned = ''.join(ch for ch in str(value or '') if ch.isdigit() or ch == '.')
    try:
        return float(cleaned)
    except ValueError:
        return 0.0
