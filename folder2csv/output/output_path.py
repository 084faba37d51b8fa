"""
Output location helpers.

The scan never overwrites an existing file: when the target name is taken a
numeric suffix is inserted before the extension until a free name is found.
"""

from pathlib import Path


def default_output_dir() -> Path:
    """
    Return the folder CSV files are written to when none is given.

    Returns:
        Path: The user's Desktop if it exists, otherwise the current
        working directory.
    """
    desktop = Path.home() / "Desktop"
    if desktop.is_dir():
        return desktop
    return Path.cwd()


def unique_output_path(folder: Path, base_name: str = "data", extension: str = ".csv") -> Path:
    """
    Return a path in folder that does not exist yet.

    Tries ``data.csv`` first, then ``data(1).csv``, ``data(2).csv`` and so on.

    Parameters:
        folder (Path): Directory the file will live in.
        base_name (str): File name without extension.
        extension (str): Extension including the leading dot.

    Returns:
        Path: The first candidate that does not exist.
    """
    candidate = folder / f"{base_name}{extension}"
    counter = 1
    while candidate.exists():
        candidate = folder / f"{base_name}({counter}){extension}"
        counter += 1
    return candidate
