"""Utilities for loading and saving ERD sources and validation results."""

from pathlib import Path
from pydantic import TypeAdapter
from erdfix.ir.results import ValidationResult


def load_erd_text(erd_path: Path) -> str:
    """
    Load Mermaid ERD source from a file.

    Args:
        erd_path: Path to the ERD file

    Returns:
        File content, decoded as UTF-8

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    erd_path = Path(erd_path)
    if not erd_path.exists():
        raise FileNotFoundError(f"ERD file not found: {erd_path}")
    return erd_path.read_text(encoding="utf-8")


def save_erd_text(text: str, erd_path: Path) -> None:
    """
    Save ERD source to a file.

    Note:
        Creates parent directories if they don't exist.
    """
    erd_path = Path(erd_path)
    erd_path.parent.mkdir(parents=True, exist_ok=True)
    erd_path.write_text(text, encoding="utf-8")


def save_result_json(result: ValidationResult, out_path: Path) -> None:
    """
    Save a ValidationResult as camelCase JSON.

    Args:
        result: Validation result to save
        out_path: Path where to save the JSON file
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(result.model_dump_json(indent=2, by_alias=True), encoding="utf-8")


def load_result_json(result_path: Path) -> ValidationResult:
    """
    Load a ValidationResult written by ``save_result_json``.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not a valid result
    """
    result_path = Path(result_path)
    if not result_path.exists():
        raise FileNotFoundError(f"Result file not found: {result_path}")

    content = result_path.read_text(encoding="utf-8").strip()
    if not content:
        raise ValueError(f"Result file is empty or corrupted: {result_path}")

    try:
        return TypeAdapter(ValidationResult).validate_json(content)
    except Exception as e:
        raise ValueError(f"Failed to load validation result from {result_path}: {e}") from e
