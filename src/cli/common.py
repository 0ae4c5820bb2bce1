"""Shared helpers for CLI commands."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Iterable

import typer
import yaml
from pydantic import ValidationError

from cards.presentation import get_presentation_tables
from schemas.internal.presentation import PresentationTables
from schemas.requests import AugmentOptions
from services.io import load_raw_input

STDIN_SOURCE = "-"


def read_source(source: str) -> str:
    """Read card JSON text from a file path, or stdin when ``source`` is ``-``."""
    if source == STDIN_SOURCE:
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise typer.BadParameter(f"Input file not found: {path}")
    return path.read_text(encoding="utf-8")


def load_source(source: str) -> Any:
    return load_raw_input(read_source(source))


def resolve_options(
    options: str | None,
    options_file: Path | None,
    set_values: Iterable[str] | None,
) -> AugmentOptions:
    """Merge options file < ``--options`` JSON < ``--set`` pairs into AugmentOptions."""
    merged: dict[str, Any] = {}
    if options_file is not None:
        merged.update(_options_from_file(options_file))
    if options:
        merged.update(_options_from_json(options, origin="--options"))
    for key, value in _iter_set_pairs(set_values or ()):
        merged[key] = value

    return build_options(merged)


def build_options(payload: dict[str, Any]) -> AugmentOptions:
    try:
        return AugmentOptions.model_validate(payload)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def load_tables(path: str | None = None) -> PresentationTables:
    """Resolve presentation tables, turning a missing or malformed file into a usage error."""
    try:
        return get_presentation_tables(path)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as exc:
        raise typer.BadParameter(str(exc)) from exc


def parse_value(value: str) -> Any:
    """Decode a ``--set`` value as JSON (numbers, booleans, null), else keep the string."""
    if not value:
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def emit_json(data: Any) -> None:
    typer.echo(_dumps(data))


def write_json(data: Any, output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(_dumps(data), encoding="utf-8")


def _dumps(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


def _options_from_json(text: str, *, origin: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"{origin}: invalid JSON ({exc})") from exc
    return _normalize_keys(data, origin=origin)


def _options_from_file(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise typer.BadParameter(f"Options file not found: {path}")
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() not in {".yaml", ".yml"}:
        return _options_from_json(text, origin=str(path))
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise typer.BadParameter(f"{path}: invalid YAML ({exc})") from exc
    return _normalize_keys(data or {}, origin=str(path))


def _iter_set_pairs(items: Iterable[str]) -> Iterable[tuple[str, Any]]:
    for item in items:
        key, sep, raw_value = item.partition("=")
        key = _option_key(key)
        if not sep or not key:
            raise typer.BadParameter(f"--set expects key=value, got {item!r}")
        yield key, parse_value(raw_value.strip())


def _normalize_keys(data: Any, *, origin: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise typer.BadParameter(f"{origin}: options must be an object")
    return {_option_key(str(key)): value for key, value in data.items()}


def _option_key(key: str) -> str:
    # Accept CLI-style spellings such as "max-depth".
    return key.strip().replace("-", "_")
