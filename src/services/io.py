"""Service-layer helpers for raw card input handling."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from schemas.requests import GenerationEnvelope
from utils.llm_json import extract_json

logger = logging.getLogger(__name__)


def load_raw_input(text: str | bytes | None) -> Any:
    """Decode card JSON, falling back to best-effort extraction from model prose.

    Returns None when nothing decodable is found; the normalizer turns that into
    an empty card.
    """
    if text is None:
        return None
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    stripped = text.strip()
    if not stripped:
        return None

    try:
        return json.loads(stripped)
    except json.JSONDecodeError as exc:
        logger.debug("Strict JSON decode failed (%s); attempting repair", exc)
    except RecursionError:
        logger.warning("Input JSON nested too deeply to decode (%d chars)", len(stripped))
        return None

    try:
        return extract_json(stripped)
    except ValueError:
        logger.warning("No JSON payload recoverable from input (%d chars)", len(stripped))
        return None


def parse_generation_envelope(text: str) -> GenerationEnvelope:
    """Parse the upstream ``{cardJson, cardPage, notes}`` envelope.

    A string ``cardJson`` is decoded again with the same repair fallback.

    Raises:
        ValueError: when no envelope object is found or required fields are missing.
    """
    payload = load_raw_input(text)
    if not isinstance(payload, dict):
        raise ValueError("Generation output is not a JSON object.")

    card_json = payload.get("cardJson")
    if isinstance(card_json, str):
        payload = {**payload, "cardJson": load_raw_input(card_json)}

    try:
        return GenerationEnvelope.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"Invalid generation envelope: {exc}") from exc


__all__ = ["load_raw_input", "parse_generation_envelope"]
