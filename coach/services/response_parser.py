"""
Turns raw completion text into a week object of the form ``{"workouts": [...]}``.

The model is asked for ``{"workouts": [...]}`` but sometimes adds an unsolicited
``program`` summary next to it. Both shapes are projected onto the canonical
one before the per-week workout count is checked.
"""
import enum
import json
import logging
import re

from coach.errors import MalformedResponseError, StructureError

logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```json\s*(.*?)\s*```", re.DOTALL)
_BARE_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class ResponseShape(str, enum.Enum):
    week = "week"
    full_program = "full_program"
    unknown = "unknown"


def extract_json_text(text: str) -> str:
    """
    Finds the JSON object in the text. Strategies, first match wins:
    the whole text, a ```json fenced block, the outermost {...} substring.
    """
    stripped = text.strip()
    if stripped.startswith("{"):
        return stripped

    fenced = _FENCED_JSON.search(stripped)
    if fenced:
        return fenced.group(1)

    bare = _BARE_OBJECT.search(stripped)
    if bare:
        return bare.group(0)

    raise MalformedResponseError("No JSON object found in LLM response", text)


def detect_shape(data: dict) -> ResponseShape:
    if "workouts" not in data:
        return ResponseShape.unknown
    if "program" in data:
        return ResponseShape.full_program
    return ResponseShape.week


def to_week_shape(data: dict) -> dict:
    """Projects any accepted response shape onto ``{"workouts": [...]}``."""
    shape = detect_shape(data)
    if shape is ResponseShape.full_program:
        logger.info("LLM returned a program summary next to the workouts; keeping workouts only")
        return {"workouts": data["workouts"]}
    return data


def parse_week_response(
    text: str, workouts_per_week: int, week: int | None = None
) -> dict:
    """
    Parses one week of completion text into ``{"workouts": [...]}``.

    Text whose last non-whitespace character is not ``}`` or ``]`` is rejected
    as truncated before any JSON parsing, with one exception: a closing
    ``` fence after the JSON is ignored, so fenced output is not mistaken for
    a cut-off response. Raises StructureError when the workouts array is
    missing or does not hold exactly ``workouts_per_week`` items.
    """
    if not text or not text.strip():
        raise MalformedResponseError("Empty response from LLM", text or "")

    # Catches cut-off JSON even when the completion did not report truncation
    tail = text.rstrip().removesuffix("```").rstrip()
    if not tail or tail[-1] not in "}]":
        raise MalformedResponseError(
            "LLM response appears truncated (does not end with '}' or ']')", text
        )

    json_text = extract_json_text(text)
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON from LLM at position {e.pos}: {json_text[:200]!r}")
        raise MalformedResponseError(
            f"Failed to parse LLM response: {e.msg} at position {e.pos}", json_text, e.pos
        ) from e

    if not isinstance(data, dict):
        raise MalformedResponseError("LLM response is not a JSON object", json_text)

    data = to_week_shape(data)
    workouts = data.get("workouts")
    if not isinstance(workouts, list):
        raise StructureError(workouts_per_week, None, week)
    if len(workouts) != workouts_per_week:
        raise StructureError(workouts_per_week, len(workouts), week)
    return data
