import math
from collections import Counter
from dataclasses import dataclass
from typing import Collection

from coach.config.program import ProgramConfig
from database.models import BlockTypeEnum, FitnessLevelEnum, WeightLevelEnum

VALID_BLOCK_TYPES = {block_type.value for block_type in BlockTypeEnum}
VALID_DIFFICULTY_LEVELS = {level.value for level in FitnessLevelEnum}
VALID_WEIGHT_LEVELS = {level.value for level in WeightLevelEnum}


@dataclass
class ValidationResult:
    valid: bool
    error: str | None = None
    data: dict | None = None


def _is_number(value) -> bool:
    """Finite int or float; bools, NaN and infinities do not count."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def _is_optional_str(value) -> bool:
    return value is None or isinstance(value, str)


def _is_invalid_choice(value, choices: set[str]) -> bool:
    """True for a present value that is not one of the allowed strings."""
    return value is not None and not (isinstance(value, str) and value in choices)


def _is_non_empty_str(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_non_empty_list(value) -> bool:
    return isinstance(value, list) and len(value) > 0


def _week_of(workout) -> int:
    """Week number of a workout; 0 when it is missing or not a finite number."""
    week = workout.get("week_number") if isinstance(workout, dict) else None
    return int(week) if _is_number(week) else 0


def format_week_breakdown(workouts: list) -> str:
    counts = Counter(_week_of(workout) for workout in workouts)
    return ", ".join(f"week {week}: {counts[week]}" for week in sorted(counts))


def _fail(error: str) -> ValidationResult:
    return ValidationResult(valid=False, error=error)


def _validate_exercise(exercise, valid_ids: Collection[int]) -> str | None:
    if not isinstance(exercise, dict):
        return f"Invalid exercise entry: {exercise!r}"

    exercise_id = exercise.get("exercise_id")
    if not _is_number(exercise_id):
        return f"Exercise exercise_id must be a number, got {exercise_id!r}"
    if exercise_id not in valid_ids:
        return f"Exercise ID {exercise_id} does not exist in database"
    if not _is_number(exercise.get("reps")):
        return f"Exercise {exercise_id}: reps must be a number"
    if not _is_number(exercise.get("exercise_order")):
        return f"Exercise {exercise_id}: exercise_order must be a number"

    weight_level = exercise.get("weight_level")
    if _is_invalid_choice(weight_level, VALID_WEIGHT_LEVELS):
        return f"Invalid weight_level: {weight_level}"
    return None


def _validate_block(block, workout_name: str, valid_ids: Collection[int]) -> str | None:
    if not isinstance(block, dict) or not _is_non_empty_str(block.get("name")):
        return f"Block name is required (workout '{workout_name}')"

    name = block["name"]
    block_type = block.get("block_type")
    if _is_invalid_choice(block_type, VALID_BLOCK_TYPES):
        return f"Invalid block_type: {block_type} (block '{name}')"
    if block.get("sets") is not None and not _is_number(block["sets"]):
        return f"Block sets must be a number (block '{name}')"
    if not _is_non_empty_list(block.get("exercises")):
        return f"Each block must have at least one exercise (block '{name}' in workout '{workout_name}')"

    for exercise in block["exercises"]:
        error = _validate_exercise(exercise, valid_ids)
        if error:
            return error
    return None


def _validate_workout(workout, config: ProgramConfig, valid_ids: Collection[int]) -> str | None:
    if not isinstance(workout, dict) or not _is_non_empty_str(workout.get("name")):
        return "Workout name is required"

    name = workout["name"]
    order = workout.get("workout_order")
    if not _is_number(order) or order < 1:
        return f"Workout workout_order must be >= 1 (workout '{name}')"

    difficulty = workout.get("difficulty_level")
    if _is_invalid_choice(difficulty, VALID_DIFFICULTY_LEVELS):
        return f"Invalid workout difficulty_level: {difficulty}"

    for field in ("description", "workout_type"):
        if not _is_optional_str(workout.get(field)):
            return f"Workout {field} must be a string (workout '{name}')"

    day = workout.get("day_of_week")
    if day is not None and (not _is_number(day) or not 1 <= day <= 7):
        return f"day_of_week must be between 1 and 7 (workout '{name}')"

    week = workout.get("week_number")
    if week is not None and (not _is_number(week) or not 1 <= week <= config.duration_weeks):
        return f"week_number must be between 1 and {config.duration_weeks} (workout '{name}')"

    if not _is_non_empty_list(workout.get("blocks")):
        return f"Each workout must have at least one block (workout '{name}')"

    for block in workout["blocks"]:
        error = _validate_block(block, name, valid_ids)
        if error:
            return error
    return None


def validate_program(
    data, valid_exercise_ids: Collection[int], config: ProgramConfig
) -> ValidationResult:
    """
    Checks a normalized program against the full structure and the live
    exercise catalog. Stops at the first violation; on success the same
    object is returned as ``data``.
    """
    if not isinstance(data, dict):
        return _fail("Invalid response format")

    program = data.get("program")
    workouts = data.get("workouts")
    if not isinstance(program, dict) or not isinstance(workouts, list):
        return _fail("Missing program or workouts array")

    if not _is_non_empty_str(program.get("name")):
        return _fail("Program name is required")
    if program.get("duration_weeks") != config.duration_weeks:
        return _fail(
            f"Program duration_weeks must be {config.duration_weeks}, "
            f"got {program.get('duration_weeks')}"
        )
    difficulty = program.get("difficulty_level")
    if _is_invalid_choice(difficulty, VALID_DIFFICULTY_LEVELS):
        return _fail(f"Invalid difficulty_level: {difficulty}")
    for field in ("description", "program_type"):
        if not _is_optional_str(program.get(field)):
            return _fail(f"Program {field} must be a string, got {program[field]!r}")

    if len(workouts) != config.total_workouts:
        return _fail(
            f"Program must have exactly {config.total_workouts} workouts "
            f"({config.duration_weeks} weeks x {config.workouts_per_week}), got {len(workouts)}. "
            f"Workouts per week: {format_week_breakdown(workouts)}"
        )

    counts = Counter(_week_of(workout) for workout in workouts)
    for week in range(1, config.duration_weeks + 1):
        if counts[week] != config.workouts_per_week:
            return _fail(
                f"Week {week} must have exactly {config.workouts_per_week} workouts, "
                f"got {counts[week]}. Workouts per week: {format_week_breakdown(workouts)}"
            )

    valid_ids = valid_exercise_ids if isinstance(valid_exercise_ids, (set, frozenset)) else set(valid_exercise_ids)
    for workout in workouts:
        error = _validate_workout(workout, config, valid_ids)
        if error:
            return _fail(error)

    return ValidationResult(valid=True, data=data)
