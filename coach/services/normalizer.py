"""
Coerces the loosely typed fields of a generated program into storage-valid
ranges. Normalization never rejects anything: values that cannot be repaired
are left for the program validator to report.
"""
import math

from coach.config.program import ProgramConfig


def _as_number(value, allow_infinite: bool = False) -> float | None:
    """
    Returns the number held by an int, float or numeric string, else None.
    NaN is never a number; infinities only count when allow_infinite is set.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or (math.isinf(number) and not allow_infinite):
        return None
    return number


def _floor_clamp(value, minimum: int, maximum: int | None = None) -> int | None:
    number = _as_number(value, allow_infinite=True)
    if number is None:
        return None
    # -inf clamps to the minimum, +inf only where there is a maximum
    if math.isinf(number):
        return minimum if number < 0 else maximum
    result = max(minimum, math.floor(number))
    if maximum is not None:
        result = min(maximum, result)
    return result


def _normalize_exercise(exercise, position: int, config: ProgramConfig):
    if not isinstance(exercise, dict):
        # Bare id, as a number or numeric string
        exercise_id = _as_number(exercise)
        return {
            "exercise_id": math.floor(exercise_id) if exercise_id is not None else exercise,
            "reps": config.default_reps,
            "exercise_order": position,
            "weight_level": None,
        }

    exercise["exercise_order"] = position

    reps = _as_number(exercise.get("reps"))
    if reps is None or reps < 1:
        exercise["reps"] = max(1, math.floor(reps or config.default_reps))
    else:
        exercise["reps"] = math.floor(reps)

    exercise_id = _as_number(exercise.get("exercise_id"))
    if exercise_id is not None:
        exercise["exercise_id"] = math.floor(exercise_id)

    return exercise


def _normalize_block(block: dict, config: ProgramConfig) -> None:
    if block.get("sets") is not None:
        sets = _floor_clamp(block["sets"], 1)
        if sets is not None:
            block["sets"] = sets

    rest = block.get("rest_between_exercises")
    rest = _floor_clamp(rest, 0) if rest is not None else None
    block["rest_between_exercises"] = rest if rest is not None else config.default_rest_seconds

    exercises = block.get("exercises")
    if isinstance(exercises, list):
        block["exercises"] = [
            _normalize_exercise(exercise, position, config)
            for position, exercise in enumerate(exercises, start=1)
        ]


def _normalize_workout(workout: dict, index: int, config: ProgramConfig) -> None:
    order = _as_number(workout.get("workout_order"))
    if isinstance(workout.get("workout_order"), str) or order is None or order < 1:
        workout["workout_order"] = index + 1
    else:
        workout["workout_order"] = max(1, math.floor(order))

    if workout.get("estimated_duration_minutes") is not None:
        workout["estimated_duration_minutes"] = _floor_clamp(
            workout["estimated_duration_minutes"], 1
        )

    if workout.get("week_number") is not None:
        week = _floor_clamp(workout["week_number"], 1, config.duration_weeks)
        if week is not None:
            workout["week_number"] = week

    if workout.get("day_of_week") is not None:
        day = _floor_clamp(workout["day_of_week"], 1, 7)
        if day is not None:
            workout["day_of_week"] = day

    blocks = workout.get("blocks")
    if isinstance(blocks, list):
        for block in blocks:
            if isinstance(block, dict):
                _normalize_block(block, config)


def normalize_program_data(data: dict, config: ProgramConfig) -> dict:
    """
    Normalizes a program draft in place and returns it.

    Running it twice gives the same result as running it once.
    """
    if not isinstance(data, dict):
        return data

    program = data.get("program")
    if isinstance(program, dict):
        program["duration_weeks"] = config.duration_weeks

    workouts = data.get("workouts")
    if isinstance(workouts, list):
        for index, workout in enumerate(workouts):
            if isinstance(workout, dict):
                _normalize_workout(workout, index, config)

    return data
