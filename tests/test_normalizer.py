import copy

import pytest

from coach.config.program import ProgramConfig
from coach.services.normalizer import normalize_program_data


@pytest.fixture
def config():
    return ProgramConfig(duration_weeks=4, workouts_per_week=3)


def _draft(workout=None, block=None, exercises=None):
    block = block if block is not None else {"name": "Block 1"}
    if exercises is not None:
        block["exercises"] = exercises
    workout = workout if workout is not None else {"name": "Day 1", "workout_order": 1}
    workout.setdefault("blocks", [block])
    return {"program": {"name": "P", "duration_weeks": 99}, "workouts": [workout]}


def test_duration_is_forced_from_config(config):
    data = normalize_program_data(_draft(), config)

    assert data["program"]["duration_weeks"] == 4


def test_normalizes_in_place_and_returns_same_object(config):
    draft = _draft()

    assert normalize_program_data(draft, config) is draft


@pytest.mark.parametrize(
    "value, expected",
    [(None, 2), ("3", 2), (0, 2), (-5, 2), (7.9, 7), (True, 2)],
)
def test_workout_order(config, value, expected):
    first = {"name": "Day 1", "workout_order": 1, "blocks": []}
    second = {"name": "Day 2", "workout_order": value, "blocks": []}
    data = {"program": {}, "workouts": [first, second]}

    normalize_program_data(data, config)

    assert second["workout_order"] == expected


def test_workout_numeric_fields_are_clamped(config):
    workout = {
        "name": "Day 1",
        "workout_order": 1,
        "estimated_duration_minutes": 0.4,
        "week_number": 9.7,
        "day_of_week": 0,
    }
    normalize_program_data(_draft(workout=workout), config)

    assert workout["estimated_duration_minutes"] == 1
    assert workout["week_number"] == 4
    assert workout["day_of_week"] == 1


def test_absent_optional_workout_fields_stay_absent(config):
    workout = {"name": "Day 1", "workout_order": 1}
    normalize_program_data(_draft(workout=workout), config)

    assert "week_number" not in workout
    assert "day_of_week" not in workout
    assert "estimated_duration_minutes" not in workout


def test_day_of_week_upper_clamp(config):
    workout = {"name": "Day 1", "workout_order": 1, "day_of_week": 12}
    normalize_program_data(_draft(workout=workout), config)

    assert workout["day_of_week"] == 7


def test_block_sets_and_rest(config):
    block = {"name": "Block 1", "sets": 0, "rest_between_exercises": -30.5, "exercises": []}
    normalize_program_data(_draft(block=block), config)

    assert block["sets"] == 1
    assert block["rest_between_exercises"] == 0


def test_missing_rest_defaults_to_config(config):
    block = {"name": "Block 1", "exercises": []}
    normalize_program_data(_draft(block=block), ProgramConfig(default_rest_seconds=45))

    assert block["rest_between_exercises"] == 45
    assert "sets" not in block


def test_bare_integer_exercise_becomes_object(config):
    block = {"name": "Block 1"}
    normalize_program_data(_draft(block=block, exercises=[{"exercise_id": 7, "reps": 5}, 42]), config)

    assert block["exercises"][1] == {
        "exercise_id": 42,
        "reps": 10,
        "exercise_order": 2,
        "weight_level": None,
    }


def test_numeric_string_exercise_becomes_object(config):
    block = {"name": "Block 1"}
    normalize_program_data(_draft(block=block, exercises=["15"]), config)

    assert block["exercises"][0]["exercise_id"] == 15
    assert block["exercises"][0]["exercise_order"] == 1


def test_exercise_order_is_reassigned_by_position(config):
    block = {"name": "Block 1"}
    exercises = [
        {"exercise_id": 1, "reps": 8, "exercise_order": 5},
        {"exercise_id": 2, "reps": 8, "exercise_order": 5},
        {"exercise_id": 3, "reps": 8},
        {"exercise_id": 4, "reps": 8, "exercise_order": -1},
    ]
    normalize_program_data(_draft(block=block, exercises=exercises), config)

    assert [ex["exercise_order"] for ex in block["exercises"]] == [1, 2, 3, 4]


@pytest.mark.parametrize(
    "reps, expected",
    [(None, 10), (0, 10), (-3, 1), (0.5, 1), (12.8, 12), ("8", 8)],
)
def test_exercise_reps(config, reps, expected):
    block = {"name": "Block 1"}
    normalize_program_data(_draft(block=block, exercises=[{"exercise_id": 1, "reps": reps}]), config)

    assert block["exercises"][0]["reps"] == expected


@pytest.mark.parametrize("exercise_id, expected", [("12", 12), (12.0, 12), (3.7, 3)])
def test_exercise_id_is_coerced_to_int(config, exercise_id, expected):
    block = {"name": "Block 1"}
    normalize_program_data(_draft(block=block, exercises=[{"exercise_id": exercise_id, "reps": 8}]), config)

    assert block["exercises"][0]["exercise_id"] == expected
    assert isinstance(block["exercises"][0]["exercise_id"], int)


def test_unrepairable_values_are_left_for_the_validator(config):
    block = {"name": "Block 1", "sets": "many"}
    normalize_program_data(_draft(block=block, exercises=[{"exercise_id": "squat", "reps": 8}, "lunge"]), config)

    assert block["sets"] == "many"
    assert block["exercises"][0]["exercise_id"] == "squat"
    assert block["exercises"][1]["exercise_id"] == "lunge"


def test_malformed_structures_do_not_raise(config):
    assert normalize_program_data({"workouts": "nope"}, config) == {"workouts": "nope"}
    assert normalize_program_data({"program": None, "workouts": [None, {"blocks": "x"}]}, config)
    assert normalize_program_data("not a dict", config) == "not a dict"


def test_normalization_is_idempotent(config):
    draft = {
        "program": {"name": "P", "duration_weeks": "12"},
        "workouts": [
            {
                "name": "Day 1",
                "workout_order": "x",
                "estimated_duration_minutes": "55.5",
                "week_number": 0,
                "day_of_week": 9.2,
                "blocks": [
                    {"name": "A1", "sets": 2.5, "exercises": [3, "4", {"exercise_id": "5", "reps": None}]},
                    {"name": "B1", "rest_between_exercises": "90", "exercises": [{"exercise_id": 6.9, "reps": -2, "exercise_order": 9}]},
                ],
            },
            {"name": "Day 2", "workout_order": 0, "blocks": [{"name": "A1", "exercises": ["bad", None]}]},
        ],
    }

    once = normalize_program_data(copy.deepcopy(draft), config)
    twice = normalize_program_data(copy.deepcopy(once), config)

    assert twice == once


@pytest.mark.parametrize(
    "week_number, expected",
    [(float("inf"), 4), (float("-inf"), 1), ("Infinity", 4), (10**400, 4)],
)
def test_infinite_week_number_is_clamped(config, week_number, expected):
    workout = {"name": "Day 1", "workout_order": 1, "week_number": week_number, "day_of_week": float("inf")}
    normalize_program_data(_draft(workout=workout), config)

    assert workout["week_number"] == expected
    assert workout["day_of_week"] == 7


def test_non_finite_values_without_upper_bound(config):
    workout = {"name": "Day 1", "workout_order": float("inf"), "estimated_duration_minutes": float("inf")}
    block = {"name": "Block 1", "sets": float("nan"), "rest_between_exercises": float("inf")}
    normalize_program_data(_draft(workout=workout, block=block, exercises=[{"exercise_id": 1, "reps": float("inf")}]), config)

    assert workout["workout_order"] == 1
    assert workout["estimated_duration_minutes"] is None
    assert block["rest_between_exercises"] == 60
    assert block["exercises"][0]["reps"] == 10
    assert block["sets"] != block["sets"]  # NaN is left for the validator
