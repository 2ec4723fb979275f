import math
from typing import Iterable, Mapping

from coach.config.constants import (
    BLOCK_TEMPLATE,
    DEFAULT_GOAL,
    GOAL_LABELS,
    GOAL_PRIORITY,
)
from coach.config.program import ProgramConfig
from coach.schemas.exercise import ExerciseRef
from coach.schemas.user import ProgramRequirements, UserProfile

DEFAULT_METHODOLOGY = """You are a certified strength and conditioning coach designing personalized training programs.

UNIVERSAL PROGRAM RULES:
- Every workout follows the same block structure (see BLOCK STRUCTURE)
- Early weeks build technique and adaptation with lower volume
- Later weeks apply progressive overload: more volume and intensity
- Vary exercises across weeks while keeping the main movement patterns"""

# Always appended, even to a short custom methodology
BLOCK_ORDER_RULE = """
MANDATORY ACTIVATION ORDER (NEVER SWAP):
- Activation 1: mobility and flexibility (joint rotations, dynamic stretches)
- Activation 2: core, stability and isometrics (plank, dead bug, bird dog)
- Never put core/isometric work in Activation 1 or mobility work in Activation 2"""

TECHNICAL_CONSTRAINTS = """
EXERCISE RULES:
- Use ONLY exercise_id values from the provided list (do NOT invent ids)
- weight_level accepts only: no_weight, light, medium, heavy
- Every exercise must have: exercise_id, reps, exercise_order, weight_level

RESPONSE FORMAT:
- Respond ONLY with valid JSON
- No markdown, comments or extra text
- Structure: {"workouts": [...]}"""

DEFAULT_GOAL_PROMPTS = {
    "improve_muscle_power": (
        "PROGRAM: MUSCLE POWER\n"
        "Prioritize explosive intent: low reps (3-5) in Blocks 1-2, full recovery (120-180 s), "
        "contrast heavy compound lifts with ballistic work."
    ),
    "increase_muscle_mass": (
        "PROGRAM: MUSCLE MASS\n"
        "Hypertrophy ranges: 8-12 reps, 3-4 sets, 60-90 s rest; accessories 12-15 reps "
        "targeting the muscles trained in the session."
    ),
    "improve_speed": (
        "PROGRAM: SPEED\n"
        "Emphasize accelerations, ballistics and running technique in Block 1; keep "
        "strength work low-volume and fast."
    ),
    "improve_endurance": (
        "PROGRAM: ENDURANCE\n"
        "Higher reps (12-20), short rest (30-45 s), circuits allowed in Blocks 3-4."
    ),
    "increase_flexibility": (
        "PROGRAM: FLEXIBILITY\n"
        "Extended mobility work, controlled tempo, full range of motion in every pattern."
    ),
    "pre_match": (
        "PROGRAM: PRE-MATCH\n"
        "Low volume, high quality activation; avoid fatigue, favor speed and reactivity."
    ),
    "upper_body_strength": (
        "PROGRAM: UPPER BODY STRENGTH\n"
        "Pushes and pulls dominate Blocks 2-3 (4-6 reps); lower body kept at maintenance volume."
    ),
    "lower_body_strength": (
        "PROGRAM: LOWER BODY STRENGTH\n"
        "Knee- and hip-dominant patterns dominate Blocks 2-3 (4-6 reps); upper body at maintenance volume."
    ),
    "maintenance": (
        "PROGRAM: MAINTENANCE\n"
        "Full body in every session: pair one lower and one upper exercise per main block, "
        "6-8 reps, 3-4 sets, 60-90 s rest."
    ),
}

WEEK_PROMPT = """{static_rules}

# USER PROFILE
- Fitness level: {fitness_level}
- Goals: {goals}
- Gender: {gender}
- Height: {height} cm
- Weight: {weight} kg
- Weight goal: {weight_goal} kg
- Available equipment: {equipment}
- Preferred session length: {duration} minutes
- Program focus: {focus}

# THIS REQUEST: WEEK {week} OF {total_weeks}
- Phase: {phase}
- Create EXACTLY {workouts_per_week} workouts, all with "week_number": {week}
- workout_order values: {order_start} to {order_end} (one per workout, increasing)
- Workout names: "Day {order_start}" to "Day {order_end}"
- day_of_week: 1-7, spread the sessions across the week
- Each workout has EXACTLY {blocks_per_workout} blocks, in this order:
{block_structure}

# PREVIOUS WEEKS
{previous_weeks}
{correction}
# AVAILABLE EXERCISES (id:name|category|muscles|difficulty) - use ONLY these ids
{exercise_catalog}

# OUTPUT
{{"workouts": [{{"name": "Day {order_start}", "description": "...", "estimated_duration_minutes": 60, "difficulty_level": "{fitness_level}", "workout_type": "strength", "week_number": {week}, "day_of_week": 1, "workout_order": {order_start}, "blocks": [{{"name": "Activation 1", "block_type": "warmup", "sets": 2, "rest_between_exercises": 30, "exercises": [{{"exercise_id": 1, "reps": 10, "exercise_order": 1, "weight_level": "no_weight"}}]}}]}}]}}
Return ONLY this JSON object with {workouts_per_week} workouts."""


def get_base_prompt(methodology: str | None = None) -> str:
    methodology = (methodology or "").strip() or DEFAULT_METHODOLOGY
    return f"{methodology}\n{BLOCK_ORDER_RULE}\n{TECHNICAL_CONSTRAINTS}".strip()


def map_goals_to_program_goal(goals: Iterable[str]) -> str:
    """Picks the primary goal: the first of GOAL_PRIORITY the user has."""
    user_goals = set(goals)
    for goal in GOAL_PRIORITY:
        if goal in user_goals:
            return goal
    return DEFAULT_GOAL


def get_goal_prompt(goal: str, custom_goal_prompts: Mapping[str, str] | None = None) -> str:
    custom = (custom_goal_prompts or {}).get(goal)
    if custom and custom.strip():
        return custom.strip()
    return DEFAULT_GOAL_PROMPTS.get(goal, DEFAULT_GOAL_PROMPTS[DEFAULT_GOAL])


def build_static_rules(
    goals: Iterable[str],
    methodology: str | None = None,
    custom_goal_prompts: Mapping[str, str] | None = None,
) -> str:
    """Base methodology plus the guidance of the user's primary goal."""
    goal = map_goals_to_program_goal(goals)
    return f"{get_base_prompt(methodology)}\n\n{get_goal_prompt(goal, custom_goal_prompts)}"


def get_primary_goal_label(goals: Iterable[str]) -> str:
    return GOAL_LABELS[map_goals_to_program_goal(goals)]


def phase_for_week(week: int, total_weeks: int) -> str:
    base_weeks = max(1, math.ceil(total_weeks / 3))
    if week <= base_weeks:
        return "BASE - lower volume, focus on technique and adaptation"
    return "PROGRESSIVE OVERLOAD - increase volume and intensity"


def format_exercise_catalog(exercises: Iterable[ExerciseRef]) -> str:
    lines = []
    for ex in exercises:
        muscles = ",".join(ex.muscle_groups) if ex.muscle_groups else "-"
        difficulty = ex.difficulty_level.value if ex.difficulty_level else "-"
        lines.append(f"{ex.exercise_id}:{ex.name}|{ex.category or '-'}|{muscles}|{difficulty}")
    return "\n".join(lines)


def format_block_structure(block_count: int = len(BLOCK_TEMPLATE)) -> str:
    lines = []
    for position, (name, block_type, focus, categories) in enumerate(
        BLOCK_TEMPLATE[:block_count], start=1
    ):
        lines.append(
            f'  {position}. "{name}" (block_type: {block_type}) - {focus}; '
            f"categories: {', '.join(categories)}"
        )
    return "\n".join(lines)


def summarize_previous_weeks(exercise_ids: Iterable[int], limit: int = 10) -> str:
    """Short hint about exercises already used; repeating them is allowed."""
    unique_ids = list(dict.fromkeys(exercise_ids))
    if not unique_ids:
        return "This is the first week of the program."
    sample = ", ".join(str(exercise_id) for exercise_id in unique_ids[:limit])
    more = f" (and {len(unique_ids) - limit} more)" if len(unique_ids) > limit else ""
    return (
        f"Exercise ids already used in previous weeks: {sample}{more}. "
        "Keep the main patterns for progression and vary accessories."
    )


def assemble_week_prompt(
    week: int,
    profile: UserProfile,
    exercises: list[ExerciseRef],
    previous_weeks: str,
    static_rules: str,
    config: ProgramConfig,
    requirements: ProgramRequirements | None = None,
    previous_error: str | None = None,
) -> str:
    order_start, order_end = config.workout_order_range(week)
    preferences = profile.preferences
    not_specified = "not specified"

    correction = ""
    if previous_error:
        correction = (
            "\n# CORRECTION REQUIRED\n"
            f"The previous attempt was rejected with this error: {previous_error}\n"
            "Fix it in this response.\n"
        )

    return WEEK_PROMPT.format(
        static_rules=static_rules,
        fitness_level=profile.fitness_level.value,
        goals=", ".join(profile.goals),
        gender=profile.gender or not_specified,
        height=profile.height or not_specified,
        weight=profile.weight or not_specified,
        weight_goal=profile.weight_goal or not_specified,
        equipment=(
            ", ".join(preferences.available_equipment)
            if preferences and preferences.available_equipment
            else not_specified
        ),
        duration=(
            preferences.preferred_duration_minutes
            if preferences and preferences.preferred_duration_minutes
            else not_specified
        ),
        focus=(requirements.focus if requirements and requirements.focus else "general"),
        week=week,
        total_weeks=config.duration_weeks,
        phase=phase_for_week(week, config.duration_weeks),
        workouts_per_week=config.workouts_per_week,
        order_start=order_start,
        order_end=order_end,
        blocks_per_workout=config.blocks_per_workout,
        block_structure=format_block_structure(config.blocks_per_workout),
        previous_weeks=previous_weeks,
        correction=correction,
        exercise_catalog=format_exercise_catalog(exercises),
    )
