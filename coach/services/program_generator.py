import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Mapping, Protocol

from coach.config.constants import GOAL_PROGRAM_TYPES
from coach.config.program import ProgramConfig
from coach.errors import (
    MalformedResponseError,
    StructureError,
    UpstreamError,
)
from coach.schemas.exercise import ExerciseRef
from coach.schemas.user import ProgramRequirements, UserProfile
from coach.services import prompt_builder
from coach.services.llm_service import Completion, CompletionOptions
from coach.services.normalizer import normalize_program_data
from coach.services.program_validator import validate_program
from coach.services.prompt_store import PromptOverrides
from coach.services.response_parser import parse_week_response

logger = logging.getLogger(__name__)

# Errors after which the whole program is generated again from week 1
RETRYABLE_ERRORS = (UpstreamError, MalformedResponseError, StructureError)


class CompletionClient(Protocol):
    async def complete(
        self, prompt: str, options: CompletionOptions | None = None
    ) -> Completion: ...


class ExerciseSource(Protocol):
    async def list_exercises(self) -> list[ExerciseRef]: ...


class PromptSource(Protocol):
    async def load_overrides(self) -> PromptOverrides: ...


@dataclass
class GenerationResult:
    program: dict | None
    attempts: int
    last_error: str | None = None

    @property
    def success(self) -> bool:
        return self.program is not None


class ProgramGenerator:
    """
    Generates a multi-week program one week per LLM call.

    Each attempt fetches the catalog, generates every week in order,
    normalizes as it goes and validates the assembled program. Any failure
    discards the draft and starts over from week 1, with the failure message
    added to every prompt of the next attempt.
    """

    def __init__(
        self,
        llm: CompletionClient,
        catalog: ExerciseSource,
        config: ProgramConfig,
        completion_options: CompletionOptions | None = None,
        methodology: str | None = None,
        custom_goal_prompts: Mapping[str, str] | None = None,
        prompt_source: PromptSource | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.llm = llm
        self.catalog = catalog
        self.config = config
        self.completion_options = completion_options or CompletionOptions()
        self.methodology = methodology
        self.custom_goal_prompts = custom_goal_prompts
        self.prompt_source = prompt_source
        self.sleep = sleep

    async def generate(
        self,
        profile: UserProfile,
        requirements: ProgramRequirements | None = None,
    ) -> GenerationResult:
        """
        Returns a result holding the validated program, or holding only the
        last validation error once all attempts are used up. Catalog errors
        and errors raised on the final attempt propagate.
        """
        last_error: str | None = None
        max_attempts = self.config.max_attempts

        for attempt in range(1, max_attempts + 1):
            logger.info(f"Program generation attempt {attempt}/{max_attempts}")
            try:
                draft, exercise_ids = await self._generate_draft(
                    profile, requirements, last_error
                )
            except RETRYABLE_ERRORS as e:
                last_error = str(e)
                if attempt == max_attempts:
                    logger.error(
                        f"Program generation failed after {max_attempts} attempts: {last_error}"
                    )
                    raise
                logger.error(f"Program generation attempt {attempt} threw error: {last_error}")
                await self._backoff(attempt)
                continue

            validation = validate_program(draft, exercise_ids, self.config)
            if validation.valid:
                logger.info(
                    f"Program generated on attempt {attempt}: "
                    f"{len(draft['workouts'])} workouts over {self.config.duration_weeks} weeks"
                )
                return GenerationResult(program=validation.data, attempts=attempt)

            last_error = validation.error or "Invalid program structure"
            if attempt == max_attempts:
                logger.warning(
                    f"Program generation failed after {max_attempts} attempts. "
                    f"Last error: {last_error}"
                )
                break

            logger.warning(f"Program generation attempt {attempt} failed validation: {last_error}")
            await self._backoff(attempt)

        return GenerationResult(program=None, attempts=max_attempts, last_error=last_error)

    async def _backoff(self, attempt: int) -> None:
        delay = attempt * self.config.retry_backoff_seconds
        logger.info(f"Retrying program generation in {delay:.1f}s")
        await self.sleep(delay)

    async def _generate_draft(
        self,
        profile: UserProfile,
        requirements: ProgramRequirements | None,
        previous_error: str | None,
    ) -> tuple[dict, set[int]]:
        exercises = await self.catalog.list_exercises()
        exercise_ids = {ex.exercise_id for ex in exercises}
        methodology, goal_prompts = await self._load_prompt_texts()
        static_rules = prompt_builder.build_static_rules(
            profile.goals, methodology, goal_prompts
        )

        draft = {
            "program": self._build_program_header(profile, requirements),
            "workouts": [],
        }
        used_exercise_ids: list[int] = []

        for week in range(1, self.config.duration_weeks + 1):
            prompt = prompt_builder.assemble_week_prompt(
                week=week,
                profile=profile,
                exercises=exercises,
                previous_weeks=prompt_builder.summarize_previous_weeks(
                    used_exercise_ids, self.config.previous_exercises_sample
                ),
                static_rules=static_rules,
                config=self.config,
                requirements=requirements,
                previous_error=previous_error,
            )
            week_workouts = await self._generate_week(week, prompt)

            draft["workouts"].extend(week_workouts)
            normalize_program_data(draft, self.config)
            used_exercise_ids.extend(_collect_exercise_ids(week_workouts))

        return draft, exercise_ids

    async def _load_prompt_texts(self) -> tuple[str | None, dict[str, str]]:
        """Constructor texts, overridden by the prompt source when it has any."""
        methodology = self.methodology
        goal_prompts = dict(self.custom_goal_prompts or {})
        if self.prompt_source is not None:
            overrides = await self.prompt_source.load_overrides()
            methodology = overrides.methodology or methodology
            goal_prompts.update(overrides.goal_prompts)
        return methodology, goal_prompts

    async def _generate_week(self, week: int, prompt: str) -> list:
        logger.info(f"Requesting week {week}/{self.config.duration_weeks} ({len(prompt)} chars)")
        completion = await self.llm.complete(prompt, self.completion_options)
        if completion.truncated:
            raise MalformedResponseError(
                f"Week {week}: LLM response was truncated at the output token limit",
                completion.text,
            )

        week_data = parse_week_response(
            completion.text, self.config.workouts_per_week, week=week
        )
        logger.info(f"Week {week}: received {len(week_data['workouts'])} workouts")
        return week_data["workouts"]

    def _build_program_header(
        self, profile: UserProfile, requirements: ProgramRequirements | None
    ) -> dict:
        goal = prompt_builder.map_goals_to_program_goal(profile.goals)
        label = prompt_builder.get_primary_goal_label(profile.goals)
        level = profile.fitness_level.value
        description = (
            f"{self.config.duration_weeks}-week {label.lower()} program for "
            f"{level} level, {self.config.workouts_per_week} workouts per week."
        )
        if requirements and requirements.focus:
            description += f" Focus: {requirements.focus}."
        return {
            "name": f"{label} - {level.capitalize()}",
            "description": description,
            "duration_weeks": self.config.duration_weeks,
            "difficulty_level": level,
            "program_type": GOAL_PROGRAM_TYPES.get(goal),
        }


def _collect_exercise_ids(workouts: list) -> list[int]:
    ids = []
    for workout in workouts:
        if not isinstance(workout, dict):
            continue
        for block in workout.get("blocks") or []:
            if not isinstance(block, dict) or not isinstance(block.get("exercises"), list):
                continue
            for exercise in block["exercises"]:
                exercise_id = exercise.get("exercise_id") if isinstance(exercise, dict) else None
                if isinstance(exercise_id, int) and not isinstance(exercise_id, bool):
                    ids.append(exercise_id)
    return ids
