from pydantic import BaseModel, ConfigDict, Field

from coach.config.settings import Settings


class ProgramConfig(BaseModel):
    """Constants that shape one generated program.

    Passed explicitly into the normalizer, validator and generator so tests can
    run a one-week program while production runs the full cycle.
    """

    model_config = ConfigDict(frozen=True)

    duration_weeks: int = Field(12, ge=1)
    workouts_per_week: int = Field(3, ge=1)
    blocks_per_workout: int = Field(6, ge=1)
    max_attempts: int = Field(3, ge=1)
    retry_backoff_seconds: float = Field(1.0, ge=0)
    # Fallbacks for fields the model leaves out. Pending product confirmation.
    default_reps: int = Field(10, ge=1)
    default_rest_seconds: int = Field(60, ge=0)
    previous_exercises_sample: int = Field(10, ge=0)

    @property
    def total_workouts(self) -> int:
        return self.duration_weeks * self.workouts_per_week

    def workout_order_range(self, week: int) -> tuple[int, int]:
        """First and last global workout_order for the given week."""
        start = (week - 1) * self.workouts_per_week + 1
        return start, start + self.workouts_per_week - 1

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProgramConfig":
        return cls(
            duration_weeks=settings.PROGRAM_DURATION_WEEKS,
            workouts_per_week=settings.WORKOUTS_PER_WEEK,
            blocks_per_workout=settings.BLOCKS_PER_WORKOUT,
            max_attempts=settings.MAX_GENERATION_ATTEMPTS,
            retry_backoff_seconds=settings.RETRY_BACKOFF_SECONDS,
            default_reps=settings.DEFAULT_REPS,
            default_rest_seconds=settings.DEFAULT_REST_SECONDS,
            previous_exercises_sample=settings.PREVIOUS_EXERCISES_SAMPLE,
        )
