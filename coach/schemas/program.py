from typing import List, Optional

from pydantic import BaseModel, Field

from database.models import BlockTypeEnum, FitnessLevelEnum, WeightLevelEnum


class ProgramHeader(BaseModel):
    name: str
    description: Optional[str] = None
    duration_weeks: int = Field(..., ge=1)
    difficulty_level: Optional[FitnessLevelEnum] = None
    program_type: Optional[str] = None


class ProgramBlockExercise(BaseModel):
    exercise_id: int
    reps: int = Field(..., ge=1)
    exercise_order: int = Field(..., ge=1)
    weight_level: Optional[WeightLevelEnum] = None


class ProgramBlock(BaseModel):
    name: str
    block_type: Optional[BlockTypeEnum] = None
    sets: Optional[int] = Field(None, ge=1)
    rest_between_exercises: int = Field(60, ge=0)
    exercises: List[ProgramBlockExercise] = Field(..., min_length=1)


class ProgramWorkoutPlan(BaseModel):
    name: str
    description: Optional[str] = None
    estimated_duration_minutes: Optional[int] = Field(None, ge=1)
    difficulty_level: Optional[FitnessLevelEnum] = None
    workout_type: Optional[str] = None
    week_number: Optional[int] = Field(None, ge=1)
    day_of_week: Optional[int] = Field(None, ge=1, le=7)
    workout_order: int = Field(..., ge=1)
    blocks: List[ProgramBlock] = Field(..., min_length=1)


class GeneratedProgram(BaseModel):
    """A validated program, ready to be written to storage."""

    program: ProgramHeader
    workouts: List[ProgramWorkoutPlan]
