from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from database.models import FitnessLevelEnum


class ExerciseRef(BaseModel):
    """Read-only view of a catalog exercise, as handed to the generator."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    exercise_id: int
    name: str
    category: Optional[str] = None
    muscle_groups: Optional[List[str]] = None
    difficulty_level: Optional[FitnessLevelEnum] = None
    equipment_needed: Optional[List[str]] = None


class ExerciseCreate(BaseModel):
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    muscle_groups: Optional[List[str]] = None
    difficulty_level: Optional[FitnessLevelEnum] = None
    equipment_needed: Optional[List[str]] = None
    video_url: Optional[str] = None
