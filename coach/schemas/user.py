from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from database.models import FitnessLevelEnum


class UserPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    available_equipment: Optional[List[str]] = None
    workout_days_per_week: Optional[int] = Field(None, ge=1, le=7)
    preferred_duration_minutes: Optional[int] = Field(None, ge=15, le=180)


class UserProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    fitness_level: FitnessLevelEnum
    goals: List[str] = Field(..., min_length=1)
    gender: Optional[str] = None
    height: Optional[float] = Field(None, gt=0)
    weight: Optional[float] = Field(None, gt=0)
    weight_goal: Optional[float] = Field(None, gt=0)
    preferences: Optional[UserPreferences] = None


class ProgramRequirements(BaseModel):
    model_config = ConfigDict(frozen=True)

    focus: Optional[str] = None
