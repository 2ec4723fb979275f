import enum
from datetime import datetime
from typing import List

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column, relationship


Base = declarative_base()


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=func.now(), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=func.now(), onupdate=func.now(), server_default=func.now()
    )


class FitnessLevelEnum(str, enum.Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


class BlockTypeEnum(str, enum.Enum):
    warmup = "warmup"
    main = "main"
    cooldown = "cooldown"
    superset = "superset"
    circuit = "circuit"
    standard = "standard"


class WeightLevelEnum(str, enum.Enum):
    no_weight = "no_weight"
    light = "light"
    medium = "medium"
    heavy = "heavy"


class Exercise(Base, TimestampMixin):
    __tablename__ = "exercises"

    exercise_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    category: Mapped[str | None] = mapped_column(String, nullable=True)
    muscle_groups: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    difficulty_level: Mapped[FitnessLevelEnum | None] = mapped_column(
        Enum(FitnessLevelEnum), nullable=True
    )
    equipment_needed: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    video_url: Mapped[str | None] = mapped_column(String, nullable=True)

    block_exercises: Mapped[List["BlockExercise"]] = relationship(
        "BlockExercise", back_populates="exercise"
    )


class Program(Base, TimestampMixin):
    __tablename__ = "programs"

    program_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    created_by: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration_weeks: Mapped[int] = mapped_column(Integer, nullable=False)
    difficulty_level: Mapped[FitnessLevelEnum | None] = mapped_column(
        Enum(FitnessLevelEnum), nullable=True
    )
    program_type: Mapped[str | None] = mapped_column(String, nullable=True)

    workouts: Mapped[List["ProgramWorkout"]] = relationship(
        "ProgramWorkout",
        back_populates="program",
        cascade="all, delete-orphan",
        order_by="ProgramWorkout.workout_order",
    )


class ProgramWorkout(Base):
    __tablename__ = "program_workouts"

    workout_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    program_id: Mapped[int] = mapped_column(
        ForeignKey("programs.program_id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    estimated_duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    difficulty_level: Mapped[FitnessLevelEnum | None] = mapped_column(
        Enum(FitnessLevelEnum), nullable=True
    )
    workout_type: Mapped[str | None] = mapped_column(String, nullable=True)
    week_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    day_of_week: Mapped[int | None] = mapped_column(Integer, nullable=True)
    workout_order: Mapped[int] = mapped_column(Integer, nullable=False)

    program: Mapped["Program"] = relationship("Program", back_populates="workouts")
    blocks: Mapped[List["WorkoutBlock"]] = relationship(
        "WorkoutBlock",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="WorkoutBlock.block_order",
    )


class WorkoutBlock(Base):
    __tablename__ = "workout_blocks"

    block_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workout_id: Mapped[int] = mapped_column(
        ForeignKey("program_workouts.workout_id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    block_type: Mapped[BlockTypeEnum] = mapped_column(
        Enum(BlockTypeEnum), default=BlockTypeEnum.standard, nullable=False
    )
    sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rest_between_exercises: Mapped[int] = mapped_column(Integer, nullable=False)
    block_order: Mapped[int] = mapped_column(Integer, nullable=False)

    workout: Mapped["ProgramWorkout"] = relationship("ProgramWorkout", back_populates="blocks")
    exercises: Mapped[List["BlockExercise"]] = relationship(
        "BlockExercise",
        back_populates="block",
        cascade="all, delete-orphan",
        order_by="BlockExercise.exercise_order",
    )


class BlockExercise(Base):
    __tablename__ = "block_exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    block_id: Mapped[int] = mapped_column(
        ForeignKey("workout_blocks.block_id", ondelete="CASCADE"), nullable=False
    )
    exercise_id: Mapped[int] = mapped_column(
        ForeignKey("exercises.exercise_id", ondelete="CASCADE"), nullable=False
    )
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    weight_level: Mapped[WeightLevelEnum | None] = mapped_column(
        Enum(WeightLevelEnum), nullable=True
    )
    exercise_order: Mapped[int] = mapped_column(Integer, nullable=False)

    block: Mapped["WorkoutBlock"] = relationship("WorkoutBlock", back_populates="exercises")
    exercise: Mapped["Exercise"] = relationship("Exercise", back_populates="block_exercises")


class PromptVersion(Base, TimestampMixin):
    """Trainer-edited prompt texts; the newest active row is used for generation."""

    __tablename__ = "prompt_versions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    version_label: Mapped[str | None] = mapped_column(String, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    methodology_content: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Goal key (e.g. "increase_muscle_mass") -> guidance text
    goal_prompts: Mapped[dict[str, str] | None] = mapped_column(JSON, nullable=True)
    updated_by: Mapped[str | None] = mapped_column(String, nullable=True)
