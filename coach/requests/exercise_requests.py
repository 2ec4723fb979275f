import logging
from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Exercise
from coach.schemas.exercise import ExerciseCreate


async def clear_exercises(session: AsyncSession) -> int:
    """Empty the catalog. Returns the number of removed exercises."""
    result = await session.execute(delete(Exercise))
    await session.commit()
    logging.info(f"Removed {result.rowcount} exercises from the catalog")
    return result.rowcount


async def add_exercises_bulk(
    session: AsyncSession, exercises: Sequence[ExerciseCreate]
) -> list[Exercise]:
    rows = [Exercise(**exercise.model_dump()) for exercise in exercises]
    session.add_all(rows)
    await session.commit()
    logging.info(f"Added {len(rows)} exercises to the catalog")
    return rows


async def get_all_exercises(session: AsyncSession) -> Sequence[Exercise]:
    """The whole catalog, ordered by id."""
    result = await session.execute(select(Exercise).order_by(Exercise.exercise_id))
    return result.scalars().all()
