import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from coach.errors import CatalogUnavailableError
from coach.requests import exercise_requests
from coach.schemas.exercise import ExerciseRef


class ExerciseCatalog:
    """Reads the exercises the generator is allowed to reference."""

    def __init__(self, session_pool: async_sessionmaker):
        self.session_pool = session_pool

    async def list_exercises(self) -> list[ExerciseRef]:
        try:
            async with self.session_pool() as session:
                exercises = await exercise_requests.get_all_exercises(session)
        except SQLAlchemyError as e:
            logging.error(f"Failed to fetch exercises: {e}")
            raise CatalogUnavailableError(f"Failed to fetch exercises: {e}") from e

        if not exercises:
            raise CatalogUnavailableError("No exercises available in database")

        return [ExerciseRef.model_validate(ex) for ex in exercises]
