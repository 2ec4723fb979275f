import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from coach.config.program import ProgramConfig
from coach.config.settings import Settings
from coach.requests.program_requests import save_program
from coach.schemas.user import ProgramRequirements, UserProfile
from coach.services.exercise_catalog import ExerciseCatalog
from coach.services.llm_service import CompletionOptions, create_llm_service
from coach.services.program_generator import GenerationResult, ProgramGenerator
from coach.services.prompt_store import PromptStore
from database.models import Program


class ProgramService:
    def __init__(self, generator: ProgramGenerator, session_pool: async_sessionmaker):
        self.generator = generator
        self.session_pool = session_pool

    async def create_program(
        self,
        user_id: str,
        profile: UserProfile,
        requirements: ProgramRequirements | None = None,
    ) -> tuple[GenerationResult, Program | None]:
        """
        Generates a program for the user and stores it.
        Nothing is written unless the whole program passed validation.
        """
        logging.info(
            f"Starting program generation for user {user_id}: "
            f"level={profile.fitness_level.value}, goals={profile.goals}"
        )
        result = await self.generator.generate(profile, requirements)
        if not result.success:
            logging.warning(
                f"Program generation for user {user_id} exhausted {result.attempts} attempts: "
                f"{result.last_error}"
            )
            return result, None

        async with self.session_pool() as session:
            program = await save_program(session, user_id, result.program)

        logging.info(f"Program #{program.program_id} created for user {user_id}")
        return result, program


def create_program_service(settings: Settings, session_pool: async_sessionmaker) -> ProgramService:
    """Wires the production generator: OpenAI client, database catalog, stored prompt versions."""
    generator = ProgramGenerator(
        llm=create_llm_service(settings),
        catalog=ExerciseCatalog(session_pool),
        config=ProgramConfig.from_settings(settings),
        completion_options=CompletionOptions(
            temperature=settings.LLM_TEMPERATURE,
            max_tokens=settings.LLM_MAX_TOKENS,
        ),
        methodology=settings.METHODOLOGY_PROMPT,
        prompt_source=PromptStore(session_pool),
    )
    return ProgramService(generator, session_pool)
