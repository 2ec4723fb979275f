import logging
from dataclasses import dataclass, field
from typing import Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from coach.config.constants import GOAL_LABELS
from coach.requests import prompt_requests

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromptOverrides:
    methodology: str | None = None
    goal_prompts: Mapping[str, str] = field(default_factory=dict)


class PromptStore:
    """
    Reads the trainer-edited prompt texts of the active prompt version.

    Missing texts fall back to the built-in defaults, and so does a storage
    error: generation goes on with the default prompts and a warning.
    """

    def __init__(self, session_pool: async_sessionmaker):
        self.session_pool = session_pool

    async def load_overrides(self) -> PromptOverrides:
        try:
            async with self.session_pool() as session:
                version = await prompt_requests.get_active_prompt_version(session)
        except SQLAlchemyError as e:
            logger.warning(f"Could not load the active prompt version, using defaults: {e}")
            return PromptOverrides()

        if version is None:
            return PromptOverrides()

        goal_prompts = {
            goal: text
            for goal, text in (version.goal_prompts or {}).items()
            if goal in GOAL_LABELS and isinstance(text, str) and text.strip()
        }
        methodology = version.methodology_content
        if not methodology or not methodology.strip():
            methodology = None

        logger.info(
            f"Using prompt version #{version.id} ({version.version_label}): "
            f"{len(goal_prompts)} goal prompts, custom methodology={methodology is not None}"
        )
        return PromptOverrides(methodology=methodology, goal_prompts=goal_prompts)
