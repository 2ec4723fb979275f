import logging
from typing import Mapping, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import PromptVersion


async def get_active_prompt_version(session: AsyncSession) -> PromptVersion | None:
    stmt = (
        select(PromptVersion)
        .where(PromptVersion.is_active.is_(True))
        .order_by(PromptVersion.created_at.desc(), PromptVersion.id.desc())
        .limit(1)
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def list_prompt_versions(session: AsyncSession) -> Sequence[PromptVersion]:
    """Version history, newest first."""
    stmt = select(PromptVersion).order_by(PromptVersion.created_at.desc(), PromptVersion.id.desc())
    result = await session.execute(stmt)
    return result.scalars().all()


async def create_prompt_version(
    session: AsyncSession,
    goal_prompts: Mapping[str, str],
    methodology: str | None = None,
    label: str | None = None,
    updated_by: str | None = None,
    is_active: bool = True,
) -> PromptVersion:
    """
    Stores a new set of prompt texts. An active version replaces the
    previously active one.
    """
    if is_active:
        await session.execute(
            update(PromptVersion).where(PromptVersion.is_active.is_(True)).values(is_active=False)
        )

    version = PromptVersion(
        version_label=label,
        is_active=is_active,
        methodology_content=methodology,
        goal_prompts=dict(goal_prompts),
        updated_by=updated_by,
    )
    session.add(version)
    await session.commit()
    logging.info(f"Created prompt version '{label}' (active={is_active}) by {updated_by}")
    return version


async def set_active_prompt_version(session: AsyncSession, version_id: int) -> bool:
    """Makes the given version the only active one. Returns False if it does not exist."""
    version = await session.get(PromptVersion, version_id)
    if version is None:
        return False

    await session.execute(
        update(PromptVersion).where(PromptVersion.id != version_id).values(is_active=False)
    )
    version.is_active = True
    await session.commit()
    logging.info(f"Prompt version #{version_id} is now active")
    return True
