import argparse
import asyncio
import json
import os
import sys

# Add the project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from coach.config.constants import GOAL_LABELS
from coach.requests import prompt_requests
from config.logging import setup_logging
from database.connection import create_session_pool, create_tables, dispose_engine


def load_texts(path: str) -> tuple[dict, str | None]:
    """
    Reads {"methodology": "...", "goal_prompts": {"<goal key>": "..."}}.
    Unknown goal keys are reported and dropped.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    goal_prompts = {}
    for goal, text in (data.get("goal_prompts") or {}).items():
        if goal not in GOAL_LABELS:
            print(f"⚠️ Unknown goal '{goal}', skipped.")
            continue
        goal_prompts[goal] = text
    return goal_prompts, data.get("methodology")


async def main(args: argparse.Namespace) -> int:
    await create_tables()
    session_pool = create_session_pool()
    try:
        async with session_pool() as session:
            if args.command == "list":
                for version in await prompt_requests.list_prompt_versions(session):
                    marker = "*" if version.is_active else " "
                    goals = ", ".join(sorted(version.goal_prompts or {})) or "-"
                    print(f"{marker} #{version.id} {version.version_label or ''} ({version.created_at}) goals: {goals}")
                return 0

            if args.command == "create":
                try:
                    goal_prompts, methodology = load_texts(args.path)
                except (FileNotFoundError, json.JSONDecodeError) as e:
                    print(f"❌ Could not read '{args.path}': {e}")
                    return 1
                version = await prompt_requests.create_prompt_version(
                    session,
                    goal_prompts,
                    methodology=methodology,
                    label=args.label,
                    updated_by=args.updated_by,
                    is_active=not args.inactive,
                )
                print(f"✅ Created prompt version #{version.id}")
                return 0

            if not await prompt_requests.set_active_prompt_version(session, args.version_id):
                print(f"❌ Prompt version #{args.version_id} not found.")
                return 1
            print(f"✅ Prompt version #{args.version_id} is now active")
            return 0
    finally:
        await dispose_engine()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Manage trainer-edited prompt versions.")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help="Show all prompt versions, the active one marked with *")
    create = commands.add_parser("create", help="Store prompt texts from a JSON file")
    create.add_argument("path", help="JSON file with methodology and goal_prompts")
    create.add_argument("--label", default=None)
    create.add_argument("--updated-by", default=None)
    create.add_argument("--inactive", action="store_true", help="Store without activating")
    activate = commands.add_parser("activate", help="Make a stored version the active one")
    activate.add_argument("version_id", type=int)
    setup_logging()
    sys.exit(asyncio.run(main(parser.parse_args())))
