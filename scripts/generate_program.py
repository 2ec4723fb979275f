import argparse
import asyncio
import json
import os
import sys
from collections import Counter

# Add the project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from coach.config.settings import settings
from coach.errors import ProgramGenerationError
from coach.schemas.user import ProgramRequirements, UserProfile
from coach.services.program_service import create_program_service
from config.logging import setup_logging
from database.connection import create_session_pool, create_tables, dispose_engine


def print_summary(program: dict) -> None:
    header = program["program"]
    workouts = program["workouts"]
    print(f"Program: {header['name']} ({header['duration_weeks']} weeks)")
    print(f"Total workouts: {len(workouts)}")

    week_counts = Counter(w.get("week_number") or 0 for w in workouts)
    print("Workouts per week:")
    for week in sorted(week_counts):
        print(f"   Week {week}: {week_counts[week]}")

    first = workouts[0]
    print(f"First workout: {first['name']} (week {first.get('week_number')}, day {first.get('day_of_week')})")
    for position, block in enumerate(first["blocks"], start=1):
        print(f"   {position}. {block['name']} ({block.get('block_type')}) - {len(block['exercises'])} exercises")


async def main(args: argparse.Namespace) -> int:
    with open(args.profile, "r", encoding="utf-8") as f:
        profile = UserProfile.model_validate(json.load(f))
    requirements = ProgramRequirements(focus=args.focus) if args.focus else None

    await create_tables()
    service = create_program_service(settings, create_session_pool())
    try:
        result, program = await service.create_program(args.user_id, profile, requirements)
    except ProgramGenerationError as e:
        print(f"❌ Generation aborted: {e}")
        return 2
    finally:
        await dispose_engine()

    if not result.success:
        print(f"❌ No valid program after {result.attempts} attempts: {result.last_error}")
        return 1

    print_summary(result.program)
    print(f"✅ Saved as program #{program.program_id} (attempt {result.attempts})")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate and store a training program for one user.")
    parser.add_argument("profile", help="Path to a JSON file with the user profile")
    parser.add_argument("--user-id", default="cli", help="Owner of the created program")
    parser.add_argument("--focus", default=None, help="Optional program focus")
    setup_logging()
    sys.exit(asyncio.run(main(parser.parse_args())))
