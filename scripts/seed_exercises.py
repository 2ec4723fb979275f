import asyncio
import json
import os
import sys

from pydantic import ValidationError

# Add the project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from coach.requests.exercise_requests import clear_exercises, add_exercises_bulk
from coach.schemas.exercise import ExerciseCreate
from database.connection import create_session_pool, create_tables, dispose_engine


async def main(path: str = "exercises.json"):
    """
    Clears the exercise catalog and fills it from a JSON file holding a list
    of exercises (name, category, muscle_groups, difficulty_level, equipment_needed).
    """
    print("Seeding the exercise catalog...")

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw_exercises = json.load(f)
        print(f"✅ Loaded {path}.")
    except FileNotFoundError:
        print(f"❌ File '{path}' not found.")
        return
    except json.JSONDecodeError:
        print(f"❌ Could not decode JSON from '{path}'.")
        return

    try:
        exercises_to_create = [ExerciseCreate.model_validate(item) for item in raw_exercises]
    except ValidationError as e:
        print(f"❌ Invalid exercise entry: {e}")
        return

    if not exercises_to_create:
        print("⚠️ No exercises to add.")
        return

    print(f"Found {len(exercises_to_create)} exercises to add.")

    await create_tables()
    session_factory = create_session_pool()
    try:
        async with session_factory() as session:
            print("Clearing table 'exercises'...")
            await clear_exercises(session)

            print("Adding exercises...")
            await add_exercises_bulk(session, exercises_to_create)
            print(f"✅ Catalog filled with {len(exercises_to_create)} exercises.")
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main(*sys.argv[1:2]))
