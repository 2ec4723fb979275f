import logging

from sqlalchemy.ext.asyncio import AsyncSession

from database.models import (
    BlockExercise,
    BlockTypeEnum,
    Program,
    ProgramWorkout,
    WorkoutBlock,
)
from coach.schemas.program import GeneratedProgram


async def save_program(
    session: AsyncSession, user_id: str, program_data: dict | GeneratedProgram
) -> Program:
    """
    Writes a validated program with all of its workouts, blocks and block
    exercises in a single commit.
    """
    plan = (
        program_data
        if isinstance(program_data, GeneratedProgram)
        else GeneratedProgram.model_validate(program_data)
    )
    header = plan.program

    program = Program(
        created_by=user_id,
        name=header.name,
        description=header.description,
        duration_weeks=header.duration_weeks,
        difficulty_level=header.difficulty_level,
        program_type=header.program_type,
    )

    for workout_plan in plan.workouts:
        workout = ProgramWorkout(
            name=workout_plan.name,
            description=workout_plan.description,
            estimated_duration_minutes=workout_plan.estimated_duration_minutes,
            difficulty_level=workout_plan.difficulty_level,
            workout_type=workout_plan.workout_type,
            week_number=workout_plan.week_number,
            day_of_week=workout_plan.day_of_week,
            workout_order=workout_plan.workout_order,
        )
        for block_order, block_plan in enumerate(workout_plan.blocks, start=1):
            block = WorkoutBlock(
                name=block_plan.name,
                block_type=block_plan.block_type or BlockTypeEnum.standard,
                sets=block_plan.sets,
                rest_between_exercises=block_plan.rest_between_exercises,
                block_order=block_order,
            )
            block.exercises = [
                BlockExercise(
                    exercise_id=exercise.exercise_id,
                    reps=exercise.reps,
                    weight_level=exercise.weight_level,
                    exercise_order=exercise.exercise_order,
                )
                for exercise in block_plan.exercises
            ]
            workout.blocks.append(block)
        program.workouts.append(workout)

    session.add(program)
    await session.commit()
    logging.info(
        f"Saved program #{program.program_id} '{program.name}' for user {user_id} "
        f"with {len(program.workouts)} workouts"
    )
    return program
