# Exercise category taxonomy of the catalog (value -> display label)
EXERCISE_CATEGORIES = {
    "accessories": "Accessories",
    "accelerations": "Accelerations",
    "agility": "Agility",
    "ballistics and plyometrics": "Ballistics and plyometrics",
    "core": "Core",
    "olympic-derivatives": "Olympic derivatives",
    "hip-dominant": "Hip dominant",
    "knee-dominant": "Knee dominant",
    "ankle-dominant": "Ankle dominant",
    "pushes": "Pushes",
    "isometrics": "Isometrics",
    "mobility and flexibility": "Mobility and flexibility",
    "running technique": "Running technique",
    "pulls": "Pulls",
}

# Fixed block sequence of every workout: (name, block_type, focus, category hints)
BLOCK_TEMPLATE = [
    (
        "Activation 1",
        "warmup",
        "mobility and flexibility",
        ["mobility and flexibility"],
    ),
    (
        "Activation 2",
        "warmup",
        "core, stability and isometrics",
        ["core", "isometrics"],
    ),
    (
        "Block 1",
        "main",
        "explosive and speed work",
        ["ballistics and plyometrics", "accelerations", "olympic-derivatives", "agility"],
    ),
    (
        "Block 2",
        "main",
        "heavy compound bilateral patterns, lower + upper body",
        ["knee-dominant", "hip-dominant", "pushes", "pulls"],
    ),
    (
        "Block 3",
        "main",
        "heavy compound unilateral patterns",
        ["knee-dominant", "hip-dominant", "ankle-dominant", "pushes", "pulls"],
    ),
    (
        "Block 4",
        "main",
        "accessories for the muscles trained in the session",
        ["accessories"],
    ),
]

# Primary goal resolution order; the first goal the user has wins
GOAL_PRIORITY = [
    "improve_muscle_power",
    "increase_muscle_mass",
    "improve_speed",
    "improve_endurance",
    "increase_flexibility",
    "pre_match",
    "upper_body_strength",
    "lower_body_strength",
    "maintenance",
]
DEFAULT_GOAL = "maintenance"

GOAL_LABELS = {
    "improve_muscle_power": "Muscle Power",
    "increase_muscle_mass": "Muscle Mass",
    "improve_speed": "Speed",
    "improve_endurance": "Endurance",
    "increase_flexibility": "Flexibility",
    "pre_match": "Pre-Match",
    "upper_body_strength": "Upper Body Strength",
    "lower_body_strength": "Lower Body Strength",
    "maintenance": "Maintenance",
}

GOAL_PROGRAM_TYPES = {
    "improve_muscle_power": "power",
    "increase_muscle_mass": "strength",
    "improve_speed": "speed",
    "improve_endurance": "hybrid",
    "increase_flexibility": "hybrid",
    "pre_match": "power",
    "upper_body_strength": "strength",
    "lower_body_strength": "strength",
    "maintenance": "hybrid",
}
