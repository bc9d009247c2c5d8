APP_TITLE = "2026 Goals"

GOAL_KEYS = ["material", "ego", "running"]

GOALS = [
    {
        "key": "material",
        "title": "Less Material Focus",
        "prompt": "Did I avoid unnecessary spending and value what I already have today?",
    },
    {
        "key": "ego",
        "title": "Less Ego-led",
        "prompt": "Did I act with humility and kindness, prioritising truth over ego today?",
    },
    {
        "key": "running",
        "title": "Build My Running Career",
        "prompt": "Did I take meaningful action to improve my running (training, recovery, planning) today?",
    },
]
GOAL_TITLES = {goal["key"]: goal["title"] for goal in GOALS}

MANTRAS = {
    "material": [
        "Use what you have. Want less. Live more.",
        "Pause before purchase: will this matter in a week?",
        "Gratitude beats upgrades.",
    ],
    "ego": [
        "Choose curiosity over being right.",
        "Let actions speak louder than identity.",
        "Be soft in tone, firm in values.",
    ],
    "running": [
        "Consistency beats intensity.",
        "Train with patience; race with courage.",
        "Small wins compound.",
    ],
}

RATING_CHOICES = [1, 2, 3, 4, 5]
DEFAULT_RATING = 3
MAX_RATING = 5

USERS_COLLECTION = "users"
ENTRIES_COLLECTION = "entries"
MONTHS_COLLECTION = "months"
DOCUMENTS_TABLE = "documents"

GOAL_COLORS = {
    "material": "#8FB6D9",
    "ego": "#C9B3E5",
    "running": "#B7D1C9",
}
