PLANNER_ROLE = "You are a task planning assistant."

PLANNER_INSTRUCTIONS = (
    "Break down this goal into actionable tasks with an estimated duration "
    "and dependencies (which tasks must be done first)."
)

TASK_SCHEMA = '{"description":"string","duration":"string","dependencies":"string or empty"}'

OUTPUT_RULES = (
    "Return ONLY a valid JSON array (no prose, no markdown, no code fences), "
    "where each object has:"
)


def build_prompt(goal: str) -> str:
    return (
        f"{PLANNER_ROLE}\n"
        f"{PLANNER_INSTRUCTIONS}\n"
        f'Goal: "{goal}"\n\n'
        f"{OUTPUT_RULES}\n"
        f"{TASK_SCHEMA}\n"
    )
