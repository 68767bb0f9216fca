"""Text guidance derived from a computed plan's aggregate numbers."""
from study_planner.models import StudyPlanParameters, Subject

ALL_COMPLETED_MESSAGE = "All topics completed! Great job!"

BURNOUT_WARNING = "Consider reducing daily study hours to avoid burnout. Quality over quantity!"
INCREASE_TIME = "Consider increasing daily study time to ensure adequate preparation."
HARD_TOPICS_FIRST = "Start with difficult topics when your mind is fresh, typically in the morning."
REVISION_FOCUS = "Focus on revision and practice problems rather than learning new concepts."
BUILD_FOUNDATIONS = "You have plenty of time! Focus on building strong foundations in each topic."
POMODORO_TIP = "Use the Pomodoro Technique: 25 minutes focused study, 5 minutes break."
DAILY_REVIEW_TIP = "Review yesterday's topics for 10 minutes before starting new material."

MAX_HEALTHY_HOURS = 8
MIN_USEFUL_HOURS = 2
SHORT_HORIZON_DAYS = 14
LONG_HORIZON_DAYS = 60
BEHIND_PROGRESS_PCT = 30


def behind_schedule_message(subject_name: str) -> str:
    return f"Prioritize {subject_name} - you're behind schedule on this subject."


def generate_recommendations(subjects: list[Subject], params: StudyPlanParameters) -> list[str]:
    recommendations = []

    if params.average_hours_per_day > MAX_HEALTHY_HOURS:
        recommendations.append(BURNOUT_WARNING)
    elif params.average_hours_per_day < MIN_USEFUL_HOURS:
        recommendations.append(INCREASE_TIME)

    if any(t.difficulty == "hard" and not t.completed for s in subjects for t in s.topics):
        recommendations.append(HARD_TOPICS_FIRST)

    if params.days_until_exams < SHORT_HORIZON_DAYS:
        recommendations.append(REVISION_FOCUS)
    elif params.days_until_exams > LONG_HORIZON_DAYS:
        recommendations.append(BUILD_FOUNDATIONS)

    behind = [s for s in subjects if s.progress < BEHIND_PROGRESS_PCT]
    if behind:
        recommendations.append(behind_schedule_message(behind[0].name))

    recommendations.append(POMODORO_TIP)
    recommendations.append(DAILY_REVIEW_TIP)
    return recommendations
