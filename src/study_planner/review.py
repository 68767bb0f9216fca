"""Fixed-interval spaced repetition for completed topics."""
from datetime import date, timedelta

from study_planner.models import DailyTask, Topic

REVIEW_INTERVALS = (1, 3, 7, 14, 30)
MIN_REVIEW_HOURS = 0.25
REVIEW_FRACTION = 0.1


def review_hours(topic: Topic) -> float:
    """10% of the topic's estimate, never under a quarter hour."""
    return max(MIN_REVIEW_HOURS, topic.estimated_hours * REVIEW_FRACTION)


def calculate_review_schedule(completed_topics: list[Topic], today: date | None = None) -> list[DailyTask]:
    """Five review tasks per topic at 1, 3, 7, 14 and 30 days from today.

    Ids depend only on topic id and interval, so repeated calls yield the
    same identities even though the dates move with today.
    """
    today = today or date.today()
    tasks = []
    for topic in completed_topics:
        hours = review_hours(topic)
        for interval in REVIEW_INTERVALS:
            tasks.append(DailyTask(
                id=f"review-{topic.id}-{interval}",
                date=(today + timedelta(days=interval)).isoformat(),
                topic_id=topic.id,
                topic_title=f"Review: {topic.title}",
                subject_name=topic.subject_name,
                estimated_hours=hours,
                difficulty=topic.difficulty,
                kind="review",
                youtube_links=list(topic.youtube_links),
                notes=topic.notes,
            ))
    return tasks
