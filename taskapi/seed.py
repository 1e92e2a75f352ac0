import logging

from sqlalchemy.orm import Session

from taskapi.models.task import Task
from taskapi.models.user import User

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    ("Alice", "alice@example.com"),
    ("Bob", "bob@example.com"),
    ("Charlie", "charlie@example.com"),
]

# (owner email, title, done)
SAMPLE_TASKS = [
    ("alice@example.com", "Learn Go basics", True),
    ("alice@example.com", "Build REST API", False),
    ("bob@example.com", "Study goroutines", False),
    ("bob@example.com", "Practice live coding", False),
    ("charlie@example.com", "Read about AWS Glue", False),
]


def seed_sample_data(db: Session) -> bool:
    """Insert the sample users and tasks into an empty database.

    Returns False (and writes nothing) when any user already exists.
    """
    if db.query(User.id).first() is not None:
        logger.info("users table not empty, skipping seed")
        return False

    users = {}
    for name, email in SAMPLE_USERS:
        users[email] = User(name=name, email=email)
        db.add(users[email])
    db.flush()

    for email, title, done in SAMPLE_TASKS:
        db.add(Task(user_id=users[email].id, title=title, done=done))
    db.commit()
    logger.info("seeded %d users and %d tasks", len(SAMPLE_USERS), len(SAMPLE_TASKS))
    return True
