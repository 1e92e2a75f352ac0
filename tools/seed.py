import sys
from pathlib import Path

# ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from taskapi import config
from taskapi.database import Base, create_db_engine, make_session_factory
from taskapi.logging_setup import setup_logging
from taskapi.models import task, user  # noqa: F401
from taskapi.seed import seed_sample_data

setup_logging(config.LOG_LEVEL)
engine = create_db_engine()
try:
    Base.metadata.create_all(bind=engine)
    db = make_session_factory(engine)()
    try:
        inserted = seed_sample_data(db)
    finally:
        db.close()
    print('seeded' if inserted else 'already seeded')
finally:
    engine.dispose()
