"""
Pytest configuration and global fixtures.
"""
import sys
from pathlib import Path
from typing import Dict, List

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from data.database import DatabaseManager
from data.db_models import Base
from llm.errors import ErrorKind, LLMError
from sync.hash_store import HashStore
from translation.base import BaseTranslator


class FakeTranslator(BaseTranslator):
    """
    Scripted translation collaborator.

    Each call pops the next item from `script`: an exception instance is
    raised, anything else is ignored. With an empty script every text is
    translated to '<lang>:<text>'. Keys listed in `omit` are left out.
    """

    def __init__(self, script=None, omit=()):
        self.script = list(script or [])
        self.omit = set(omit)
        self.calls: List[Dict[str, str]] = []

    async def translate(self, source_texts, target_language, rule_set):
        self.calls.append(dict(source_texts))
        if self.script:
            step = self.script.pop(0)
            if isinstance(step, Exception):
                raise step
        return {
            key: f"{target_language}:{text}"
            for key, text in source_texts.items()
            if key not in self.omit
        }

    @property
    def submitted_texts(self) -> List[str]:
        return [text for call in self.calls for text in call.values()]


class RecordingSleep:
    """Awaitable stand-in for asyncio.sleep that records delays."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def rate_limit_error() -> LLMError:
    return LLMError(ErrorKind.RATE_LIMIT, "429 Too Many Requests", "fake")


@pytest.fixture(scope="session")
def test_db_engine():
    """Create in-memory SQLite engine for tests."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture
def test_db_session(test_db_engine):
    """Create fresh database session for each test."""
    Session = sessionmaker(bind=test_db_engine)
    session = Session()

    yield session

    # Rollback any uncommitted changes and close
    session.rollback()
    session.close()


@pytest.fixture
def db_manager():
    """Database manager on a private in-memory SQLite database."""
    manager = DatabaseManager("sqlite://")
    manager.create_tables()
    yield manager
    manager.engine.dispose()


@pytest.fixture
def hash_store(db_manager):
    return HashStore(db_manager)


@pytest.fixture
def fake_translator():
    return FakeTranslator()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def project_document():
    """A small project document mixing text and structural fields."""
    return {
        'projectIdea': {
            'projectTitle': 'Water scarcity in rural areas',
            'projectAcronym': 'WATSCAR',
            'mainAim': 'Reduce water loss in irrigation',
            'startDate': '2026-01-01',
        },
        'risks': [
            {
                'id': 'R1',
                'title': 'Drought',
                'description': 'Long dry seasons reduce supply',
                'category': 'Technical',
                'likelihood': 'High',
                'impact': 'Medium',
            },
        ],
        'activities': [
            {
                'id': 'WP1',
                'title': 'Field survey',
                'tasks': [
                    {
                        'id': 'T1.1',
                        'title': 'Collect samples',
                        'startDate': '2026-02-01',
                        'endDate': '2026-04-30',
                        'dependencies': [{'predecessorId': 'T0.1', 'type': 'FS'}],
                    },
                ],
            },
        ],
        'budget': {'total': 125000, 'approved': True, 'note': None},
    }
