"""
Pytest Configuration

Global test configuration, fixtures, and utilities for the quizdrill
test suite.
"""

import logging
import tempfile
from pathlib import Path
from datetime import datetime, timezone

import pytest
import yaml

# Add src to Python path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from quizdrill.core.config import AppConfig, set_config
from quizdrill.core.database import dispose_engines
from quizdrill.core.types import Question, QuestionSource
from quizdrill.storage.kv_store import KeyValueStore
from quizdrill.storage.question_bank import QuestionBank
from quizdrill.storage.session_store import SessionStore


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def test_config_data(temp_dir):
    """Raw configuration mapping pointing storage and logs at temp_dir."""
    return {
        "app": {"name": "quizdrill-test", "version": "test", "debug": True},
        "storage": {"url": f"sqlite:///{temp_dir}/test.db"},
        "evaluation": {"similarity_threshold_percent": 80, "keyword_min_length": 3},
        "logging": {"level": "DEBUG", "console_level": "ERROR", "file": str(temp_dir / "test.log")},
    }


@pytest.fixture
def test_config(test_config_data):
    """Provide test configuration installed as the global config."""
    config = AppConfig.from_dict(test_config_data)
    set_config(config)
    yield config
    set_config(None)
    dispose_engines()
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)


@pytest.fixture
def config_file(temp_dir, test_config_data):
    """The test configuration written to a YAML file, for --config."""
    path = temp_dir / "config.yaml"
    path.write_text(yaml.safe_dump(test_config_data), encoding="utf-8")
    return path


@pytest.fixture
def kv_store(test_config):
    """Key-value store backed by a temporary SQLite database."""
    return KeyValueStore(test_config.storage.url)


@pytest.fixture
def question_bank(kv_store):
    return QuestionBank(kv_store)


@pytest.fixture
def session_store(kv_store):
    return SessionStore(kv_store)


@pytest.fixture
def sample_questions():
    """Five questions covering the KPI scenarios used across tests."""
    return [
        Question(id="q1", prompt="Capital of France?", expected_answer="Paris",
                 source=QuestionSource.MANUAL, tags=["geography"]),
        Question(id="q2", prompt="Author of Hamlet?", expected_answer="William Shakespeare",
                 source=QuestionSource.MANUAL, tags=["literature"]),
        Question(id="q3", prompt="2 + 2?", expected_answer="4",
                 source=QuestionSource.MANUAL, tags=["math"]),
        Question(id="q4", prompt="Largest planet?", expected_answer="Jupiter",
                 source=QuestionSource.MANUAL, tags=["science"]),
        Question(id="q5", prompt="Chemical symbol for gold?", expected_answer="Au",
                 source=QuestionSource.MANUAL, tags=["science"]),
    ]


@pytest.fixture
def sample_index(sample_questions):
    return {q.id: q for q in sample_questions}


@pytest.fixture
def fixed_now():
    return datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
