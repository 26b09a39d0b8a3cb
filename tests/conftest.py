"""
Pytest configuration and fixtures
"""
import sys
from datetime import date
from pathlib import Path

import pytest

# Ensure the project root is on sys.path for imports in tests
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from advisor import StaticAdvisor
from app import create_app
from models.ripeness import Climate, ItemRule, RipenessRequest, Storage
from pipeline import RipenessPipeline
from rules import RuleRepository


@pytest.fixture
def sample_rule():
    return ItemRule(
        sku="sample",
        name="Sample Fruit",
        category="Test",
        ripen_room_days=5,
        ripen_cool_days=3,
        temp_advice="Keep somewhere cool and dry.",
        ready_signs=("Sweet smell",),
        donts=("Squeezing",),
    )


@pytest.fixture
def repository(sample_rule):
    return RuleRepository([
        sample_rule,
        ItemRule(sku="berry", name="Berry", category="Berry", ripen_room_days=0, ripen_cool_days=1),
        ItemRule(sku="apple", name="Apple", category="Pome", ripen_room_days=4, ripen_cool_days=10),
    ])


@pytest.fixture
def make_request():
    def _make(sku="sample", received_at=date(2024, 1, 1), storage=Storage.ROOM,
              climate=Climate.NORMAL, issues=()):
        return RipenessRequest(sku=sku, received_at=received_at, storage=storage,
                               climate=climate, issues=tuple(issues))
    return _make


@pytest.fixture
def advisor_reply():
    """Text the stub advisor returns; override per test"""
    return "Eat it when it smells sweet."


@pytest.fixture
def client(repository, advisor_reply):
    pipeline = RipenessPipeline(repository, advisor=StaticAdvisor(advisor_reply), timeout=2.0)
    app = create_app(pipeline=pipeline)
    app.config["TESTING"] = True
    return app.test_client()
