"""Shared test fixtures."""

import pytest

from fold_editor.core.tree.ids import IdGenerator
from fold_editor.core.tree.parser import parse
from fold_editor.models.node import Forest
from fold_editor.session import EditorSession
from tests.unit.fakes import FakeScheduler
from tests.unit.samples import PROJECT_TEXT, SAMPLE_TEXT


@pytest.fixture
def sample_forest() -> Forest:
    return parse(SAMPLE_TEXT, 2, True, ids=IdGenerator(seed=1))


@pytest.fixture
def project_forest() -> Forest:
    return parse(PROJECT_TEXT, 2, True, ids=IdGenerator(seed=2))


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def session(scheduler: FakeScheduler) -> EditorSession:
    """A session with PROJECT_TEXT loaded and one cursor on the first line."""
    s = EditorSession(scheduler=scheduler, ids=IdGenerator(seed=3))
    s.load_text(PROJECT_TEXT)
    return s
