# type: ignore
import pytest

from unit_utils import load_program


@pytest.fixture
def with_compare8():
    yield load_program('compare8')


@pytest.fixture
def with_chain():
    yield load_program('chain')


@pytest.fixture
def with_feedback():
    yield load_program('feedback')
