import pytest

from binder import ControllerBinder
from tests.helpers import MockRouter


@pytest.fixture
def router() -> MockRouter:
    return MockRouter()


@pytest.fixture
def binder(router: MockRouter) -> ControllerBinder:
    return ControllerBinder(router)
