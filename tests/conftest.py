import pytest

from fakes import FakeSlack
from mpdslack.formatter import StatusFormatter


@pytest.fixture
def formatter() -> StatusFormatter:
    return StatusFormatter(":question:", "I don't know")


@pytest.fixture
def fake_slack() -> FakeSlack:
    return FakeSlack()
