import pytest

pytest.register_assert_rewrite('helpers')

from helpers import assert_valid, random_boxes  # noqa: E402


@pytest.fixture
def boxes():
    return random_boxes(1000)


@pytest.fixture
def check_tree():
    return assert_valid
