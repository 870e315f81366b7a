# Headless Qt for widget tests; set before any QApplication is created.

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from tests.factories import make_nodes  # noqa: E402


@pytest.fixture
def nodes():
    return make_nodes()
