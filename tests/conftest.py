import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import md2slides` works, and this
# directory so test modules can import the shared fakes.
tests_dir = Path(__file__).resolve().parent
project_root = tests_dir.parent
for path in (project_root, tests_dir):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from fakes import FakeOAuth, FakeSlidesClient  # noqa: E402


@pytest.fixture
def fake_oauth():
    return FakeOAuth()


@pytest.fixture
def fake_slides():
    return FakeSlidesClient()
