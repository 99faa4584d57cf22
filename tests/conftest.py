import os

import pytest

# The module-level app reads auth settings at import; keep it open for tests
os.environ.setdefault("ENABLE_BASIC_AUTH", "false")

from records.models import Record  # noqa: E402
from records.resources import Resource  # noqa: E402


@pytest.fixture
def resource():
    return Resource(bucket="default", collection="records")


@pytest.fixture
def sample_records():
    return (
        Record(id="a", title="Alpha", description="first", last_modified=300),
        Record(id="b", title="Beta", description=None, last_modified=200),
        Record(id="c", title=None, description="third", last_modified=100),
    )
