import pytest
from models.query import Query

# query="abc", page_number=2, page_size=10
SAMPLE_BYTES = b"\x0a\x03abc\x10\x02\x18\x0a"


@pytest.fixture
def sample_record():
    return Query(query="abc", page_number=2, page_size=10)


@pytest.fixture
def sample_bytes():
    return SAMPLE_BYTES
