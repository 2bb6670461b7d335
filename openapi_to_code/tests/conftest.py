import json
from pathlib import Path

import pytest

TEST_DATA_DIR = Path(__file__).parent / "test_data"


@pytest.fixture
def petstore_path():
    return TEST_DATA_DIR / "petstore.json"


@pytest.fixture
def petstore(petstore_path):
    with open(petstore_path) as f:
        return json.load(f)
