import os
import tempfile
from pathlib import Path

import pytest

# Must be set before hikewise.config / hikewise.db are imported
os.environ.setdefault("HIKEWISE_PASSWORD_PEPPER", "test-pepper-value")
os.environ.setdefault(
    "HIKEWISE_DB_URL",
    f"sqlite:///{Path(tempfile.gettempdir()) / 'hikewise-test.db'}",
)
os.environ.setdefault("HIKEWISE_ENV", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")


@pytest.fixture
def anyio_backend():
    return "asyncio"
