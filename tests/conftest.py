from __future__ import annotations

from io import StringIO
from typing import Iterator

import pytest
from rich.console import Console

from lib_pmem_output import config as config_module
from lib_pmem_output import runtime


@pytest.fixture(autouse=True)
def _isolate_output_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test without env overrides or a leftover shared printer."""

    for name in (
        config_module.ENV_VERBOSITY,
        config_module.ENV_COLUMN_WIDTH,
        config_module.ENV_PREFIX,
        config_module.DOTENV_ENV_VAR,
    ):
        monkeypatch.delenv(name, raising=False)
    runtime.shutdown()
    yield
    runtime.shutdown()


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, width=120)
