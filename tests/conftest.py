from pathlib import Path

import pytest

GRAMMARS = Path(__file__).parent / "grammars"


@pytest.fixture
def grammar_path():
    def _path(name: str) -> str:
        return str(GRAMMARS / name)
    return _path
