"""
Pytest configuration to ensure src/ is on sys.path, plus shared fixtures.
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


SAMPLE_CODEOWNERS = """\
# Global owners
*  @default-owner

# Project: Core
/src/**  @alice @"Core Team"
/src/gen/**  @bob

#Project: Docs
*.md  @docs @alice
docs/  @docs

### UNOWNED (File::Codeowners)
# LICENSE
# src/unowned.txt
"""


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_CODEOWNERS


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "CODEOWNERS"
    path.write_text(SAMPLE_CODEOWNERS, encoding="utf-8")
    return path
