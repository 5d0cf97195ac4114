import logging
from pathlib import Path

import pytest

SAMPLE_DOCUMENT = """
# Application settings
name = "Jelly"
enabled = 1
feature_on = 0
ratio = -0.25
tags = ["fast", "small"]  # trailing comment

window {
    width = 800
    height = 600
}

data = {
    is_cool = 1
    levels = [1, [2, 3], { depth = 4 }]
}
"""


@pytest.fixture(autouse=True)
def setup_logging() -> None:
    """Configure logging for tests"""
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s [%(levelname)s] %(message)s'
    )


@pytest.fixture
def sample_text() -> str:
    """Document exercising every value kind"""
    return SAMPLE_DOCUMENT


@pytest.fixture
def config_file(tmp_path: Path, sample_text: str) -> Path:
    """Write the sample document to disk"""
    path = tmp_path / "app.conf"
    path.write_text(sample_text, encoding='utf-8')
    return path
