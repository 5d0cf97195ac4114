"""Loading configs from files"""
from pathlib import Path

import pytest

from jelly_config import ConfigError, ParseError, load, parse


def test_load_file(config_file: Path, sample_text: str) -> None:
    """Test a file loads to the same tree as its text"""
    assert load(config_file) == parse(sample_text)
    assert load(str(config_file)) == parse(sample_text)


def test_load_latin1_fallback(tmp_path: Path) -> None:
    """Test files that are not UTF-8 are read as latin1"""
    path = tmp_path / "legacy.conf"
    path.write_bytes('name = "caf\xe9"'.encode('latin1'))
    assert load(path).get_string("name") == "caf\xe9"


def test_load_missing_file(tmp_path: Path) -> None:
    """Test unreadable files raise ConfigError"""
    path = tmp_path / "missing.conf"
    with pytest.raises(ConfigError) as exc_info:
        load(path)
    assert "Failed to read file" in str(exc_info.value)
    assert not isinstance(exc_info.value, ParseError)


def test_parse_error_carries_path(tmp_path: Path) -> None:
    """Test parse failures name the file they came from"""
    path = tmp_path / "broken.conf"
    path.write_text('ok = 1\nbad = "open', encoding='utf-8')
    with pytest.raises(ParseError) as exc_info:
        load(path)
    error = exc_info.value
    assert error.path == path
    assert str(error).startswith(str(path))
    assert "unterminated string" in str(error)
    assert error.line == 2
