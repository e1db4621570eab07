import logging
import pytest
from caesarfile.utils.settings import env_int

VAR = "CAESARFILE_TEST_INT"


def test_unset_uses_default(monkeypatch, caplog):
    monkeypatch.delenv(VAR, raising=False)
    with caplog.at_level(logging.WARNING):
        assert env_int(VAR, 7) == 7
    assert caplog.records == []

def test_valid_value(monkeypatch):
    monkeypatch.setenv(VAR, "4096")
    assert env_int(VAR, 7) == 4096

@pytest.mark.parametrize("raw", ["", "   "])
def test_blank_uses_default_quietly(monkeypatch, caplog, raw):
    monkeypatch.setenv(VAR, raw)
    with caplog.at_level(logging.WARNING):
        assert env_int(VAR, 7) == 7
    assert caplog.records == []

@pytest.mark.parametrize("raw, fragment", [
    ("abc", "not an integer"),
    ("1.5", "not an integer"),
    ("0", "must be positive"),
    ("-10", "must be positive"),
])
def test_invalid_falls_back_with_warning(monkeypatch, caplog, raw, fragment):
    monkeypatch.setenv(VAR, raw)
    with caplog.at_level(logging.WARNING, logger="caesarfile.utils.settings"):
        assert env_int(VAR, 7) == 7
    assert any(fragment in r.getMessage() and VAR in r.getMessage() for r in caplog.records)
