# tests/test_settings.py
import pytest

from campusflow.settings import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "CAMPUSFLOW_DISABLE_LLM", "GEMINI_MODEL", "CAMPUS_NAME",
                 "LLM_REQUEST_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


def test_api_key_absent_by_default():
    assert Settings(_env_file=None).api_key == ""


def test_gemini_key_wins(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "first")
    monkeypatch.setenv("GOOGLE_API_KEY", "second")
    assert Settings(_env_file=None).api_key == "first"


def test_blank_key_falls_through(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "   ")
    monkeypatch.setenv("GOOGLE_API_KEY", "second")
    assert Settings(_env_file=None).api_key == "second"


def test_empty_keys_mean_absent(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "")
    monkeypatch.setenv("GOOGLE_API_KEY", "")
    assert Settings(_env_file=None).api_key == ""


def test_disable_flag(monkeypatch):
    assert not Settings(_env_file=None).llm_disabled
    monkeypatch.setenv("CAMPUSFLOW_DISABLE_LLM", "1")
    assert Settings(_env_file=None).llm_disabled


def test_defaults():
    s = Settings(_env_file=None)
    assert s.GEMINI_MODEL == "gemini-1.5-flash"
    assert s.CAMPUS_NAME == "CMRIT"


def test_blank_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("LLM_REQUEST_TIMEOUT", "")
    monkeypatch.setenv("GEMINI_MODEL", "")
    s = Settings(_env_file=None)
    assert s.LLM_REQUEST_TIMEOUT == 120.0
    assert s.GEMINI_MODEL == "gemini-1.5-flash"


def test_blank_values_in_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("LLM_REQUEST_TIMEOUT=\nCAMPUS_NAME=\n", encoding="utf-8")
    s = Settings(_env_file=str(env_file))
    assert s.LLM_REQUEST_TIMEOUT == 120.0
    assert s.CAMPUS_NAME == "CMRIT"
