import main
from ris_client import DEFAULT_TIMEOUT_MS


def test_dotenv_is_loaded_once_by_llm_client():
    # llm_client loads .env on import; main only reads the environment
    assert not hasattr(main, "load_dotenv")


def test_timeout_from_environment(monkeypatch):
    monkeypatch.setenv("RIS_TIMEOUT_MS", "1500")
    assert main.get_timeout_ms() == 1500


def test_timeout_default_and_invalid(monkeypatch):
    monkeypatch.delenv("RIS_TIMEOUT_MS", raising=False)
    assert main.get_timeout_ms() == DEFAULT_TIMEOUT_MS
    monkeypatch.setenv("RIS_TIMEOUT_MS", "soon")
    assert main.get_timeout_ms() == DEFAULT_TIMEOUT_MS
