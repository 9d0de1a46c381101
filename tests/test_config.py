"""Search configuration loading tests."""

from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from search_app.config import DEFAULT_MAX_WORKERS, SearchConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("APP_ENV", "APP_CONFIG_PATH", "SEARCH_CONFIG_DIR", "MAX_WORKERS", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_environment() -> None:
    config = SearchConfig.from_env()
    assert config.max_workers == DEFAULT_MAX_WORKERS
    assert config.log_level == "INFO"
    assert config.environment is None


def test_environment_file_is_loaded(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "staging.yaml").write_text("# staging\nmax_workers: 8\nlog_level: 'debug'\n")
    monkeypatch.setenv("APP_ENV", "staging")
    monkeypatch.setenv("SEARCH_CONFIG_DIR", str(tmp_path))

    config = SearchConfig.from_env()
    assert config.max_workers == 8
    assert config.log_level == "DEBUG"
    assert config.environment == "staging"


def test_environment_variables_override_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "custom.yaml"
    path.write_text("max_workers: 8\n")
    monkeypatch.setenv("APP_CONFIG_PATH", str(path))
    monkeypatch.setenv("MAX_WORKERS", "2")

    assert SearchConfig.from_env().max_workers == 2


@pytest.mark.parametrize("raw", ["zero", "0", "-3"])
def test_invalid_worker_counts_are_rejected(raw: str, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAX_WORKERS", raw)
    with pytest.raises(ValueError):
        SearchConfig.from_env()
