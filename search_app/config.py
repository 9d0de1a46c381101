"""Configuration helpers for the shirt search engine."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_MAX_WORKERS = 4


@dataclass
class SearchConfig:
    """Configuration values for building and running the search engine.

    ``max_workers`` bounds the thread pool used for the per-query lookups and
    facet counting. Environment variables always win over file values so a
    deployment can override a checked-in environment file.
    """

    max_workers: int = DEFAULT_MAX_WORKERS
    log_level: str = "INFO"
    environment: str | None = None

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

    @classmethod
    def from_env(cls) -> "SearchConfig":
        """Build a config from environment variables or an environment YAML file.

        The file is ``APP_CONFIG_PATH`` when set, otherwise
        ``<SEARCH_CONFIG_DIR>/<APP_ENV>.yaml``.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("SEARCH_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            return os.getenv(key.upper(), yaml_config.get(key, default))

        raw_workers = get_value("max_workers", str(DEFAULT_MAX_WORKERS))
        try:
            max_workers = int(raw_workers or DEFAULT_MAX_WORKERS)
        except ValueError as exc:
            raise ValueError(f"max_workers must be an integer, got '{raw_workers}'") from exc

        return cls(
            max_workers=max_workers,
            log_level=str(get_value("log_level", "INFO") or "INFO").upper(),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse flat ``key: value`` lines without pulling in a YAML parser."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#") or ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
                value = value[1:-1]
            config[key.strip()] = value
        return config
