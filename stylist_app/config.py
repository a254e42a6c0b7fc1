"""Configuration helpers for the outfit suggestion service."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_GEMINI_MODEL = "models/gemini-1.5-flash-002"
GENERATOR_BACKENDS = ("none", "gemini", "http")


@dataclass
class StylistConfig:
    """Configuration values for outfit composition.

    ``generator_backend`` selects the text generator used by the AI-assisted
    composer. ``none`` keeps every combination on the deterministic builder.
    """

    generator_backend: str = "none"
    model: str = DEFAULT_GEMINI_MODEL
    api_key: Optional[str] = None
    generation_endpoint: Optional[str] = None
    generation_api_key: Optional[str] = None
    generation_timeout_seconds: float = 20.0
    max_outfits_per_combination: int = 10
    max_outfits_per_group: int = 10
    max_workers: int = 1
    environment: str | None = None

    def __post_init__(self) -> None:
        backend = (self.generator_backend or "none").strip().lower()
        if backend not in GENERATOR_BACKENDS:
            raise ValueError(
                f"Unsupported generator backend '{self.generator_backend}'. Allowed: {list(GENERATOR_BACKENDS)}"
            )
        self.generator_backend = backend
        if self.max_outfits_per_combination < 1 or self.max_outfits_per_group < 1:
            raise ValueError("Outfit limits must be positive")
        self.max_workers = max(1, int(self.max_workers))

    @classmethod
    def from_env(cls) -> "StylistConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables so that secrets can be
        injected by the runtime environment.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("STYLIST_CONFIG_DIR", "config/environments"))
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
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        return cls(
            generator_backend=str(get_value("generator_backend", "none") or "none"),
            model=str(get_value("model", DEFAULT_GEMINI_MODEL) or DEFAULT_GEMINI_MODEL),
            api_key=get_value("google_api_key"),
            generation_endpoint=get_value("generation_endpoint"),
            generation_api_key=get_value("generation_api_key"),
            generation_timeout_seconds=float(get_value("generation_timeout_seconds", "20") or 20),
            max_outfits_per_combination=int(get_value("max_outfits_per_combination", "10") or 10),
            max_outfits_per_group=int(get_value("max_outfits_per_group", "10") or 10),
            max_workers=int(get_value("max_workers", "1") or 1),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal flat ``key: value`` config file."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
