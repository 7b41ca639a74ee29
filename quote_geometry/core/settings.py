from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from pydantic_settings import BaseSettings


def _load_yaml_config() -> dict:
    root = Path(__file__).resolve().parents[2]  # project root
    cfg_path = root / "config.yaml"
    if not cfg_path.exists():
        return {}
    with open(cfg_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    # LLM
    llm_provider: str = "openai"
    llm_model: str = "gpt-4o"
    llm_temperature: float = 0.5
    llm_max_tokens: int = 200
    llm_timeout_seconds: float = 30.0

    # API keys (optional, a missing key makes every analysis fail)
    OPENAI_API_KEY: Optional[str] = None
    GEMINI_API_KEY: Optional[str] = None

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

    def __init__(self, **kwargs):
        cfg = _load_yaml_config()
        llm = (cfg.get("llm") or {})
        server = (cfg.get("server") or {})

        values = {
            "llm_provider": llm.get("provider"),
            "llm_model": llm.get("model"),
            "llm_temperature": llm.get("temperature"),
            "llm_max_tokens": llm.get("max_tokens"),
            "llm_timeout_seconds": llm.get("timeout_seconds"),
            "host": server.get("host"),
            "port": server.get("port"),
            "log_level": server.get("log_level"),
        }
        # only keys present in config.yaml; anything absent falls back to env/.env/defaults
        values = {k: v for k, v in values.items() if v is not None}
        values.update(kwargs)

        super().__init__(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
