import os
from typing import Mapping, Optional

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


def _flag(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    text = str(value).strip().lower()
    if default:
        return text not in {"0", "false", "no", "off"}
    return text in {"1", "true", "yes", "on"}


class Settings:
    def __init__(self, env: Optional[Mapping[str, str]] = None) -> None:
        source = os.environ if env is None else env
        self.host = source.get("HOST", "0.0.0.0")
        self.port = int(source.get("PORT", "3010"))
        # GEMINI_API_KEY wins; API_KEY is accepted for older deployments.
        self.api_key = (source.get("GEMINI_API_KEY") or source.get("API_KEY") or "").strip()
        self.model = source.get("WORD2VEC_MODEL", "gemini-2.5-flash")
        self.base_url = source.get("WORD2VEC_BASE_URL", DEFAULT_BASE_URL)
        self.temperature = float(source.get("WORD2VEC_TEMPERATURE", "0.3"))
        self.json_mode = _flag(source.get("WORD2VEC_JSON_MODE"), True)
        timeout = str(source.get("WORD2VEC_TIMEOUT_SECONDS", "")).strip()
        self.timeout_seconds = float(timeout) if timeout else None

    @property
    def configured(self) -> bool:
        return bool(self.api_key)


settings = Settings()
