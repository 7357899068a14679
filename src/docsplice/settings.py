import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

_ENV_FIELDS = {
    "OPENAI_API_KEY": "openai_api_key",
    "OPENAI_BASE_URL": "openai_base_url",
    "DOCSPLICE_MODEL": "model",
    "DOCSPLICE_TEMPERATURE": "temperature",
    "DOCSPLICE_PROJECT_NAME": "project_name",
    "DOCSPLICE_SOURCE_SUFFIX": "source_suffix",
    "DOCSPLICE_EXCLUDED_SUFFIX": "excluded_suffix",
    "DOCSPLICE_SYNTHESIS_ATTEMPTS": "synthesis_attempts",
    "DOCSPLICE_SYNTHESIS_BACKOFF": "synthesis_backoff",
}


class DocspliceSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    openai_api_key: str | None = None
    openai_base_url: str | None = None
    model: str = "gpt-4"
    temperature: float = 0.1
    project_name: str = "this TypeScript project"
    source_suffix: str = ".ts"
    excluded_suffix: str = ".test.ts"
    synthesis_attempts: int = Field(default=3, ge=1)
    synthesis_backoff: float = Field(default=1.0, ge=0)

    @classmethod
    def from_env(cls, **overrides: Any) -> "DocspliceSettings":
        """Build settings from ``DOCSPLICE_*``/``OPENAI_*`` variables, then apply non-None overrides."""
        values: dict[str, Any] = {}
        for env_name, field_name in _ENV_FIELDS.items():
            value = os.getenv(env_name)
            if value:
                values[field_name] = value
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)
