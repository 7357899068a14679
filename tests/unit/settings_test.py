"""Unit tests for settings and the annotation context."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from pydantic import ValidationError

from docsplice.context import annotation_context, create_context
from docsplice.settings import _ENV_FIELDS, DocspliceSettings


class TestDocspliceSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in _ENV_FIELDS:
            monkeypatch.delenv(name, raising=False)
        settings = DocspliceSettings.from_env()
        assert settings.model == "gpt-4"
        assert settings.temperature == 0.1
        assert settings.source_suffix == ".ts"
        assert settings.excluded_suffix == ".test.ts"
        assert settings.synthesis_attempts == 3

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("DOCSPLICE_MODEL", "gpt-4o")
        monkeypatch.setenv("DOCSPLICE_SYNTHESIS_ATTEMPTS", "5")
        monkeypatch.setenv("DOCSPLICE_SYNTHESIS_BACKOFF", "0.5")

        settings = DocspliceSettings.from_env()

        assert settings.openai_api_key == "sk-test"
        assert settings.model == "gpt-4o"
        assert settings.synthesis_attempts == 5
        assert settings.synthesis_backoff == 0.5

    def test_overrides_win_and_none_is_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DOCSPLICE_MODEL", "gpt-4o")
        settings = DocspliceSettings.from_env(model="gpt-4.1", synthesis_attempts=None)
        assert settings.model == "gpt-4.1"
        assert settings.synthesis_attempts == 3

    def test_rejects_zero_attempts(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DOCSPLICE_SYNTHESIS_ATTEMPTS", "0")
        with pytest.raises(ValidationError):
            DocspliceSettings.from_env()

    def test_is_frozen(self) -> None:
        settings = DocspliceSettings()
        with pytest.raises(ValidationError):
            settings.model = "other"  # type: ignore[misc]


class TestAnnotationContext:
    def test_create_context_builds_client_from_settings(self, settings: DocspliceSettings) -> None:
        with patch("docsplice.context.AsyncOpenAI") as mock_client_cls:
            context = create_context(settings)

        mock_client_cls.assert_called_once_with(api_key="test-key", base_url=None)
        assert context.client is mock_client_cls.return_value
        assert context.settings is settings

    @pytest.mark.asyncio
    async def test_context_closes_client_on_exit(self, settings: DocspliceSettings) -> None:
        with patch("docsplice.context.AsyncOpenAI") as mock_client_cls:
            mock_client_cls.return_value.close = AsyncMock()
            async with annotation_context(settings) as context:
                mock_client_cls.return_value.close.assert_not_called()

        context.client.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_context_closes_client_on_error(self, settings: DocspliceSettings) -> None:
        with patch("docsplice.context.AsyncOpenAI") as mock_client_cls:
            mock_client_cls.return_value.close = AsyncMock()
            with pytest.raises(RuntimeError):
                async with annotation_context(settings):
                    raise RuntimeError("boom")

        mock_client_cls.return_value.close.assert_awaited_once()
