"""
Tests for LLM provider routing.
"""

from unittest.mock import patch
import pytest
from fileqa.core.errors import GenerationError
from fileqa.llm import router
from fileqa.llm.router import call_llm, generate_text


@pytest.fixture
def llm_settings(monkeypatch):
    """Isolated provider settings."""
    monkeypatch.setattr(router.settings, "LLM_PROVIDER", "gemini")
    monkeypatch.setattr(router.settings, "GEMINI_API_KEY", "test-key")
    monkeypatch.setattr(router.settings, "OPENAI_API_KEY", None)
    return router.settings


class TestCallLLM:
    """Tests for call_llm provider selection."""
    
    def test_none_provider_raises(self, llm_settings):
        llm_settings.LLM_PROVIDER = "none"
        
        with pytest.raises(GenerationError):
            call_llm("hello")
    
    def test_unknown_provider_raises(self, llm_settings):
        llm_settings.LLM_PROVIDER = "mystery"
        
        with pytest.raises(GenerationError):
            call_llm("hello")
    
    def test_gemini_selected(self, llm_settings):
        response = {"text": "hi", "provider": "gemini", "raw": None}
        with patch("fileqa.llm.gemini_client.call_gemini", return_value=response) as mock_gemini:
            assert call_llm("hello") == response
        
        mock_gemini.assert_called_once_with("hello", None, llm_settings.LLM_TEMPERATURE)
    
    def test_provider_exception_wrapped(self, llm_settings):
        fault = RuntimeError("quota exceeded")
        with patch("fileqa.llm.gemini_client.call_gemini", side_effect=fault):
            with pytest.raises(GenerationError) as excinfo:
                call_llm("hello")
        
        assert excinfo.value.__cause__ is fault
    
    def test_missing_key_wrapped(self, llm_settings):
        with patch("fileqa.llm.gemini_client.call_gemini", side_effect=ValueError("GEMINI_API_KEY not found")):
            with pytest.raises(GenerationError, match="not configured"):
                call_llm("hello")
    
    def test_auto_falls_back_to_openai(self, llm_settings):
        llm_settings.LLM_PROVIDER = "auto"
        response = {"text": "from openai", "provider": "openai", "raw": None}
        
        with patch("fileqa.llm.gemini_client.call_gemini", side_effect=RuntimeError("down")), \
                patch("fileqa.llm.openai_client.call_openai", return_value=response):
            assert call_llm("hello") == response


class TestGenerateText:
    """Tests for generate_text."""
    
    def test_returns_text(self, llm_settings):
        with patch("fileqa.llm.router.call_llm", return_value={"text": "42", "provider": "gemini"}):
            assert generate_text("prompt") == "42"
    
    def test_empty_text_raises(self, llm_settings):
        with patch("fileqa.llm.router.call_llm", return_value={"text": "", "provider": "gemini"}):
            with pytest.raises(GenerationError):
                generate_text("prompt")
