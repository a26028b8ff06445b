"""
LLM Router
Selects the configured text-generation provider and calls it.
Every provider failure surfaces as GenerationError with the cause chained.
"""

from typing import Dict, Any, Optional
from fileqa.core.config import settings
from fileqa.core.errors import GenerationError
from fileqa.core.logging import setup_logger

logger = setup_logger()

SUPPORTED_PROVIDERS = ("gemini", "openai")


def get_provider() -> str:
    """
    Get the configured LLM provider.
    
    Returns:
        Provider name: 'none', 'gemini', 'openai' or 'auto'
    """
    return settings.LLM_PROVIDER


def _call_specific_provider(
    provider: str,
    prompt: str,
    system: Optional[str],
    temperature: float
) -> Dict[str, Any]:
    """
    Call one provider.
    
    Raises:
        GenerationError: If the provider is unavailable, unconfigured or fails
    """
    try:
        if provider == "gemini":
            from fileqa.llm.gemini_client import call_gemini
            logger.info("Using Gemini provider")
            return call_gemini(prompt, system, temperature)
        
        elif provider == "openai":
            from fileqa.llm.openai_client import call_openai
            logger.info("Using OpenAI provider")
            return call_openai(prompt, system, temperature)
    
    except ImportError as e:
        logger.error(f"{provider.capitalize()} provider not available: {str(e)}")
        raise GenerationError(f"{provider.capitalize()} provider not available") from e
    
    except ValueError as e:
        # Missing API key
        logger.error(f"{provider.capitalize()} provider not configured: {str(e)}")
        raise GenerationError(f"{provider.capitalize()} provider not configured") from e
    
    except Exception as e:
        logger.error(f"{provider.capitalize()} provider failed: {str(e)}")
        raise GenerationError(f"{provider.capitalize()} provider failed: {str(e)}") from e
    
    raise GenerationError(f"Unknown LLM provider '{provider}'")


def call_llm(
    prompt: str,
    system: Optional[str] = None,
    temperature: Optional[float] = None
) -> Dict[str, Any]:
    """
    Route a prompt to the active LLM provider.
    
    Provider selection:
    1) Provider named in LLM_PROVIDER ('gemini' or 'openai')
    2) 'auto': Gemini, then OpenAI if Gemini fails
    3) 'none': generation disabled
    
    Returns:
        {"text": str, "provider": str, "raw": object}
        
    Raises:
        GenerationError: If generation is disabled or every provider fails
    """
    provider = get_provider()
    temperature = settings.LLM_TEMPERATURE if temperature is None else temperature
    
    if provider == "none":
        logger.info("LLM provider not enabled")
        raise GenerationError(
            "LLM provider not enabled. Set LLM_PROVIDER to 'gemini', 'openai' or 'auto'."
        )
    
    if provider in SUPPORTED_PROVIDERS:
        return _call_specific_provider(provider, prompt, system, temperature)
    
    if provider == "auto":
        last_error = None
        for candidate in SUPPORTED_PROVIDERS:
            logger.info(f"Attempting provider: {candidate}")
            try:
                return _call_specific_provider(candidate, prompt, system, temperature)
            except GenerationError as e:
                logger.warning(f"Provider {candidate} failed, trying next provider")
                last_error = e
        raise GenerationError("All LLM providers failed") from last_error
    
    raise GenerationError(
        f"Unknown LLM provider '{provider}'. Set LLM_PROVIDER to 'none', 'gemini', 'openai' or 'auto'."
    )


def generate_text(prompt: str) -> str:
    """
    Text-in, text-out generation used by the answering step.
    
    Raises:
        GenerationError: If the provider fails or returns no text
    """
    result = call_llm(prompt)
    text = result.get("text")
    
    if not isinstance(text, str) or not text.strip():
        raise GenerationError(f"{result.get('provider', 'LLM')} returned an empty response")
    
    return text
