"""
OpenAI LLM Provider
Lazy-loaded integration with OpenAI API.
Only imports dependencies when this provider is selected.
"""

from typing import Dict, Any, Optional
from fileqa.core.config import settings
from fileqa.core.logging import setup_logger

logger = setup_logger()


class OpenAIClient:
    """
    OpenAI LLM client with lazy dependency loading.
    """
    
    def __init__(self, api_key: Optional[str] = None):
        """
        Initialize OpenAI client.
        
        Args:
            api_key: OpenAI API key (defaults to OPENAI_API_KEY env var)
        """
        self.api_key = api_key or settings.OPENAI_API_KEY
        if not self.api_key:
            raise ValueError("OPENAI_API_KEY not found in environment variables")
        
        try:
            from openai import OpenAI
            self.client = OpenAI(api_key=self.api_key)
            logger.info("OpenAI client initialized successfully")
        except ImportError as e:
            raise ImportError(
                f"OpenAI SDK not installed. Install with: pip install openai. Error: {e}"
            )
    
    def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        temperature: float = 0.7,
        model: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Generate a response using OpenAI chat completions.
        
        Returns:
            Dict with 'text', 'provider', 'raw' keys
        """
        try:
            messages = []
            if system:
                messages.append({"role": "system", "content": system})
            messages.append({"role": "user", "content": prompt})
            
            response = self.client.chat.completions.create(
                model=model or settings.OPENAI_MODEL,
                messages=messages,
                temperature=temperature
            )
            
            text = response.choices[0].message.content or ""
            
            logger.info(f"OpenAI generation successful (model: {response.model})")
            
            return {
                "text": text,
                "provider": "openai",
                "raw": response
            }
            
        except Exception as e:
            logger.error(f"OpenAI generation failed: {str(e)}")
            raise


def call_openai(
    prompt: str,
    system: Optional[str] = None,
    temperature: float = 0.7
) -> Dict[str, Any]:
    """
    Convenience function to call OpenAI.
    """
    client = OpenAIClient()
    return client.generate(prompt, system, temperature)
