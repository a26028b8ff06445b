"""
Gemini LLM Provider
Lazy-loaded integration with Google Gemini API.
Only imports dependencies when this provider is selected.
"""

from typing import Dict, Any, Optional
from fileqa.core.config import settings
from fileqa.core.logging import setup_logger

logger = setup_logger()


class GeminiClient:
    """
    Gemini LLM client with lazy dependency loading.
    """
    
    def __init__(self, api_key: Optional[str] = None):
        """
        Initialize Gemini client.
        
        Args:
            api_key: Google API key (defaults to GEMINI_API_KEY env var)
        """
        self.api_key = api_key or settings.GEMINI_API_KEY
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY not found in environment variables")
        
        # Lazy import - only load when needed
        try:
            from google import genai
            from google.genai import types
            self.genai = genai
            self.types = types
            self.client = genai.Client(api_key=self.api_key)
            logger.info("Gemini client initialized successfully")
        except ImportError as e:
            raise ImportError(
                f"Google GenAI SDK not installed. Install with: pip install google-genai. Error: {e}"
            )
    
    def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        temperature: float = 0.7,
        model: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Generate a response using Gemini.
        
        Args:
            prompt: User prompt
            system: System instruction (optional)
            temperature: Sampling temperature
            model: Model name (defaults to GEMINI_MODEL)
            
        Returns:
            Dict with 'text', 'provider', 'raw' keys
        """
        try:
            config_args = {"temperature": temperature}
            if system:
                config_args["system_instruction"] = system
            
            config = self.types.GenerateContentConfig(**config_args)
            
            response = self.client.models.generate_content(
                model=model or settings.GEMINI_MODEL,
                contents=prompt,
                config=config
            )
            
            # Extract text
            text = ""
            if response.candidates and response.candidates[0].content.parts:
                for part in response.candidates[0].content.parts:
                    if hasattr(part, 'text') and part.text:
                        text += part.text
            
            logger.info("Gemini generation successful")
            
            return {
                "text": text,
                "provider": "gemini",
                "raw": response
            }
            
        except Exception as e:
            logger.error(f"Gemini generation failed: {str(e)}")
            raise


def call_gemini(
    prompt: str,
    system: Optional[str] = None,
    temperature: float = 0.7
) -> Dict[str, Any]:
    """
    Convenience function to call Gemini.
    
    Args:
        prompt: User prompt
        system: System instruction
        temperature: Sampling temperature
        
    Returns:
        Dict with response
    """
    client = GeminiClient()
    return client.generate(prompt, system, temperature)
