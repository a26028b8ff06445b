"""
LLM Provider Module
Text-generation backends for Gemini and OpenAI.
"""

from fileqa.llm.router import call_llm, generate_text

__all__ = ["call_llm", "generate_text"]
