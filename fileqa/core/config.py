import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


DEFAULT_ANSWER_PROMPT_TEMPLATE = (
    "Based on the following data, answer the question accurately, using only "
    "the data provided, in no more than {max_words} words. "
    "Use line breaks where they help readability.\n"
    "{context}\n\n"
    "Question: {question}"
)


class Settings:
    """Application settings loaded from environment variables."""
    
    def __init__(self):
        self.APP_NAME = os.environ.get("APP_NAME", "File QA Service")
        self.ENV = os.environ.get("ENV", "development")
        self.LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
        
        # LLM Provider Configuration
        self.LLM_PROVIDER = os.environ.get("LLM_PROVIDER", "gemini").lower()
        self.GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY")
        self.GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-1.5-flash")
        self.OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")
        self.OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-4o-mini")
        self.LLM_TEMPERATURE = float(os.environ.get("LLM_TEMPERATURE", "0.7"))
        
        # Answer prompt; {context}, {question} and {max_words} are substituted
        self.ANSWER_MAX_WORDS = int(os.environ.get("ANSWER_MAX_WORDS", "100"))
        self.ANSWER_PROMPT_TEMPLATE = os.environ.get(
            "ANSWER_PROMPT_TEMPLATE", DEFAULT_ANSWER_PROMPT_TEMPLATE
        )
        
        # Google Drive Configuration
        self.DRIVE_ACCESS_TOKEN = os.environ.get("DRIVE_ACCESS_TOKEN")
        self.DRIVE_FOLDER_ID = os.environ.get("DRIVE_FOLDER_ID")
        self.DRIVE_API_BASE = os.environ.get("DRIVE_API_BASE", "https://www.googleapis.com")
        self.DRIVE_TIMEOUT_SECONDS = float(os.environ.get("DRIVE_TIMEOUT_SECONDS", "30"))
        
        self.CORS_ORIGINS = [
            origin.strip()
            for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]
    
    def __repr__(self):
        return (
            f"Settings(APP_NAME={self.APP_NAME}, ENV={self.ENV}, "
            f"LOG_LEVEL={self.LOG_LEVEL}, LLM_PROVIDER={self.LLM_PROVIDER}, "
            f"GEMINI_MODEL={self.GEMINI_MODEL}, ANSWER_MAX_WORDS={self.ANSWER_MAX_WORDS})"
        )


settings = Settings()
