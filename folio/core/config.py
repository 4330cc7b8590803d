# folio/core/config.py
from pydantic import BaseModel
from pydantic_settings import BaseSettings
from typing import List
import os


class Skill(BaseModel):
    name: str
    progress: int


class Settings(BaseSettings):
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_api_host: str = "generativelanguage.googleapis.com"
    gemini_timeout: float | None = None
    proxy_url: str = ""
    owner_name: str = "Omar Alodwan"
    data_dir: str = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "..", "data")
    cv_pdf: str = "EN-CV-Alodwan.pdf"
    cv_text_fallbacks: List[str] = ["cvtxt.txt", "cv-text.txt"]
    cv_context_file: str = "cv-context.txt"
    skills: List[Skill] = [
        Skill(name="Python", progress=90),
        Skill(name="FastAPI", progress=80),
        Skill(name="Machine Learning", progress=75),
        Skill(name="SQL", progress=70),
    ]
    allow_client_credential: bool = False
    reveal_chunk_size: int = 3
    reveal_interval: float = 0.005
    log_level: str = "INFO"

    class Config:
        env_file = ".env"


def get_settings() -> Settings:
    """Read settings from the environment on every call so a credential set after startup is seen."""
    return Settings()


settings = Settings()
