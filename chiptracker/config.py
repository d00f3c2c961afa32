"""Application configuration."""
import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


@dataclass
class Config:
    """Application configuration loaded from environment variables."""
    
    # Sessions
    session_code_length: int = int(os.getenv("SESSION_CODE_LENGTH", "6"))
    
    # Server
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")  # Comma-separated
    static_dir: Optional[str] = os.getenv("STATIC_DIR") or None
    
    # CLI
    api_url: str = os.getenv("API_URL", "http://localhost:3000")
    
    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


config = Config()
