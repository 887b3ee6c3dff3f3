#!/usr/bin/env python3
from dataclasses import dataclass
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

DEFAULT_PROVIDERS_FILE = Path(__file__).parent / "data" / "media_providers.yaml"


@dataclass
class Config:
    """Application configuration"""
    providers_file: Path = Path(os.getenv("STREAMTITLE_PROVIDERS_FILE", str(DEFAULT_PROVIDERS_FILE)))
    fetch_timeout: float = float(os.getenv("STREAMTITLE_FETCH_TIMEOUT", "8"))
    user_agent: str = os.getenv("STREAMTITLE_USER_AGENT", "streamtitle/0.1")
    enable_debug: bool = os.getenv("STREAMTITLE_DEBUG", "false").lower() == "true"

    # Disabled providers are only hidden in listings unless this is turned off
    match_disabled_providers: bool = os.getenv("STREAMTITLE_MATCH_DISABLED_PROVIDERS", "true").lower() in ["true", "1", "yes"]

config = Config()
