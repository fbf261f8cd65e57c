"""
Configuration and constants for FitPlan Microservice.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """
    Application settings loaded from environment variables.

    Values are read when the instance is created, so a fresh ``Settings()``
    picks up the current environment. Keyword overrides replace individual
    values, which is how tests build substituted configurations.
    """

    def __init__(self, **overrides):
        # Gemini Configuration
        self.GOOGLE_GEMINI_API_KEY: str = os.getenv("GOOGLE_GEMINI_API_KEY", "")
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        self.TAGLINE_MODEL: str = os.getenv("TAGLINE_MODEL", "gemini-2.5-flash")

        # AI Temperature Settings
        self.TEMPERATURE_PLAN: float = 0.7  # Fixed, bounded randomness

        # ElevenLabs Configuration
        self.ELEVENLABS_API_KEY: str = os.getenv("ELEVENLABS_API_KEY", "")
        self.ELEVENLABS_VOICE_ID: str = os.getenv("ELEVENLABS_VOICE_ID", "21m00Tcm4TlvDq8ikWAM")
        self.ELEVENLABS_MODEL_ID: str = "eleven_monolingual_v1"

        # Request Configuration
        self.HTTP_TIMEOUT: int = int(os.getenv("HTTP_TIMEOUT", 60))

        # Plan Storage
        self.PLAN_STORE_DIR: str = os.getenv("PLAN_STORE_DIR", "data")
        self.MAX_SAVED_PLANS: int = 10

        # Image Cache
        self.IMAGE_CACHE_SIZE: int = int(os.getenv("IMAGE_CACHE_SIZE", 256))

        # Server Configuration
        self.PORT: int = int(os.getenv("PORT", 10000))
        self.HOST: str = "0.0.0.0"
        self.RATE_LIMIT_ENABLED: bool = _env_flag("RATE_LIMIT_ENABLED")

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self, key, value)

    def missing_keys(self) -> list[str]:
        """Names of required credentials that are not configured."""
        missing = []

        if not self.GOOGLE_GEMINI_API_KEY:
            missing.append("GOOGLE_GEMINI_API_KEY")
        if not self.ELEVENLABS_API_KEY:
            missing.append("ELEVENLABS_API_KEY")

        return missing

    def validate(self) -> None:
        """Validate required configuration on startup."""
        missing = self.missing_keys()

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
