from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SLOTBOARD_", env_file=".env", extra="ignore")

    API_URL: str = "http://localhost:8000"
    SESSION_FILE: Path = Path.home() / ".slotboard" / "session.json"
    TIMEOUT: float = 15.0

    # retry letture: 1s, 2s, 4s, 8s tra i 5 tentativi
    MAX_ATTEMPTS: int = 5
    BASE_DELAY: float = 1.0

    # quante domeniche mostrare nel selettore
    WEEKS_AHEAD: int = 8
