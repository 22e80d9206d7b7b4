from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Remote configuration document (http(s) URL or local path), read once at startup
    statusboard_config_url: str = "http://localhost:8080/config.json"

    # Polling cadence (seconds)
    statusboard_poll_interval: float = 3.0
    statusboard_simulation_interval: float = 1.5

    # Event log
    statusboard_log_capacity: int = 20
    statusboard_ambient_event_rate: float = 0.05

    # Canonical status for a missing/empty upstream status token
    statusboard_empty_status_default: str = "DEGRADED"

    # Authorization header prefix for upstream calls ("" = send the key verbatim)
    statusboard_auth_scheme: str = ""

    # HTTP client timeouts (seconds)
    statusboard_http_connect_timeout: float = 5.0
    statusboard_http_read_timeout: float = 10.0

    # Logging
    statusboard_log_level: str = "info"

    # CORS
    statusboard_cors_origins: str = "http://localhost:5173"

    model_config = {"env_prefix": "", "case_sensitive": False, "env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
