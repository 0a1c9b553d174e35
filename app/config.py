"""Environment-driven settings.

Loaded once per process. The bank base URL is the only knob that affects
the payment pipeline; retry, breaker and timeout numbers are fixed in
app.constants.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed view of runtime configuration from environment variables."""

    service_name: str = "payment-gateway"
    log_level: str = "INFO"
    bank_simulator_base_url: str = "http://localhost:8080"
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
