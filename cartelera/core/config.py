import ssl
from pathlib import Path
from typing import Any

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url


ENV_PATH = Path(__file__).resolve().parents[2] / ".env"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_PATH, env_file_encoding="utf-8", extra="ignore")

    # App
    env: str = "dev"
    service_name: str = "cartelera-api"
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"

    # Database: DATABASE_URL wins, otherwise the URL is assembled from the DB_* parts
    database_url: str = ""
    db_driver: str = "postgresql+asyncpg"
    db_server: str = "localhost"
    db_port: int | None = None
    db_user: str | None = None
    db_pass: SecretStr | None = None
    db_name: str = "cartelera"
    db_encrypt: bool = True
    db_trust_server_certificate: bool = True

    listings_table: str = "Cartelera3067"

    # true: refuse to start without a store; false: start and answer 500 per request
    db_fail_fast: bool = True
    # pass driver error text through to clients
    expose_store_errors: bool = True

    # Telemetry
    otel_enabled: bool = False
    otlp_endpoint: str = "http://localhost:4318"  # Jaeger OTLP HTTP

    @property
    def sqlalchemy_url(self) -> URL:
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_pass.get_secret_value() if self.db_pass else None,
            host=self.db_server,
            port=self.db_port,
            database=self.db_name,
        )

    def connect_args(self) -> dict[str, Any]:
        """
        Driver-level connect arguments for the TLS flags.
        Only asyncpg takes an SSLContext; other drivers get nothing.
        """
        if not self.db_encrypt or self.sqlalchemy_url.drivername != "postgresql+asyncpg":
            return {}

        ctx = ssl.create_default_context()
        if self.db_trust_server_certificate:
            ctx.check_hostname = False
            ctx.verify_mode = ssl.CERT_NONE
        return {"ssl": ctx}


settings = Settings()
