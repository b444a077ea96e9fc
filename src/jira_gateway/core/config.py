"""Configuration management for the Jira tool gateway."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    # Jira connection
    jira_url: str = Field(default="", alias="JIRA_URL")
    jira_access_token: str = Field(default="", alias="JIRA_ACCESS_TOKEN")
    jira_timeout: float = Field(default=30.0, alias="JIRA_TIMEOUT")
    # Self-signed certificates are common on private Jira deployments, so
    # certificate validation is off unless explicitly enabled.
    jira_verify_ssl: bool = Field(default=False, alias="JIRA_VERIFY_SSL")
    # 0 means every batch item is in flight at once
    jira_batch_concurrency: int = Field(default=0, alias="JIRA_BATCH_CONCURRENCY")

    # Transport
    transport: str = Field(default="stdio", alias="TRANSPORT")
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8003, alias="PORT")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="console", alias="LOG_FORMAT")

    # Service info
    service_name: str = Field(default="jira-mcp-server", alias="SERVICE_NAME")
    service_version: str = Field(default="2.4.0", alias="SERVICE_VERSION")

    def missing_required(self) -> list[str]:
        """Names of required environment variables that are not set."""
        missing = []
        if not self.jira_url:
            missing.append("JIRA_URL")
        if not self.jira_access_token:
            missing.append("JIRA_ACCESS_TOKEN")
        return missing


# Global settings instance
settings = Settings()
