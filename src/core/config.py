import json
from os import environ
from typing import Any

import boto3
from pydantic import BaseModel, ConfigDict, Field

_cached_secrets: dict[str, str] = {}


def _resolve_secret(direct_env: str, arn_env: str) -> str:
    """Fetch a secret from the environment or Secrets Manager, with caching."""
    if direct_env in _cached_secrets:
        return _cached_secrets[direct_env]

    # Local dev: use env var directly
    direct = environ.get(direct_env, "")
    if direct:
        _cached_secrets[direct_env] = direct
        return direct

    # Deployed: fetch from Secrets Manager by ARN
    arn = environ.get(arn_env, "")
    if not arn:
        return ""

    client = boto3.client("secretsmanager", region_name=environ.get("AWS_REGION", "us-east-1"))
    _cached_secrets[direct_env] = client.get_secret_value(SecretId=arn)["SecretString"]
    return _cached_secrets[direct_env]


def _resolve_database_credentials() -> dict[str, Any]:
    """Database credentials as RDS writes them (username, password, host, port, dbname).

    Read once per process from the secret named by DATABASE_SECRET_ARN;
    without one, only DATABASE_PASSWORD is used.
    """
    arn = environ.get("DATABASE_SECRET_ARN", "")
    if not arn:
        password = environ.get("DATABASE_PASSWORD", "")
        return {"password": password} if password else {}

    if arn not in _cached_secrets:
        client = boto3.client("secretsmanager", region_name=environ.get("AWS_REGION", "us-east-1"))
        _cached_secrets[arn] = client.get_secret_value(SecretId=arn)["SecretString"]
    return json.loads(_cached_secrets[arn])


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    aws_region: str
    environment: str
    database_url: str = ""
    database_password: str = ""
    database_secret_arn: str | None = None
    database_credentials: dict[str, Any] = Field(default_factory=dict)
    database_connect_timeout: int = 10
    paystack_secret_key: str = ""
    paystack_base_url: str = "https://api.paystack.co"
    paystack_currency: str = "NGN"
    paystack_timeout_seconds: float = 10.0
    brevo_api_key: str = ""
    brevo_sender_email: str = ""
    brevo_sender_name: str = "P-ZED Homes"
    brevo_base_url: str = "https://api.brevo.com"

    def missing(self, *fields: str) -> list[str]:
        """Names of the given fields that are unset or empty."""
        return [name for name in fields if not getattr(self, name)]

    def missing_store_settings(self) -> list[str]:
        """Store endpoint plus a privileged credential, either direct or via Secrets Manager."""
        missing = self.missing("database_url")
        if not (self.database_password or self.database_secret_arn):
            missing.append("database_password")
        return missing


_cached_config: Config | None = None


def _reset_config() -> None:
    """Reset cached config — for testing only."""
    global _cached_config
    _cached_config = None
    _cached_secrets.clear()


def get_config() -> Config:
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    _cached_config = Config(
        aws_region=environ.get("AWS_REGION", "us-east-1"),
        environment=environ.get("ENVIRONMENT", "local"),
        database_url=environ.get("DATABASE_URL", ""),
        database_password=environ.get("DATABASE_PASSWORD", ""),
        database_secret_arn=environ.get("DATABASE_SECRET_ARN"),
        database_credentials=_resolve_database_credentials(),
        database_connect_timeout=int(environ.get("DATABASE_CONNECT_TIMEOUT", "10")),
        paystack_secret_key=_resolve_secret("PAYSTACK_SECRET_KEY", "PAYSTACK_SECRET_ARN"),
        paystack_base_url=environ.get("PAYSTACK_BASE_URL", "https://api.paystack.co"),
        paystack_currency=environ.get("PAYSTACK_CURRENCY", "NGN"),
        paystack_timeout_seconds=float(environ.get("PAYSTACK_TIMEOUT_SECONDS", "10")),
        brevo_api_key=_resolve_secret("BREVO_API_KEY", "BREVO_SECRET_ARN"),
        brevo_sender_email=environ.get("BREVO_SENDER_EMAIL", ""),
        brevo_sender_name=environ.get("BREVO_SENDER_NAME", "P-ZED Homes"),
        brevo_base_url=environ.get("BREVO_BASE_URL", "https://api.brevo.com"),
    )
    return _cached_config
