"""Run Alembic migrations programmatically — invoked via the migrate Lambda."""

import io
import json
import logging
import os
from urllib.parse import quote

import boto3
from alembic.config import Config

from alembic import command

logger = logging.getLogger(__name__)

ALEMBIC_INI = os.environ.get("ALEMBIC_INI", "/var/task/alembic.ini")
ALEMBIC_SCRIPT_LOCATION = os.environ.get("ALEMBIC_SCRIPT_LOCATION", "/var/task/alembic")


def _load_credentials_from_secret(secret_arn: str) -> None:
    """Fetch database credentials from Secrets Manager and set env vars."""
    sm = boto3.client("secretsmanager", region_name=os.environ.get("AWS_REGION", "us-east-1"))
    secret = json.loads(sm.get_secret_value(SecretId=secret_arn)["SecretString"])
    user = secret.get("username", "bookings")
    password = secret.get("password", "")
    host = secret.get("host", "localhost")
    port = secret.get("port", 5432)
    dbname = secret.get("dbname", "bookings")
    os.environ["DATABASE_URL"] = f"postgresql://{quote(user, safe='')}@{host}:{port}/{dbname}"
    os.environ["DATABASE_PASSWORD"] = password


def run_migrations() -> dict[str, str]:
    secret_arn = os.environ.get("DATABASE_SECRET_ARN")
    if secret_arn:
        _load_credentials_from_secret(secret_arn)

    cfg = Config(ALEMBIC_INI)
    cfg.set_main_option("script_location", ALEMBIC_SCRIPT_LOCATION)

    stderr_buf = io.StringIO()
    stream_handler = logging.StreamHandler(stderr_buf)
    alembic_logger = logging.getLogger("alembic")
    alembic_logger.addHandler(stream_handler)

    try:
        command.upgrade(cfg, "head")
        output = stderr_buf.getvalue()
        logger.info("Migration complete: %s", output)
        return {"status": "success", "output": output}
    except Exception as e:
        logger.error("Migration failed: %s", e)
        raise
    finally:
        alembic_logger.removeHandler(stream_handler)
