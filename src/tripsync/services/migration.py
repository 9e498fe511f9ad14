"""Run Alembic migrations programmatically, invoked via the migrate Lambda."""

import io
import json
import logging
import os

import boto3
from alembic.config import Config

from alembic import command

logger = logging.getLogger(__name__)

DEFAULT_ALEMBIC_INI = "/var/task/alembic.ini"


def _load_credentials_from_secret(secret_arn: str) -> None:
    """Fetch database credentials from Secrets Manager and set the DB_* env vars."""
    sm = boto3.client("secretsmanager", region_name=os.environ.get("AWS_REGION", "us-east-1"))
    secret = json.loads(sm.get_secret_value(SecretId=secret_arn)["SecretString"])
    os.environ["DB_USER"] = secret.get("username", "tripsync")
    os.environ["DB_PASSWORD"] = secret.get("password", "")
    os.environ["DB_HOST"] = secret.get("host", os.environ.get("DB_HOST", ""))
    os.environ["DB_PORT"] = str(secret.get("port", 5432))
    os.environ["DB_NAME"] = secret.get("dbname", os.environ.get("DB_NAME", "tripsync"))


def run_migrations(ini_path: str | None = None) -> dict[str, str]:
    secret_arn = os.environ.get("DB_SECRET_ARN")
    if secret_arn:
        _load_credentials_from_secret(secret_arn)

    ini_path = ini_path or os.environ.get("ALEMBIC_CONFIG", DEFAULT_ALEMBIC_INI)
    cfg = Config(ini_path)
    cfg.set_main_option("script_location", os.path.join(os.path.dirname(ini_path), "alembic"))

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
