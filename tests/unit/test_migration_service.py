import json
import os
from unittest.mock import MagicMock, patch

import pytest

from tripsync.services.migration import _load_credentials_from_secret, run_migrations


@patch("tripsync.services.migration.command")
@patch("tripsync.services.migration._load_credentials_from_secret")
def test_run_migrations_success(mock_creds, mock_command):
    with patch.dict("os.environ", {"DB_SECRET_ARN": ""}):
        with patch("tripsync.services.migration.Config"):
            result = run_migrations()
            assert result["status"] == "success"
            mock_creds.assert_not_called()
            mock_command.upgrade.assert_called_once()


@patch("tripsync.services.migration.command")
@patch("tripsync.services.migration._load_credentials_from_secret")
def test_run_migrations_loads_secret_when_configured(mock_creds, mock_command):
    with patch.dict("os.environ", {"DB_SECRET_ARN": "arn:aws:secretsmanager:us-east-1:1:secret:db"}):
        with patch("tripsync.services.migration.Config"):
            run_migrations()
    mock_creds.assert_called_once_with("arn:aws:secretsmanager:us-east-1:1:secret:db")


@patch("tripsync.services.migration.command")
def test_run_migrations_raises_on_failure(mock_command):
    mock_command.upgrade.side_effect = Exception("connection refused")
    with patch.dict("os.environ", {"DB_SECRET_ARN": ""}):
        with patch("tripsync.services.migration.Config"):
            with pytest.raises(Exception, match="connection refused"):
                run_migrations()


def test_load_credentials_sets_db_env():
    secret = {"username": "admin", "password": "s3cret", "host": "db.internal", "port": 5433, "dbname": "trips"}
    client = MagicMock()
    client.get_secret_value.return_value = {"SecretString": json.dumps(secret)}

    with patch.dict("os.environ", {}, clear=True):
        with patch("tripsync.services.migration.boto3") as mock_boto3:
            mock_boto3.client.return_value = client
            _load_credentials_from_secret("arn:secret")

        assert os.environ["DB_USER"] == "admin"
        assert os.environ["DB_PASSWORD"] == "s3cret"
        assert os.environ["DB_HOST"] == "db.internal"
        assert os.environ["DB_PORT"] == "5433"
        assert os.environ["DB_NAME"] == "trips"
