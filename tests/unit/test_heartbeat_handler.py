"""Unit tests for WebSocket heartbeat handler."""

from unittest.mock import MagicMock, patch

from handlers.heartbeat import handler


def test_heartbeat_handler():
    dynamo, apigw = MagicMock(), MagicMock()
    with (
        patch("handlers.heartbeat.get_dynamo_client", return_value=dynamo),
        patch("handlers.heartbeat.get_apigw_client", return_value=apigw),
        patch("handlers.heartbeat.cleanup_stale_connections") as mock_cleanup,
    ):
        mock_cleanup.return_value = {"active": 3, "cleaned": 1}

        result = handler({}, None)

        assert result["statusCode"] == 200
        assert result["body"] == "Heartbeat: 3 active, 1 cleaned"
        mock_cleanup.assert_called_once_with(dynamo, apigw, "Connections", "Subscriptions")
