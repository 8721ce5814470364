from unittest.mock import patch

from shared import aws


class TestGetClient:
    """Clientes boto3 criados sob demanda e reutilizados."""

    def test_client_is_cached(self) -> None:
        with patch("shared.aws.boto3.client") as mock_client:
            first = aws.get_client("s3")
            second = aws.get_client("s3")
        assert first is second
        mock_client.assert_called_once_with("s3", region_name="us-east-1")

    def test_reset_clients(self) -> None:
        with patch("shared.aws.boto3.client") as mock_client:
            aws.get_client("cloudfront")
            aws.reset_clients()
            aws.get_client("cloudfront")
        assert mock_client.call_count == 2

