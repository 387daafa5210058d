"""Unit tests for the Telegram quiz bot client."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from sensei.delivery.telegram_client import QuizDeliveryError, TelegramQuizClient
from sensei.models.lesson import DeliveryPayload

BOT_URL = "https://bot.example.com/"


def _payload(i=1):
    return DeliveryPayload(
        question=f"Pregunta {i}",
        options=["a", "b", "c"],
        correct_option_id=2,
        explanation=f"✅ ¡Correcto! Pregunta {i} de 3",
    )


def _response(status_code=200, body=None):
    response = MagicMock()
    response.ok = status_code < 400
    response.status_code = status_code
    response.text = ""
    response.json.return_value = body if body is not None else {"status": "ok"}
    return response


@pytest.fixture
def sleep():
    return MagicMock()


@pytest.fixture
def client(sleep):
    return TelegramQuizClient(base_url=BOT_URL, sleep=sleep)


class TestInit:
    """Tests for client construction."""

    def test_missing_url(self):
        """Test an empty bot URL is rejected."""
        with pytest.raises(ValueError, match="TELEGRAM_BOT_URL"):
            TelegramQuizClient(base_url="")

    def test_trailing_slash_removed(self, client):
        """Test the base URL is normalized."""
        assert client.base_url == "https://bot.example.com"


class TestSendQuiz:
    """Tests for send_quiz()."""

    @patch("sensei.delivery.telegram_client.requests.post")
    def test_success(self, mock_post, client):
        """Test a quiz is posted as JSON."""
        mock_post.return_value = _response(body={"status": "ok", "message": "sent"})

        receipt = client.send_quiz(_payload())

        assert receipt.status == "ok"
        assert receipt.message == "sent"
        args, kwargs = mock_post.call_args
        assert args[0] == "https://bot.example.com/send-quiz"
        assert kwargs["json"]["correct_option_id"] == 2
        assert kwargs["headers"]["Content-Type"] == "application/json"

    @patch("sensei.delivery.telegram_client.requests.post")
    def test_http_error(self, mock_post, client):
        """Test a non-success status raises with the status code."""
        mock_post.return_value = _response(status_code=500)

        with pytest.raises(QuizDeliveryError, match="HTTP error! status: 500") as exc_info:
            client.send_quiz(_payload())

        assert exc_info.value.status_code == 500

    @patch("sensei.delivery.telegram_client.requests.post")
    def test_connection_error(self, mock_post, client):
        """Test connection failures are wrapped."""
        mock_post.side_effect = requests.ConnectionError("refused")

        with pytest.raises(QuizDeliveryError, match="Connection to quiz bot failed") as exc_info:
            client.send_quiz(_payload())

        assert exc_info.value.status_code is None

    @patch("sensei.delivery.telegram_client.requests.post")
    def test_invalid_body(self, mock_post, client):
        """Test a non-JSON body is reported as a delivery error."""
        response = _response()
        response.json.side_effect = ValueError("not json")
        mock_post.return_value = response

        with pytest.raises(QuizDeliveryError, match="Invalid response"):
            client.send_quiz(_payload())


class TestTestConnection:
    """Tests for test_connection()."""

    @patch("sensei.delivery.telegram_client.requests.get")
    def test_ok(self, mock_get, client):
        """Test a healthy bot."""
        mock_get.return_value = _response(body={"status": "ok"})

        assert client.test_connection() is True
        assert mock_get.call_args[0][0] == "https://bot.example.com/test"

    @patch("sensei.delivery.telegram_client.requests.get")
    def test_unhealthy(self, mock_get, client):
        """Test a bot reporting another status."""
        mock_get.return_value = _response(body={"status": "starting"})
        assert client.test_connection() is False

    @patch("sensei.delivery.telegram_client.requests.get")
    def test_unreachable(self, mock_get, client):
        """Test connection failures are reported as False."""
        mock_get.side_effect = requests.ConnectionError("refused")
        assert client.test_connection() is False


class TestSendQuizzes:
    """Tests for send_quizzes()."""

    @patch("sensei.delivery.telegram_client.requests.post")
    def test_sends_in_order_with_delay(self, mock_post, client, sleep):
        """Test quizzes are sent in order with a pause between them."""
        mock_post.return_value = _response()
        payloads = [_payload(i) for i in (1, 2, 3)]

        receipts = client.send_quizzes(payloads, delay_seconds=6)

        assert len(receipts) == 3
        sent = [call.kwargs["json"]["question"] for call in mock_post.call_args_list]
        assert sent == ["Pregunta 1", "Pregunta 2", "Pregunta 3"]
        assert sleep.call_count == 2
        sleep.assert_called_with(6)

    @patch("sensei.delivery.telegram_client.requests.post")
    def test_single_quiz_no_delay(self, mock_post, client, sleep):
        """Test no pause after the last quiz."""
        mock_post.return_value = _response()

        client.send_quizzes([_payload()])

        sleep.assert_not_called()

    @patch("sensei.delivery.telegram_client.requests.post")
    def test_aborts_on_first_failure(self, mock_post, client, sleep):
        """Test the batch stops at the first failed send."""
        mock_post.side_effect = [_response(), _response(status_code=502), _response()]

        with pytest.raises(QuizDeliveryError):
            client.send_quizzes([_payload(i) for i in (1, 2, 3)])

        assert mock_post.call_count == 2
        assert sleep.call_count == 1

    @patch("sensei.delivery.telegram_client.requests.post")
    def test_empty_batch(self, mock_post, client):
        """Test an empty batch sends nothing."""
        assert client.send_quizzes([]) == []
        mock_post.assert_not_called()
