from unittest import mock

import pytest
import requests

from hero_api.llm.client import OllamaClient, OllamaError


def _response(status=200, json_data=None, reason="OK"):
    response = mock.Mock(spec=requests.Response)
    response.status_code = status
    response.ok = 200 <= status < 300
    response.reason = reason
    if json_data is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = json_data
    return response


def _client(response=None, error=None):
    session = mock.Mock(spec=requests.Session)
    if error is not None:
        session.post.side_effect = error
        session.get.side_effect = error
    else:
        session.post.return_value = response
        session.get.return_value = response
    return OllamaClient(base_url="http://ollama:11434/", timeout=5, session=session), session


def test_create_model_posts_expected_body():
    client, session = _client(_response(json_data={"status": "success"}))

    client.create_model("hero-abc", "llama3.2:latest", "You are Einstein, physicist")

    session.post.assert_called_once_with(
        "http://ollama:11434/api/create",
        json={
            "model": "hero-abc",
            "from": "llama3.2:latest",
            "system": "You are Einstein, physicist",
        },
        timeout=5,
    )


def test_non_2xx_reports_runtime_message():
    client, _ = _client(_response(status=404, json_data={"error": "model 'nope' not found"}, reason="Not Found"))

    with pytest.raises(OllamaError) as exc_info:
        client.create_model("hero-abc", "nope", "p")

    assert "model 'nope' not found" in str(exc_info.value)
    assert exc_info.value.status_code == 404


def test_non_2xx_without_json_uses_reason():
    client, _ = _client(_response(status=500, reason="Internal Server Error"))

    with pytest.raises(OllamaError, match="Internal Server Error"):
        client.create_model("hero-abc", "llama3.2:latest", "p")


def test_timeout_becomes_ollama_error():
    client, _ = _client(error=requests.Timeout("slow"))

    with pytest.raises(OllamaError, match="timed out"):
        client.create_model("hero-abc", "llama3.2:latest", "p")


def test_connection_error_becomes_ollama_error():
    client, _ = _client(error=requests.ConnectionError("refused"))

    with pytest.raises(OllamaError, match="unreachable"):
        client.create_model("hero-abc", "llama3.2:latest", "p")


def test_chat_returns_message_content():
    client, session = _client(
        _response(json_data={"message": {"role": "assistant", "content": "E = mc^2"}, "done": True})
    )
    messages = [{"role": "user", "content": "What is your famous equation?"}]

    assert client.chat("hero-abc", messages) == "E = mc^2"
    _, kwargs = session.post.call_args
    assert kwargs["json"] == {"model": "hero-abc", "messages": messages, "stream": False}


def test_chat_with_unexpected_body_raises():
    client, _ = _client(_response(json_data={"done": True}))

    with pytest.raises(OllamaError):
        client.chat("hero-abc", [])


def test_is_up():
    up, _ = _client(_response(json_data={"models": []}))
    down, _ = _client(error=requests.ConnectionError("refused"))

    assert up.is_up() is True
    assert down.is_up() is False
