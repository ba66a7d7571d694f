import logging
from typing import Dict, List, Optional

import requests

from hero_api.config import OLLAMA_BASE_URL, OLLAMA_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class OllamaError(Exception):
    """Transport failure or non-2xx answer from the Ollama daemon."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


def _error_message(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        detail = data.get("error") or data.get("message")
        if detail:
            return f"Ollama API error: {detail}"

    return f"Ollama API error: {response.reason or response.status_code}"


class OllamaClient:
    def __init__(
        self,
        base_url: str = OLLAMA_BASE_URL,
        timeout: float = OLLAMA_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, path: str, payload: Dict) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.Timeout as e:
            raise OllamaError(f"Ollama request timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise OllamaError(f"Ollama unreachable: {e}") from e

        if not response.ok:
            raise OllamaError(_error_message(response), status_code=response.status_code)

        return response

    def create_model(self, model: str, base_model: str, system: str) -> None:
        """POST /api/create; builds `model` on top of `base_model` with a fixed system prompt."""
        self._post(
            "/api/create",
            {"model": model, "from": base_model, "system": system},
        )
        logger.info("Ollama model %s created from %s", model, base_model)

    def chat(self, model: str, messages: List[Dict[str, str]]) -> str:
        response = self._post(
            "/api/chat",
            {"model": model, "messages": messages, "stream": False},
        )

        try:
            data = response.json()
            return data["message"]["content"]
        except (ValueError, KeyError, TypeError) as e:
            raise OllamaError(f"Unexpected Ollama chat response: {e}") from e

    def is_up(self) -> bool:
        try:
            response = self.session.get(f"{self.base_url}/api/tags", timeout=2)
        except requests.RequestException:
            return False
        return response.status_code == 200
