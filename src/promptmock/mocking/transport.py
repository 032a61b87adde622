"""
HTTP mock for completions endpoints.

CompletionsMockHandler answers ``POST .../completions`` from a
MockResponseRegistry. It plugs into httpx either directly::

    client = httpx.Client(
        base_url="https://api.example.com/v1",
        transport=httpx.MockTransport(handler),
    )

or as a respx side effect::

    respx.post(url__regex=r".*/completions$").mock(side_effect=handler)
"""

import json
import logging
from decimal import Decimal
from typing import Any

import httpx
from pydantic import ValidationError

from promptmock.config.models import GenerationConfig
from promptmock.mocking.registry import MockResponseRegistry, NoMockResponseError
from promptmock.models.request import CompletionRequest

logger = logging.getLogger(__name__)

COMPLETIONS_SUFFIX = "/completions"
DEFAULT_TEMPERATURE = Decimal("1")


def _error(status_code: int, message: str, error_type: str, code: str | None = None) -> httpx.Response:
    return httpx.Response(
        status_code,
        json={"error": {"message": message, "type": error_type, "code": code}},
    )


class CompletionsMockHandler:
    """Serves mocked completions from a registry.

    Request fields missing from the JSON body fall back to the defaults
    given here, so that a body carrying only ``prompt`` and ``temperature``
    matches fixtures registered with the same generation settings.

    Attributes:
        registry: Source of mocked outputs
        defaults: Generation settings for fields absent from a request
        model: Model name reported in responses
    """

    def __init__(
        self,
        registry: MockResponseRegistry,
        defaults: GenerationConfig | None = None,
        model: str = "mock-model",
    ) -> None:
        self.registry = registry
        self.defaults = defaults or GenerationConfig()
        self.model = model

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if not request.url.path.endswith(COMPLETIONS_SUFFIX):
            return _error(404, f"Unknown endpoint {request.url.path}", "invalid_request_error")
        if request.method != "POST":
            return _error(405, f"Method {request.method} not allowed", "invalid_request_error")

        try:
            completion_request = self.parse_request(request.content)
        except ValueError as e:
            return _error(400, str(e), "invalid_request_error")

        try:
            response = self.registry.complete(completion_request, model=self.model)
        except NoMockResponseError as e:
            logger.warning("%s", e)
            return _error(404, str(e), "invalid_request_error", code="no_mock_response")

        return httpx.Response(200, json=response.model_dump(mode="json"))

    def parse_request(self, content: bytes) -> CompletionRequest:
        """Decode a JSON request body into a CompletionRequest.

        Raises:
            ValueError: If the body is not valid JSON or fails validation
        """
        try:
            body: Any = json.loads(content or b"{}", parse_float=Decimal)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON body: {e}") from e
        if not isinstance(body, dict):
            raise ValueError("Request body must be a JSON object")
        if "prompt" not in body:
            raise ValueError("Missing required field 'prompt'")

        fields = {
            "prompt": body["prompt"],
            "temperature": body.get("temperature", DEFAULT_TEMPERATURE),
            "max_tokens": body.get("max_tokens", self.defaults.max_tokens),
            "n": body.get("n", self.defaults.n),
            "top_p": body.get("top_p", self.defaults.top_p),
            "stop": body.get("stop", self.defaults.stop),
            "stream": body.get("stream", self.defaults.stream),
        }
        try:
            return CompletionRequest(**fields)
        except ValidationError as e:
            raise ValueError(f"Invalid completion request: {e.error_count()} errors") from e
