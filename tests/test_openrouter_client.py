"""Tests for the OpenRouter client."""

import json

import httpx
import pytest

from code_vuln_analyzer.config import Settings
from code_vuln_analyzer.errors import (
    EmptyResponseError,
    MissingCredentialError,
    RateLimitedError,
    TransportError,
    UnauthorizedError,
)
from code_vuln_analyzer.openrouter_client import OpenRouterClient
from code_vuln_analyzer.prompts import build_analysis_prompt, build_enhancement_prompt, extract_code_block

API_URL = "https://openrouter.test/api/v1/chat/completions"


def _client(handler) -> OpenRouterClient:
    settings = Settings(api_url=API_URL, site_url="https://app.test")
    return OpenRouterClient(settings, transport=httpx.MockTransport(handler))


def _completion(content) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class TestRequest:
    """Test the outgoing request."""

    async def test_request_shape(self):
        """Test headers and body sent to the endpoint."""
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["request"] = request
            return httpx.Response(200, json=_completion("[]"))

        result = await _client(handler).request_analysis("eval(x)", "js", "some/model", "sk-test")

        assert result == "[]"
        request = captured["request"]
        assert request.method == "POST"
        assert str(request.url) == API_URL
        assert request.headers["Authorization"] == "Bearer sk-test"
        assert request.headers["HTTP-Referer"] == "https://app.test"
        assert request.headers["X-Title"] == "Code Vulnerability Analyzer"

        body = json.loads(request.content)
        assert body["model"] == "some/model"
        assert body["temperature"] == 0.1
        assert body["max_tokens"] == 2048
        assert body["messages"] == [
            {"role": "user", "content": build_analysis_prompt("eval(x)", "js")}
        ]

    async def test_missing_credential_makes_no_request(self):
        """Test a missing key fails before any network call."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=_completion("[]"))

        with pytest.raises(MissingCredentialError):
            await _client(handler).request_analysis("x", "js", "m", None)
        assert calls == []


class TestErrors:
    """Test mapping of failures to the error taxonomy."""

    async def test_unauthorized(self):
        """Test HTTP 401 maps to UnauthorizedError."""
        client = _client(lambda r: httpx.Response(401, json={"error": {"message": "bad key"}}))
        with pytest.raises(UnauthorizedError):
            await client.request_analysis("x", "py", "m", "sk-test")

    async def test_rate_limited(self):
        """Test HTTP 429 maps to RateLimitedError."""
        client = _client(lambda r: httpx.Response(429, json={"error": {"message": "slow down"}}))
        with pytest.raises(RateLimitedError):
            await client.request_analysis("x", "py", "m", "sk-test")

    async def test_server_error_uses_error_message(self):
        """Test other statuses map to TransportError with the endpoint's message."""
        client = _client(lambda r: httpx.Response(502, json={"error": {"message": "upstream down"}}))
        with pytest.raises(TransportError) as exc_info:
            await client.request_analysis("x", "py", "m", "sk-test")
        assert exc_info.value.status_code == 502
        assert "upstream down" in str(exc_info.value)

    async def test_server_error_without_json_body(self):
        """Test a non-JSON error body still maps to TransportError."""
        client = _client(lambda r: httpx.Response(500, text="oops"))
        with pytest.raises(TransportError) as exc_info:
            await client.request_analysis("x", "py", "m", "sk-test")
        assert "Internal Server Error" in str(exc_info.value)

    async def test_network_failure(self):
        """Test connection errors map to TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError):
            await _client(handler).request_analysis("x", "py", "m", "sk-test")

    async def test_timeout(self):
        """Test timeouts map to TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(TransportError):
            await _client(handler).request_analysis("x", "py", "m", "sk-test")

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"choices": []},
            {"choices": [{"message": {}}]},
            _completion(""),
            _completion("   "),
            _completion(None),
        ],
    )
    async def test_empty_content(self, body):
        """Test 2xx replies without message content map to EmptyResponseError."""
        client = _client(lambda r: httpx.Response(200, json=body))
        with pytest.raises(EmptyResponseError):
            await client.request_analysis("x", "py", "m", "sk-test")

    async def test_non_json_success_body(self):
        """Test a 2xx reply that is not JSON maps to EmptyResponseError."""
        client = _client(lambda r: httpx.Response(200, text="<html>hi</html>"))
        with pytest.raises(EmptyResponseError):
            await client.request_analysis("x", "py", "m", "sk-test")


class TestPrompt:
    """Test prompt construction."""

    def test_prompt_names_language(self):
        """Test the extension labels the code and the fence."""
        prompt = build_analysis_prompt("print(1)", "py")
        assert "Analyze this py code and identify security issues:" in prompt
        assert "```py\nprint(1)\n```" in prompt
        assert "Return valid JSON and nothing else" in prompt

    def test_prompt_without_language(self):
        """Test the prompt is language-agnostic without a hint."""
        prompt = build_analysis_prompt("some text", None)
        assert "Analyze this code and identify security issues:" in prompt
        assert "```\nsome text\n```" in prompt

    def test_enhancement_prompt(self):
        """Test the code-improvement prompt embeds the file in a plain fence."""
        prompt = build_enhancement_prompt("x = 1")
        assert "You are an expert code reviewer." in prompt
        assert "```\nx = 1\n```" in prompt
        assert "return ONLY the improved code" in prompt


class TestCodeBlockExtraction:
    """Test extraction of the improved code from a reply."""

    def test_fence_with_language_tag(self):
        """Test the language tag line is dropped and the body trimmed."""
        reply = "Improved:\n```javascript\n  const a = 1;\n```\nThanks"
        assert extract_code_block(reply) == "const a = 1;"

    def test_first_block_wins(self):
        """Test only the first fenced block is returned."""
        reply = "```\nfirst()\n```\nand\n```\nsecond()\n```"
        assert extract_code_block(reply) == "first()"

    def test_reply_without_fence(self):
        """Test a bare reply is returned unchanged."""
        assert extract_code_block("  x = 1\n") == "  x = 1\n"


class TestEnhanceCode:
    """Test the code-improvement request."""

    async def test_enhance_request_and_reply(self):
        """Test the enhancement prompt is sent and the code block returned."""
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["body"] = json.loads(request.content)
            captured["auth"] = request.headers["Authorization"]
            return httpx.Response(200, json=_completion("```py\nprint(1)\n```"))

        result = await _client(handler).enhance_code("print( 1 )", "some/model", "sk-test")

        assert result == "print(1)"
        assert captured["auth"] == "Bearer sk-test"
        assert captured["body"]["model"] == "some/model"
        assert captured["body"]["temperature"] == 0.1
        assert captured["body"]["messages"] == [
            {"role": "user", "content": build_enhancement_prompt("print( 1 )")}
        ]

    async def test_enhance_missing_credential(self):
        """Test a missing key fails before any network call."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=_completion("x"))

        with pytest.raises(MissingCredentialError):
            await _client(handler).enhance_code("x", "m", "")
        assert calls == []

    async def test_enhance_server_error(self):
        """Test non-2xx replies use the same error mapping as analysis."""
        client = _client(lambda r: httpx.Response(500, json={"error": {"message": "model down"}}))
        with pytest.raises(TransportError) as exc_info:
            await client.enhance_code("x", "m", "sk-test")
        assert "model down" in str(exc_info.value)
        assert exc_info.value.status_code == 500

    async def test_enhance_unauthorized(self):
        """Test HTTP 401 maps to UnauthorizedError."""
        client = _client(lambda r: httpx.Response(401, json={}))
        with pytest.raises(UnauthorizedError):
            await client.enhance_code("x", "m", "sk-bad")

    async def test_enhance_empty_reply(self):
        """Test a blank reply is an empty response."""
        client = _client(lambda r: httpx.Response(200, json=_completion("  ")))
        with pytest.raises(EmptyResponseError):
            await client.enhance_code("x", "m", "sk-test")
