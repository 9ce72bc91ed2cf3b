"""LLM client for single-shot chat completions with structured output."""

import httpx
from typing import Dict, Any, TypeVar, Type, Optional
from pydantic import BaseModel, ValidationError
import asyncio

from essaypuzzle.utils.logging import get_logger
from essaypuzzle.models.config import LLMConfig
from essaypuzzle.services.exceptions import LLMResponseError


logger = get_logger(__name__)

T = TypeVar('T', bound=BaseModel)


def _extract_content_from_openai_response(data: Dict[str, Any]) -> str | None:
    """
    Extract message content from an OpenAI-style chat completion.

    OpenAI-compatible APIs (including Gemini's) return:
    {
        "choices": [{
            "message": {"role": "assistant", "content": "..."},
            "finish_reason": "stop"
        }]
    }

    Args:
        data: Parsed JSON response body

    Returns:
        Content string if present, None otherwise
    """
    try:
        if "choices" in data and len(data["choices"]) > 0:
            message = data["choices"][0].get("message") or {}
            return message.get("content")
    except (KeyError, IndexError, TypeError, AttributeError):
        pass
    return None


def _extract_content_from_ollama_response(data: Dict[str, Any]) -> str | None:
    """
    Extract message content from an Ollama native /api/chat response.

    Ollama returns (with "stream": false):
    {
        "model": "...",
        "message": {"role": "assistant", "content": "..."},
        "done": true
    }

    Args:
        data: Parsed JSON response body

    Returns:
        Content string if present, None otherwise
    """
    try:
        if "message" in data and "content" in data["message"]:
            return data["message"]["content"]
    except (KeyError, TypeError):
        pass
    return None


def _strip_code_fence(content: str) -> str:
    """Remove a ```json ... ``` wrapper some models put around JSON output."""
    text = content.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        lines = lines[1:]
        if lines and lines[-1].strip().startswith("```"):
            lines = lines[:-1]
        text = "\n".join(lines).strip()
    return text


class LLMClient:
    """
    HTTP client for an LLM chat API.

    Supports OpenAI-compatible APIs (Gemini, OpenAI, Ollama's /v1) and
    Ollama's native API, with optional JSON-schema constrained output.
    """

    def __init__(self, config: LLMConfig):
        """
        Initialize LLM client.

        Args:
            config: LLM configuration (endpoint, API key, model)
        """
        self.config = config
        self.timeout = httpx.Timeout(
            connect=10.0,
            read=60.0,
            write=10.0,
            pool=10.0
        )
        self._is_ollama: bool | None = None  # Cached provider detection

    async def _detect_ollama(self) -> bool:
        """
        Detect if the LLM endpoint is Ollama by probing /api/version.

        This detection is cached after the first call.

        Returns:
            True if Ollama detected, False otherwise
        """
        if self._is_ollama is not None:
            return self._is_ollama

        base_url = str(self.config.endpoint).rstrip("/")
        if base_url.endswith("/v1"):
            base_url = base_url[:-3]
        version_url = f"{base_url}/api/version"

        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(5.0)) as client:
                logger.debug("llm_provider_detection", version_url=version_url)

                response = await client.get(version_url)

                if response.status_code == 200:
                    logger.info(
                        "llm_provider_detected",
                        provider="ollama",
                        version_url=version_url,
                    )
                    self._is_ollama = True
                    return True

        except httpx.HTTPError as e:
            logger.debug(
                "llm_provider_detection_failed",
                error=str(e),
                assumed_provider="openai",
            )

        logger.info("llm_provider_detected", provider="openai")
        self._is_ollama = False
        return False

    def _build_payload(
        self,
        prompt: str,
        system_prompt: Optional[str],
        response_model: Optional[Type[BaseModel]],
        temperature: float,
        is_ollama: bool,
    ) -> Dict[str, Any]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        payload: Dict[str, Any] = {
            "model": self.config.model,
            "messages": messages,
            "stream": False,
        }

        if is_ollama:
            payload["options"] = {"temperature": temperature, "num_ctx": self.config.num_ctx}
            if response_model is not None:
                payload["format"] = response_model.model_json_schema()
        else:
            payload["temperature"] = temperature
            if response_model is not None:
                payload["response_format"] = {
                    "type": "json_schema",
                    "json_schema": {
                        "name": response_model.__name__,
                        "schema": response_model.model_json_schema(),
                    },
                }

        return payload

    def _chat_url(self, is_ollama: bool) -> str:
        base_url = str(self.config.endpoint).rstrip("/")
        if is_ollama:
            if base_url.endswith("/v1"):
                base_url = base_url[:-3]
            return base_url + "/api/chat"
        return base_url + "/chat/completions"

    async def complete(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        response_model: Optional[Type[BaseModel]] = None,
        temperature: float = 0.7,
        max_retries: int = 0,
        retry_delay: float = 2.0,
        request_id: Optional[str] = None,
    ) -> str:
        """
        Send one chat request and return the assistant's message content.

        Args:
            prompt: User prompt for the LLM
            system_prompt: Optional system prompt
            response_model: Pydantic model whose JSON schema constrains the output
            temperature: Sampling temperature 0.0-1.0 (default: 0.7)
            max_retries: Retries on connection errors and timeouts (default: 0)
            retry_delay: Delay in seconds between retries (default: 2.0)
            request_id: Optional identifier for this request (for logging/tracing)

        Returns:
            Message content, or "" if the response carried none

        Raises:
            httpx.HTTPError: On network or HTTP errors after retries exhausted
            LLMResponseError: If the body is not JSON or the content is not a string
        """
        if not request_id:
            current_task = asyncio.current_task()
            task_name = current_task.get_name() if current_task else None
            request_id = task_name if task_name and task_name != "None" else "unknown"

        is_ollama = await self._detect_ollama()
        payload = self._build_payload(prompt, system_prompt, response_model, temperature, is_ollama)
        url = self._chat_url(is_ollama)

        logger.info(
            "llm_request_started",
            request_id=request_id,
            model=self.config.model,
            endpoint=str(self.config.endpoint),
            provider="ollama" if is_ollama else "openai",
            prompt_length=len(prompt),
            structured=response_model is not None,
            temperature=temperature,
        )

        logger.debug(
            "llm_request_payload",
            request_id=request_id,
            payload=payload,
        )

        attempt = 0

        while True:
            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    headers = {"Authorization": f"Bearer {self.config.api_key}"}
                    response = await client.post(url, json=payload, headers=headers)
                    response.raise_for_status()

                    try:
                        data = response.json()
                    except ValueError as e:
                        # JSONDecodeError, or UnicodeDecodeError for a body that is not UTF-8
                        raise LLMResponseError(f"Response body is not JSON: {e}", response.text) from e

                    if is_ollama:
                        content = _extract_content_from_ollama_response(data)
                    else:
                        content = _extract_content_from_openai_response(data)

                    if content is not None and not isinstance(content, str):
                        raise LLMResponseError(
                            f"Message content is {type(content).__name__}, expected a string",
                            repr(content),
                        )

                    logger.debug(
                        "llm_response_content",
                        request_id=request_id,
                        content=content,
                    )

                    logger.info(
                        "llm_request_completed",
                        request_id=request_id,
                        content_length=len(content or ""),
                    )

                    return content or ""

            except (httpx.ConnectError, httpx.ReadTimeout, httpx.ConnectTimeout) as e:
                attempt += 1

                logger.warning(
                    "llm_request_retry",
                    request_id=request_id,
                    attempt=attempt,
                    max_retries=max_retries,
                    error=str(e),
                    retry_delay=retry_delay
                )

                if attempt <= max_retries:
                    await asyncio.sleep(retry_delay)
                else:
                    logger.error(
                        "llm_request_failed",
                        request_id=request_id,
                        attempts=attempt,
                        error=str(e)
                    )
                    raise

            except httpx.HTTPStatusError as e:
                # Don't retry on HTTP errors (bad request, auth, etc.)
                logger.error(
                    "llm_http_error",
                    request_id=request_id,
                    status_code=e.response.status_code,
                    error=str(e)
                )
                raise

    async def complete_json(
        self,
        prompt: str,
        response_model: Type[T],
        system_prompt: Optional[str] = None,
        temperature: float = 0.7,
        max_retries: int = 0,
        request_id: Optional[str] = None,
    ) -> T:
        """
        Request structured output and validate it against ``response_model``.

        Example:
            >>> result = await client.complete_json(
            ...     prompt="Analyze this text...",
            ...     response_model=AnalysisResult,
            ... )
            >>> result.balance_score.claim
            40.0

        Raises:
            httpx.HTTPError: On network or HTTP errors
            LLMResponseError: If the content is empty or does not validate
        """
        content = await self.complete(
            prompt=prompt,
            system_prompt=system_prompt,
            response_model=response_model,
            temperature=temperature,
            max_retries=max_retries,
            request_id=request_id,
        )

        if not content.strip():
            raise LLMResponseError("LLM returned empty content", content)

        try:
            return response_model.model_validate_json(_strip_code_fence(content))
        except ValidationError as e:
            logger.error(
                "llm_response_invalid",
                request_id=request_id,
                response_model=response_model.__name__,
                error=str(e),
            )
            raise LLMResponseError(f"Response does not match {response_model.__name__}: {e}", content) from e


def build_llm_client(config: LLMConfig) -> Optional[LLMClient]:
    """
    Create an LLM client, or None when no API key is configured.

    A missing key disables the AI features instead of failing; the reason
    is only written to the log.
    """
    if not config.has_api_key:
        logger.error(
            "llm_api_key_missing",
            endpoint=str(config.endpoint),
            hint="Set ESSAYPUZZLE_LLM_API_KEY or llm.api_key in config.yaml",
        )
        return None

    logger.info("llm_client_initialized", endpoint=str(config.endpoint), model=config.model)
    return LLMClient(config)
