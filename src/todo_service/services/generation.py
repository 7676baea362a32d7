"""Text and structured-object generation using Claude via Bedrock."""

import asyncio
import json
import logging
from functools import lru_cache
from typing import Any, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    EndpointConnectionError,
    HTTPClientError,
    NoCredentialsError,
    PartialCredentialsError,
    ReadTimeoutError,
)

from ..config import settings
from ..errors import (
    ExtractionSchemaViolation,
    GenerationAuthError,
    GenerationConfigError,
    GenerationError,
    GenerationNetworkError,
    GenerationQuotaError,
    GenerationTimeoutError,
)

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "bedrock-2023-05-31"
EXTRACTION_TOOL_NAME = "record_task"

AUTH_ERROR_CODES = {
    "AccessDeniedException",
    "UnrecognizedClientException",
    "InvalidSignatureException",
    "ExpiredTokenException",
}
QUOTA_ERROR_CODES = {
    "ThrottlingException",
    "ServiceQuotaExceededException",
    "TooManyRequestsException",
}
TIMEOUT_ERROR_CODES = {"ModelTimeoutException"}
UNAVAILABLE_ERROR_CODES = {"ServiceUnavailableException", "ModelNotReadyException"}


class GenerationClient(Protocol):
    """Interface to the external generation service."""

    async def extract(self, prompt: str, schema: dict[str, Any]) -> dict[str, Any]:
        """Produce an object conforming to ``schema``.

        Raises:
            ExtractionSchemaViolation: If no conforming object was produced
            GenerationError: If the call itself fails
        """
        ...

    async def narrate(self, prompt: str) -> str:
        """Produce free text for ``prompt``.

        Raises:
            GenerationError: If the call fails
        """
        ...


def classify_generation_error(error: Exception) -> GenerationError:
    """Map a botocore failure onto the service error taxonomy."""
    if isinstance(error, (NoCredentialsError, PartialCredentialsError)):
        return GenerationConfigError(f"Bedrock credentials are not configured: {error}")

    if isinstance(error, (ReadTimeoutError, ConnectTimeoutError)):
        return GenerationTimeoutError("The AI service took too long to respond. Please try again.")

    if isinstance(error, (EndpointConnectionError, HTTPClientError)):
        return GenerationNetworkError(
            "Could not reach the AI service. Check the network connection and try again."
        )

    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code", "")
        if code in AUTH_ERROR_CODES:
            return GenerationAuthError("AI service authentication failed. Please try again later.")
        if code in QUOTA_ERROR_CODES:
            return GenerationQuotaError("AI service usage limit reached. Please try again shortly.")
        if code in TIMEOUT_ERROR_CODES:
            return GenerationTimeoutError("The AI service took too long to respond. Please try again.")
        if code in UNAVAILABLE_ERROR_CODES:
            return GenerationNetworkError("The AI service is temporarily unavailable. Please try again.")

    return GenerationError(f"AI service error: {error}")


class BedrockGenerationClient:
    """Generation client backed by Anthropic models on AWS Bedrock."""

    def __init__(
        self,
        model_id: str | None = None,
        region: str | None = None,
        timeout_seconds: float | None = None,
    ):
        """Initialize Bedrock client.

        Args:
            model_id: Bedrock model identifier
            region: AWS region for the bedrock-runtime endpoint
            timeout_seconds: Request-level timeout for one generation call
        """
        self.model_id = model_id or settings.bedrock_model_id
        self.region = region or settings.aws_region
        self.timeout_seconds = timeout_seconds or settings.generation_timeout_seconds

    def _ensure_credentials(self) -> None:
        session = boto3.Session(region_name=self.region)
        if session.get_credentials() is None:
            raise GenerationConfigError("No AWS credentials found for Bedrock")

    def _invoke(self, body: dict[str, Any]) -> dict[str, Any]:
        # Runs in a worker thread; resolving credentials may hit the instance metadata service
        self._ensure_credentials()
        client = boto3.client(
            "bedrock-runtime",
            region_name=self.region,
            config=Config(
                read_timeout=self.timeout_seconds,
                connect_timeout=min(self.timeout_seconds, 10),
                retries={"total_max_attempts": 1},
            ),
        )

        response = client.invoke_model(
            modelId=self.model_id,
            body=json.dumps(body),
            contentType="application/json",
        )

        return json.loads(response["body"].read())

    async def _call(self, body: dict[str, Any]) -> dict[str, Any]:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._invoke, body),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Bedrock call timed out after {self.timeout_seconds}s")
            raise GenerationTimeoutError(
                "The AI service took too long to respond. Please try again."
            ) from e
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Bedrock API error: {e}")
            raise classify_generation_error(e) from e

    async def extract(self, prompt: str, schema: dict[str, Any]) -> dict[str, Any]:
        """Force a single tool call whose input is the extracted object."""
        response_body = await self._call({
            "anthropic_version": ANTHROPIC_VERSION,
            "max_tokens": settings.extraction_max_tokens,
            "temperature": 0,
            "tools": [{
                "name": EXTRACTION_TOOL_NAME,
                "description": "Record the structured task extracted from the user's input.",
                "input_schema": schema,
            }],
            "tool_choice": {"type": "tool", "name": EXTRACTION_TOOL_NAME},
            "messages": [{"role": "user", "content": prompt}],
        })

        for block in response_body.get("content", []):
            if block.get("type") == "tool_use" and isinstance(block.get("input"), dict):
                return block["input"]

        logger.error(f"Extraction response had no tool_use block: stop_reason={response_body.get('stop_reason')}")
        raise ExtractionSchemaViolation(
            "The AI response could not be processed. Please rephrase the task and try again."
        )

    async def narrate(self, prompt: str) -> str:
        response_body = await self._call({
            "anthropic_version": ANTHROPIC_VERSION,
            "max_tokens": settings.analysis_max_tokens,
            "temperature": settings.analysis_temperature,
            "messages": [{"role": "user", "content": prompt}],
        })

        return "".join(
            block.get("text", "") for block in response_body.get("content", []) if block.get("type") == "text"
        )


@lru_cache(maxsize=1)
def get_generation_client() -> GenerationClient:
    """Get or create the generation client singleton."""
    return BedrockGenerationClient()
