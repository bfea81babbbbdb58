"""
AI Advisor Service

Builds prompts for university recommendations and CV analysis, sends them
through an injected completion transport, and classifies the reply. Any
transport failure degrades to a canned mock response; callers never see an
exception from send_request().

The transport is any async callable taking an AIRequest and returning a
mapping such as:

    {"content": "...model text...", "confidence": 90,
     "processing_time": 1.2, "model_version": "..."}

or, when the backend failed:

    {"error": "quota exceeded", "fallback_response": {...AIResponse fields...}}

Example Usage:
    service = AdvisorService(transport=my_backend_call, config=AdvisorConfig(ai_enabled=True))
    response = await service.get_university_recommendations(profile, preferences)
    if response.type == "universities_list":
        render_cards(response.parsed_data["universities"])
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Mapping, Optional

import structlog
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    after_log,
    before_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from gradmatch.models.ai_response import AIRequest, AIResponse, RequestType
from gradmatch.models.config import AdvisorConfig, NormalizerConfig
from gradmatch.utils.entry_normalizer import normalize_match_score
from gradmatch.utils.logger import get_logger
from gradmatch.utils.mock_responses import (
    MOCK_CHAT_REPLY,
    mock_cv_analysis,
    mock_recommendation_set,
)
from gradmatch.utils.prompt_loader import render_prompt
from gradmatch.utils.response_parser import parse_cv_analysis, parse_recommendations

Transport = Callable[[AIRequest], Awaitable[Mapping[str, Any]]]

RETRYABLE_ERRORS = (ConnectionError, TimeoutError)

retry_logger = structlog.get_logger(__name__)


def _fenced(prefix: str, payload: dict[str, Any], suffix: str) -> str:
    return f"{prefix}\n\n```json\n{json.dumps(payload, indent=2)}\n```\n\n{suffix}"


class AdvisorService:
    """Prompts the AI backend and normalizes its replies."""

    def __init__(
        self,
        transport: Optional[Transport] = None,
        config: Optional[AdvisorConfig] = None,
        normalizer_config: Optional[NormalizerConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """
        Args:
            transport: Async completion call; without one, only mocks are served
            config: Retry and confidence settings (defaults to AdvisorConfig.from_env())
            normalizer_config: Settings passed to parse_recommendations()
            correlation_id: Correlation ID bound to every log line
        """
        self.transport = transport
        self.config = config or AdvisorConfig.from_env()
        self.normalizer_config = normalizer_config or NormalizerConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(
            correlation_id=correlation_id, phase="advisor", component="advisor_service"
        )

    def is_configured(self) -> bool:
        """True when AI calls are enabled and a transport is available."""
        return self.config.ai_enabled and self.transport is not None

    async def _call_transport(self, request: AIRequest) -> Mapping[str, Any]:
        """Call the transport, retrying connection/timeout errors with backoff.

        Raises:
            RuntimeError: If no transport was provided
        """
        if self.transport is None:
            raise RuntimeError("No AI transport configured")

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.config.max_attempts),
            wait=wait_exponential(
                multiplier=1, min=self.config.wait_min, max=self.config.wait_max
            ),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            before=before_log(retry_logger, logging.DEBUG),
            after=after_log(retry_logger, logging.INFO),
            reraise=True,
        ):
            with attempt:
                return await self.transport(request)

        raise RuntimeError("Retry loop exited without a result")

    async def send_request(self, request: AIRequest) -> AIResponse:
        """Send a request to the AI backend, falling back to mocks on failure.

        Args:
            request: Prompt, request type and context

        Returns:
            AIResponse (mock responses carry metadata["is_mock"] = True)
        """
        log = self.logger.bind(request_type=request.type)

        if not self.is_configured():
            log.info("AI backend not configured, serving mock response")
            return self.mock_response(request.type)

        log.info("Sending AI request", prompt_length=len(request.prompt))

        try:
            payload = await self._call_transport(request)
        except Exception as e:
            log.error("AI transport failed, serving mock response", error=str(e))
            return self.mock_response(request.type)

        if not isinstance(payload, Mapping):
            log.warning("Transport returned non-mapping payload", payload_type=type(payload).__name__)
            return self.mock_response(request.type)

        if payload.get("error"):
            log.error("AI backend reported an error", error=str(payload["error"]))
            fallback = payload.get("fallback_response")
            if isinstance(fallback, Mapping):
                try:
                    log.info("Using fallback response from backend")
                    return AIResponse(**fallback)
                except ValidationError as e:
                    log.warning("Invalid fallback response", error=str(e))
            return self.mock_response(request.type)

        if not (payload.get("content") or payload.get("response")):
            log.warning("Empty response from AI backend, serving mock response")
            return self.mock_response(request.type)

        return self.process_response(payload, request.type)

    def process_response(
        self, payload: Mapping[str, Any], request_type: RequestType
    ) -> AIResponse:
        """Classify a backend reply and parse it according to the request type.

        Args:
            payload: Backend reply with "content" (or "response") and optional metadata
            request_type: Which parser to apply

        Returns:
            AIResponse typed "universities_list"/"cv_analysis" when parsing
            succeeded, "text" otherwise
        """
        raw_content = payload.get("content") or payload.get("response") or ""
        content = raw_content if isinstance(raw_content, str) else json.dumps(raw_content, default=str)

        def confidence(default: int) -> int:
            value = payload.get("confidence")
            if value is None:
                return default
            return normalize_match_score(value, default=default)

        if request_type == "university_search":
            parsed = parse_recommendations(
                raw_content, self.normalizer_config, correlation_id=self.correlation_id
            )
            metadata = {
                key: payload[key]
                for key in ("processing_time", "model_version")
                if payload.get(key) is not None
            }
            return AIResponse(
                content=content,
                type="universities_list" if parsed is not None else "text",
                parsed_data=parsed.to_dict() if parsed is not None else None,
                confidence=confidence(self.config.university_confidence),
                metadata=metadata,
            )

        if request_type == "cv_analysis":
            cv_result = parse_cv_analysis(raw_content, correlation_id=self.correlation_id)
            metadata = (
                {"processing_time": payload["processing_time"]}
                if payload.get("processing_time") is not None
                else {}
            )
            return AIResponse(
                content=content,
                type="cv_analysis" if cv_result is not None else "text",
                parsed_data=cv_result.to_dict() if cv_result is not None else None,
                confidence=confidence(self.config.cv_confidence),
                metadata=metadata,
            )

        return AIResponse(
            content=content,
            type="text",
            confidence=confidence(self.config.chat_confidence),
        )

    def mock_response(self, request_type: RequestType) -> AIResponse:
        """Canned response for a request type, used when the backend is unavailable."""
        metadata = {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "is_mock": True,
        }

        if request_type == "university_search":
            data = mock_recommendation_set().to_dict()
            return AIResponse(
                content=_fenced(
                    "Based on your profile, I've found excellent university matches for you:",
                    data,
                    "These recommendations are tailored to your academic background "
                    "and research interests.",
                ),
                type="universities_list",
                parsed_data=data,
                confidence=85,
                metadata=metadata,
            )

        if request_type == "cv_analysis":
            data = mock_cv_analysis().to_dict()
            return AIResponse(
                content=_fenced(
                    "I've analyzed your CV and here's my comprehensive assessment:",
                    data,
                    "Your profile shows strong potential for graduate programs in "
                    "Computer Science, particularly in AI/ML areas.",
                ),
                type="cv_analysis",
                parsed_data=data,
                confidence=88,
                metadata=metadata,
            )

        return AIResponse(content=MOCK_CHAT_REPLY, type="text", confidence=90)

    async def get_university_recommendations(
        self,
        user_profile: Optional[Mapping[str, Any]] = None,
        preferences: Optional[Mapping[str, Any]] = None,
    ) -> AIResponse:
        """Request university recommendations for a profile and preferences."""
        user_profile = dict(user_profile or {})
        preferences = dict(preferences or {})
        prompt = render_prompt(
            "university/recommendations.j2",
            correlation_id=self.correlation_id,
            profile=user_profile,
            preferences=preferences,
        )
        return await self.send_request(
            AIRequest(
                prompt=prompt,
                type="university_search",
                context={"userProfile": user_profile, "preferences": preferences},
            )
        )

    async def analyze_cv(self, cv_text: str, user_goals: Optional[str] = None) -> AIResponse:
        """Request a structured analysis of CV text."""
        prompt = render_prompt(
            "cv/analysis.j2",
            correlation_id=self.correlation_id,
            cv_text=cv_text,
            user_goals=user_goals,
        )
        return await self.send_request(
            AIRequest(
                prompt=prompt,
                type="cv_analysis",
                context={"cvText": cv_text, "userGoals": user_goals},
            )
        )

    async def get_chat_response(
        self, message: str, context: Optional[Mapping[str, Any]] = None
    ) -> AIResponse:
        """Free-form chat; the message is sent as the prompt."""
        return await self.send_request(
            AIRequest(prompt=message, type="general_chat", context=dict(context or {}))
        )

    async def health_check(self) -> bool:
        """Return True if a chat round-trip yields content."""
        try:
            response = await self.get_chat_response("Hello")
            return bool(response.content)
        except Exception as e:
            self.logger.warning("Health check failed", error=str(e))
            return False
