"""AI advisor request/response models."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

RequestType = Literal["university_search", "cv_analysis", "general_chat"]
ResponseType = Literal["text", "json", "universities_list", "cv_analysis"]


class AIRequest(BaseModel):
    """Prompt plus context sent to the completion transport."""

    prompt: str
    type: RequestType
    context: dict[str, Any] = Field(default_factory=dict)


class AIResponse(BaseModel):
    """Classified AI reply.

    Attributes:
        content: Raw model text
        type: "universities_list" / "cv_analysis" when parsing succeeded, else "text"
        parsed_data: Normalized payload (wire shape) when parsing succeeded
        confidence: Confidence reported by the backend or the per-type default
        metadata: Backend metadata (processing time, model version, mock marker)
    """

    content: str
    type: ResponseType = "text"
    parsed_data: Optional[dict[str, Any]] = None
    confidence: Optional[int] = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_mock(self) -> bool:
        return bool(self.metadata.get("is_mock"))
