"""Pydantic models for the Leadflow API."""

from .admin import AdminLoginRequest, MessageResponse, TokenResponse, VerifyOTPRequest
from .public import (
    ChatConversationRequest,
    ChatMessageRequest,
    ComprehensiveEligibilityRequest,
    EligibilityCheckRequest,
    EligibilityCheckResponse,
    IntakeRequest,
    IntakeResponse,
)

__all__ = [
    # Admin models
    "AdminLoginRequest",
    "VerifyOTPRequest",
    "TokenResponse",
    "MessageResponse",
    # Public models
    "IntakeRequest",
    "IntakeResponse",
    "EligibilityCheckRequest",
    "EligibilityCheckResponse",
    "ComprehensiveEligibilityRequest",
    "ChatMessageRequest",
    "ChatConversationRequest",
]
