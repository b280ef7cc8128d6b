"""Public intake routes: enquiries, eligibility checks and the chat widget."""

from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from leadflow.services.chatbot import EMPTY_MESSAGE_REPLY, ChatResponder
from leadflow.services.intake import LeadIntakeService
from web.dependencies import get_chat_responder, get_intake_service
from web.models import (
    ChatConversationRequest,
    ChatMessageRequest,
    ComprehensiveEligibilityRequest,
    EligibilityCheckRequest,
    EligibilityCheckResponse,
    IntakeRequest,
    IntakeResponse,
)

router = APIRouter(prefix="/api/public", tags=["public"])

SITE_CONTENT: Dict[str, Any] = {"heroTitle": "Welcome to Our Services", "news": []}

CHAT_MESSAGE_ACK = "Message received. Agent will contact you."


@router.post("/intake", response_model=IntakeResponse)
async def submit_enquiry(
    body: IntakeRequest,
    intake: LeadIntakeService = Depends(get_intake_service),
) -> IntakeResponse:
    """
    Submit a website enquiry.

    A new lead is stored for every submission; the confirmation email is
    sent in the background.
    """
    lead = await intake.submit_enquiry(
        name=body.name,
        phone=body.phone,
        email=body.email,
        service_type=body.service_type,
        details=body.details,
    )
    return IntakeResponse(lead_id=lead.id, data=lead.to_dict())


@router.post("/eligibility-check", response_model=EligibilityCheckResponse)
async def eligibility_check(
    body: EligibilityCheckRequest,
    intake: LeadIntakeService = Depends(get_intake_service),
) -> EligibilityCheckResponse:
    """Quick eligibility check on annual income and credit score."""
    result = await intake.check_eligibility(
        name=body.name,
        phone=body.phone,
        email=body.email,
        income=body.income,
        cibil_score=body.cibil_score,
        service_type=body.service_type,
    )
    return EligibilityCheckResponse(eligible=result.is_eligible, message=result.message)


@router.post("/comprehensive-eligibility")
async def comprehensive_eligibility(
    body: ComprehensiveEligibilityRequest,
    intake: LeadIntakeService = Depends(get_intake_service),
) -> Dict[str, Any]:
    """
    Full multi-step eligibility application.

    Returns:
        Eligibility outcome with the clamped amount and suggested lenders
    """
    result, _record = await intake.comprehensive_eligibility(body.sections())
    return {
        "success": True,
        "isEligible": result.is_eligible,
        "maxEligibleAmount": result.max_eligible_amount,
        "recommendedLoanType": result.recommended_loan_type,
        "suggestedBanks": list(result.suggested_banks),
        "message": result.message,
    }


@router.post("/chat-message")
async def chat_message(
    body: ChatMessageRequest,
    intake: LeadIntakeService = Depends(get_intake_service),
) -> Dict[str, str]:
    """Save a chat widget message as a warm lead."""
    await intake.record_chat_message(
        name=body.name, phone=body.phone, email=body.email, message=body.message
    )
    return {"msg": CHAT_MESSAGE_ACK}


@router.post("/chat-conversation")
async def chat_conversation(
    body: ChatConversationRequest,
    responder: ChatResponder = Depends(get_chat_responder),
):
    """Answer one chatbot turn."""
    if not body.message or not body.message.strip():
        return JSONResponse(status_code=400, content={"reply": EMPTY_MESSAGE_REPLY})
    return responder.respond(body.message).to_dict()


@router.get("/content")
async def get_content() -> Dict[str, Any]:
    """Static landing page content."""
    return {"heroTitle": SITE_CONTENT["heroTitle"], "news": list(SITE_CONTENT["news"])}
