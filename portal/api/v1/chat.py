"""Support chatbot endpoint."""

from fastapi import APIRouter, Depends

from portal.api.deps import get_chat_service
from portal.schemas.faq import ChatRequest, ChatResponse
from portal.services.chat_service import ChatService

router = APIRouter()


@router.post("/", response_model=ChatResponse)
async def chat(request: ChatRequest, chat_service: ChatService = Depends(get_chat_service)):
    """Ask the assistant about roles, applications, stipends or deadlines."""
    return ChatResponse(reply=await chat_service.reply(request.message, request.context))
