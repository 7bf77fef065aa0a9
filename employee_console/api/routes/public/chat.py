"""Chat widget webhook. Always answers 200 with {"text": ...}."""
import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from employee_console.core.dependencies import get_faq_responder
from employee_console.core.logging import get_logger
from employee_console.schemas.chat import ChatRequest, ChatReply
from employee_console.services.faq_service import FaqResponder, ERROR_REPLY

logger = get_logger(__name__)

CHAT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

chat_router = APIRouter()


@chat_router.options("/chat")
async def chat_preflight():
    return JSONResponse(content={"ok": True}, headers=CHAT_HEADERS)


@chat_router.post("/chat")
async def chat(request: Request, responder: FaqResponder = Depends(get_faq_responder)):
    """
    Answer the last message of a chat conversation.

    Body: {"messages": [{"text": "..."}]}; "content" is accepted in place of "text".
    """
    try:
        body = await request.body()
        payload = json.loads(body) if body.strip() else {}
        if not isinstance(payload, dict):
            payload = {}
        if not isinstance(payload.get("messages"), list):
            payload["messages"] = []
        chat_request = ChatRequest.model_validate(payload)
        reply = responder.reply(chat_request.messages)
    except (ValueError, ValidationError) as e:
        logger.warning(f"Unreadable chat payload: {str(e)}")
        reply = ERROR_REPLY

    return JSONResponse(content=ChatReply(text=reply).model_dump(), headers=CHAT_HEADERS)
