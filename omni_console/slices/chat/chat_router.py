from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Any, Dict, List, Optional

from omni_console.const import HTTP_BAD_REQUEST, HTTP_CONFLICT
from omni_console.shared.logging import LoggingManager
from omni_console.shared.models import Provider, dump_models
from .chat_session import ChatError, SessionBusyError


class ChatRequest(BaseModel):
    """Chat submission: the prompt and the selected model."""
    content: str
    model_id: Optional[str] = None
    provider: Optional[Provider] = None


class ChatRouter:
    """Router for chat endpoints."""

    def __init__(self, state):
        self.state = state
        self.logger = LoggingManager.get_logger(__name__)
        self.router = APIRouter(prefix="/api/chat", tags=["chat"])
        self.router.post("")(self.chat)
        self.router.get("/messages")(self.get_messages)
        self.router.delete("/messages")(self.clear_messages)

    @classmethod
    def get_router(cls, state) -> APIRouter:
        """Get the router instance."""
        return cls(state).router

    async def chat(self, request: ChatRequest) -> Dict[str, Any]:
        """Send a prompt to the selected model and return the assistant message."""
        model = None
        if request.model_id:
            model = self.state.catalog.find(request.model_id, request.provider)

        try:
            self.logger.info(f"Chat router - Processing chat request for model: {request.model_id}")
            message = await self.state.chat.submit(request.content, model, self.state.settings)
        except SessionBusyError as e:
            raise HTTPException(status_code=HTTP_CONFLICT, detail=str(e))
        except ChatError as e:
            raise HTTPException(status_code=HTTP_BAD_REQUEST, detail=str(e))

        return dump_models([message])[0]

    async def get_messages(self) -> List[Dict[str, Any]]:
        return dump_models(self.state.chat.messages)

    async def clear_messages(self) -> Dict[str, Any]:
        self.state.chat.clear()
        return {"cleared": True}
