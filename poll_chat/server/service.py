from typing import Any

from .errors import BadInput, NotFound
from .logger import logger
from .models import Message, User
from .stores import ChatState


def _require_text(value: Any, name: str) -> str:
    if not isinstance(value, str) or not value:
        raise BadInput(f"'{name}' is required")
    return value


class ChatService:
    """Validates incoming requests and applies them to the chat state.

    Raises ``BadInput``, ``Conflict`` or ``NotFound``; every other outcome
    is a successful result.
    """

    def __init__(self, state: ChatState):
        self.state = state

    async def register(self, username: Any) -> User:
        return await self.state.register_user(_require_text(username, "username"))

    async def list_users(self) -> list[User]:
        return await self.state.all_users()

    async def heartbeat(self, username: str) -> dict:
        if not await self.state.touch_user(username):
            raise NotFound(f"User '{username}' not found")
        return {"active": True}

    async def unregister(self, username: str) -> dict:
        if not await self.state.remove_user(username):
            logger.debug(f"Unregister for unknown user {username!r} ignored")
        return {"status": "removed"}

    async def post_message(self, sender: Any, content: Any) -> Message:
        sender = _require_text(sender, "sender")
        content = _require_text(content, "content")
        return await self.state.post_message(sender, content)

    async def fetch_messages(self, since: int = 0) -> list[Message]:
        return await self.state.messages_since(since)
