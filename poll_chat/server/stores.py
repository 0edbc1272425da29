import asyncio
from typing import Callable

from .errors import Conflict, NotFound
from .helpers import now_ms
from .logger import logger
from .models import SYSTEM_SENDER, Message, User, join_notice, leave_notice


class ChatState:
    """In-memory user registry and message log of the chat room.

    A single lock guards both collections, so registering a user and
    appending its join notice (or removing it and appending the leave
    notice) is observed as one step by every other coroutine. Callers only
    ever receive copies of the stored users.
    """

    def __init__(self, clock: Callable[[], int] = now_ms):
        self._users: dict[str, User] = {}
        self._messages: list[Message] = []
        self._lock = asyncio.Lock()
        self._clock = clock

    async def register_user(self, username: str) -> User:
        async with self._lock:
            if username in self._users or username == SYSTEM_SENDER:
                raise Conflict(f"Username '{username}' is already taken")
            user = User(username=username, last_active_at=self._clock())
            self._users[username] = user
            self._append(SYSTEM_SENDER, join_notice(username))
            logger.info(f"User registered: {username}")
            return user.copy()

    async def touch_user(self, username: str) -> bool:
        async with self._lock:
            return self._touch(username)

    async def remove_user(self, username: str) -> bool:
        async with self._lock:
            return self._remove(username)

    async def post_message(self, sender: str, content: str) -> Message:
        async with self._lock:
            if not self._touch(sender):
                raise NotFound(f"User '{sender}' not found")
            message = self._append(sender, content)
            logger.info(f"Message posted by {sender} at {message.timestamp}")
            return message

    async def messages_since(self, since: int = 0) -> list[Message]:
        async with self._lock:
            return [m for m in self._messages if m.timestamp > since]

    async def all_users(self) -> list[User]:
        async with self._lock:
            return [u.copy() for u in self._users.values()]

    async def sweep_inactive(self, max_idle_ms: int) -> int:
        async with self._lock:
            now = self._clock()
            stale = [
                name for name, u in self._users.items() if u.idle_for(now) > max_idle_ms
            ]
            for name in stale:
                self._remove(name)
            return len(stale)

    async def user_count(self) -> int:
        async with self._lock:
            return len(self._users)

    async def message_count(self) -> int:
        async with self._lock:
            return len(self._messages)

    def _touch(self, username: str) -> bool:
        if user := self._users.get(username):
            user.update_activity(self._clock())
            return True
        return False

    def _remove(self, username: str) -> bool:
        if self._users.pop(username, None) is None:
            return False
        self._append(SYSTEM_SENDER, leave_notice(username))
        logger.info(f"User removed: {username}")
        return True

    def _append(self, sender: str, content: str) -> Message:
        # timestamps strictly increase in append order
        timestamp = self._clock()
        if self._messages and timestamp <= self._messages[-1].timestamp:
            timestamp = self._messages[-1].timestamp + 1
        message = Message(sender=sender, content=content, timestamp=timestamp)
        self._messages.append(message)
        return message
