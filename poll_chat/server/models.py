from dataclasses import dataclass, field, replace

from .helpers import now_ms

SYSTEM_SENDER = "System"


@dataclass
class User:
    username: str
    last_active_at: int = field(default_factory=now_ms)

    def update_activity(self, now: int) -> None:
        self.last_active_at = now

    def idle_for(self, now: int) -> int:
        return now - self.last_active_at

    def copy(self) -> "User":
        return replace(self)

    def to_dict(self) -> dict:
        return {"username": self.username, "lastActiveAt": self.last_active_at}


@dataclass(frozen=True)
class Message:
    sender: str
    content: str
    timestamp: int = field(default_factory=now_ms)

    def to_dict(self) -> dict:
        return {
            "sender": self.sender,
            "content": self.content,
            "timestamp": self.timestamp,
        }


def join_notice(username: str) -> str:
    return f"{username} a rejoint la chatroom"


def leave_notice(username: str) -> str:
    return f"{username} a quitté la chatroom"
