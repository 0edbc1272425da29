import asyncio
from urllib.parse import quote

import requests
from rich.console import Console
from rich.panel import Panel

from ..config import HEARTBEAT_INTERVAL, POLL_INTERVAL, REQUEST_TIMEOUT
from ..server.models import SYSTEM_SENDER


class Client:
    def __init__(self, server: str, port: int, username: str):
        self.server = server
        self.port = port
        self.username = username

        self.console = Console()
        self.messages: list[dict] = []
        self.users: list[dict] = []
        self.since = 0
        self.registered = False
        self.running = False

    @property
    def base_url(self) -> str:
        return f"http://{self.server}:{self.port}"

    @property
    def api_url(self) -> str:
        return f"{self.base_url}/chat"

    @property
    def user_url(self) -> str:
        return f"{self.api_url}/users/{quote(self.username, safe='')}"

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓ {message}[/]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗ {message}[/]")

    def info(self, message: str) -> None:
        self.console.print(f"[cyan]• {message}[/]")

    def register(self) -> dict:
        resp = requests.post(
            f"{self.api_url}/users",
            json={"username": self.username},
            timeout=REQUEST_TIMEOUT,
        )
        if resp.status_code == 409:
            raise ValueError(f"Username '{self.username}' is already taken")
        resp.raise_for_status()
        self.registered = True
        return resp.json()

    def heartbeat(self) -> bool:
        resp = requests.put(f"{self.user_url}/heartbeat", timeout=REQUEST_TIMEOUT)
        return resp.status_code == 200

    def unregister(self) -> None:
        requests.delete(self.user_url, timeout=REQUEST_TIMEOUT)
        self.registered = False

    def send(self, content: str) -> dict:
        resp = requests.post(
            f"{self.api_url}/messages",
            json={"sender": self.username, "content": content},
            timeout=REQUEST_TIMEOUT,
        )
        resp.raise_for_status()
        return resp.json()

    def fetch_messages(self) -> list[dict]:
        """Fetch messages newer than the cursor and advance it."""
        resp = requests.get(
            f"{self.api_url}/messages",
            params={"since": self.since},
            timeout=REQUEST_TIMEOUT,
        )
        resp.raise_for_status()
        new_messages = resp.json()
        if new_messages:
            self.messages.extend(new_messages)
            self.since = max(self.since, *(m["timestamp"] for m in new_messages))
        return new_messages

    def fetch_users(self) -> list[dict]:
        resp = requests.get(f"{self.api_url}/users", timeout=REQUEST_TIMEOUT)
        if resp.status_code != 200:
            return []
        self.users = resp.json()
        return self.users

    def render(self) -> None:
        self.console.clear()

        users_online = ", ".join(u.get("username", "?") for u in self.users) or "none"
        self.console.print(f"[dim]Online: {users_online}[/]")
        self.console.print("─" * 60)

        for msg in self.messages[-15:]:
            sender = msg.get("sender", "?")
            content = msg.get("content", "")
            if sender == SYSTEM_SENDER:
                self.console.print(f"[dim italic]{content}[/]")
                continue
            style = "green" if sender == self.username else "cyan"
            self.console.print(f"[{style}]{sender}[/]: {content}")

        if not self.messages:
            self.console.print("[dim italic]No messages yet...[/]")

        self.console.print("─" * 60)
        self.console.print("[dim]Type message and press Enter. 'q' to quit.[/]")

    async def poll_loop(self) -> None:
        loop = asyncio.get_event_loop()
        while self.running:
            try:
                new_messages = await loop.run_in_executor(None, self.fetch_messages)
                previous_users = self.users
                await loop.run_in_executor(None, self.fetch_users)
                if new_messages or self.users != previous_users:
                    self.render()
            except requests.exceptions.RequestException as e:
                self.error(f"Polling failed: {e}")
            await asyncio.sleep(POLL_INTERVAL)

    async def heartbeat_loop(self) -> None:
        loop = asyncio.get_event_loop()
        while self.running:
            await asyncio.sleep(HEARTBEAT_INTERVAL)
            try:
                if not await loop.run_in_executor(None, self.heartbeat):
                    self.registered = False
                    self.info("Session expired, registering again")
                    await loop.run_in_executor(None, self.register)
            except requests.exceptions.RequestException as e:
                self.error(f"Heartbeat failed: {e}")
            except ValueError as e:
                self.error(str(e))
                self.running = False
                self.info("Press Enter to exit")

    async def input_loop(self) -> None:
        loop = asyncio.get_event_loop()
        while self.running:
            try:
                text = await loop.run_in_executor(None, input)
                if text.lower() in ("q", "quit", "exit"):
                    self.running = False
                    break
                if text.strip():
                    await loop.run_in_executor(None, self.send, text)
            except (EOFError, KeyboardInterrupt):
                self.running = False
                break
            except requests.exceptions.RequestException as e:
                self.error(f"Send failed: {e}")

    async def run_async(self) -> None:
        self.console.clear()
        self.console.print(Panel("[bold cyan]Poll Chat Client[/]", expand=False))
        self.console.print()

        try:
            with self.console.status("[cyan]Registering...[/]", spinner="dots"):
                self.register()
            self.success(f"Joined as {self.username}")
            self.running = True

            tasks = [
                asyncio.create_task(self.poll_loop()),
                asyncio.create_task(self.heartbeat_loop()),
                asyncio.create_task(self.input_loop()),
            ]
            done, pending = await asyncio.wait(
                tasks, return_when=asyncio.FIRST_COMPLETED
            )
            self.running = False
            for task in pending:
                task.cancel()

            self.console.print("\n[yellow]Disconnected[/]")

        except requests.exceptions.ConnectionError:
            self.error(f"Cannot connect to {self.base_url}")
        except requests.exceptions.HTTPError as e:
            self.error(f"Server error: {e.response.status_code} - {e.response.text}")
        except ValueError as e:
            self.error(f"Registration failed: {e}")
        finally:
            if self.registered:
                self.leave()

    def leave(self) -> None:
        try:
            self.unregister()
        except requests.exceptions.RequestException as e:
            self.error(f"Unregister failed: {e}")

    def run(self) -> None:
        asyncio.run(self.run_async())
