"""
PasteBin Backend - API Client
==============================

What:  Async HTTP client for the PasteBin API.
How:   httpx.AsyncClient plus an explicit ClientSession object holding the
       token and user. The session is handed in at construction, updated
       only by signup/login/logout, and optionally persisted to a JSON file
       so it survives restarts the way the browser UI keeps it across page
       loads.
Who:   Scripts, integration tests, and anything else that talks to the API.

Example:
    session = ClientSession.load("~/.pastebin/session.json")
    async with PasteClient("http://localhost:5000", session) as client:
        if not session.is_authenticated:
            await client.login("a@x.com", "secret1")
        uuid = await client.create_paste("hello")
        print(client.share_url(uuid))
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)


@dataclass
class ClientSession:
    """
    Client-side session state.

    Attributes:
        token: Bearer token returned by signup/login (None when logged out)
        user: `{"id", "email"}` returned alongside the token
        path: Where the session is persisted; None keeps it in memory only
    """

    token: Optional[str] = None
    user: Optional[Dict[str, Any]] = None
    path: Optional[Path] = field(default=None, repr=False)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @classmethod
    def load(cls, path) -> "ClientSession":
        """Read a persisted session; a missing or unreadable file means logged out."""
        path = Path(path).expanduser()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return cls(path=path)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", path, e)
            return cls(path=path)
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed session file %s: not a JSON object", path)
            return cls(path=path)
        return cls(token=data.get("token"), user=data.get("user"), path=path)

    def update(self, token: str, user: Dict[str, Any]) -> None:
        self.token = token
        self.user = user
        self._persist()

    def clear(self) -> None:
        self.token = None
        self.user = None
        self._persist()

    def _persist(self) -> None:
        if self.path is None:
            return
        if self.token is None:
            self.path.unlink(missing_ok=True)
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps({"token": self.token, "user": self.user}),
            encoding="utf-8",
        )


class PasteClientError(Exception):
    """Non-2xx API response, carrying the status and the server's `error` message."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class PasteClient:
    """
    Thin async wrapper over the /api endpoints.

    Args:
        base_url: Server root, e.g. http://localhost:5000
        session: ClientSession to read the token from and update on login
        origin: Frontend origin used for share links (defaults to base_url)
        transport: Optional httpx transport (ASGITransport in tests)
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[ClientSession] = None,
        origin: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.session = session if session is not None else ClientSession()
        self.origin = (origin or base_url).rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/api",
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "PasteClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ── Auth ──────────────────────────────────────────────────────────────

    async def signup(
        self, email: str, password: str, confirm_password: Optional[str] = None
    ) -> Dict[str, Any]:
        body = {"email": email, "password": password}
        if confirm_password is not None:
            body["confirm_password"] = confirm_password
        data = await self._request("POST", "/auth/signup", json=body, auth=False)
        self.session.update(data["token"], data["user"])
        return data["user"]

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        data = await self._request(
            "POST", "/auth/login", json={"email": email, "password": password}, auth=False
        )
        self.session.update(data["token"], data["user"])
        return data["user"]

    def logout(self) -> None:
        """Forget the token locally. The server keeps no session to end."""
        self.session.clear()

    # ── Pastes ────────────────────────────────────────────────────────────

    async def create_paste(self, content: str) -> str:
        data = await self._request("POST", "/pastes", json={"content": content})
        return data["uuid"]

    async def get_paste(self, paste_uuid: str) -> Dict[str, Any]:
        return await self._request("GET", f"/pastes/{quote(paste_uuid, safe='')}", auth=False)

    async def list_pastes(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/pastes")

    async def delete_paste(self, paste_uuid: str) -> str:
        data = await self._request("DELETE", f"/pastes/{quote(paste_uuid, safe='')}")
        return data["message"]

    def share_url(self, paste_uuid: str) -> str:
        """Link the frontend serves a paste under: <origin>/paste/<uuid>."""
        return f"{self.origin}/paste/{paste_uuid}"

    # ── Internals ─────────────────────────────────────────────────────────

    async def _request(self, method: str, path: str, auth: bool = True, **kwargs) -> Any:
        headers = {}
        if auth and self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        response = await self._http.request(method, path, headers=headers, **kwargs)

        if response.is_success:
            return response.json()

        try:
            message = response.json().get("error", response.reason_phrase)
        except ValueError:
            message = response.text or response.reason_phrase
        raise PasteClientError(response.status_code, message)
