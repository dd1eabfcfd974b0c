import logging
from dataclasses import dataclass

import requests

from .constants import HIPCHAT_API_TOKEN, HIPCHAT_API_URL, HIPCHAT_TIMEOUT_SECONDS
from .errors import SendError

logger = logging.getLogger(__name__)

FORMAT_TEXT = "text"
FORMAT_HTML = "html"


@dataclass(frozen=True)
class MessageRequest:
    room_id: str
    sender: str
    message: str
    color: str = "yellow"
    message_format: str = FORMAT_TEXT
    notify: bool = False


class HipchatClient:
    """Cliente mínimo da API v1 do HipChat (apenas rooms/message)."""

    def __init__(self, auth_token=HIPCHAT_API_TOKEN, base_url=HIPCHAT_API_URL, timeout=HIPCHAT_TIMEOUT_SECONDS):
        self.auth_token = auth_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def post_message(self, req: MessageRequest) -> None:
        url = f"{self.base_url}/v1/rooms/message"
        form = {
            "room_id": req.room_id,
            "from": req.sender,
            "message": req.message,
            "message_format": req.message_format,
            "notify": "1" if req.notify else "0",
            "color": req.color,
        }
        try:
            resp = requests.post(
                url,
                params={"auth_token": self.auth_token, "format": "json"},
                data=form,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise SendError(f"request to {url} failed: {exc}") from exc

        logger.debug(f"HipChat response: {resp.status_code}")

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if resp.status_code != 200:
            error = body.get("error") or {}
            detail = error.get("message") if isinstance(error, dict) else None
            raise SendError(f"HTTP {resp.status_code}: {detail or resp.text[:200]}")

        status = body.get("status")
        if status != "sent":
            raise SendError(f"unexpected response status: {status!r}")
