"""Error payload exchanged between the CEP server and its client."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


@dataclass
class HttpError:
    """An error message and its status code, as carried in JSON bodies."""

    message: str
    code: int

    def to_dict(self) -> dict[str, Any]:
        """Return the payload with its wire field names."""
        return {"message": self.message, "code": self.code}

    def to_json(self) -> str:
        """Serialise the payload as a JSON object."""
        return json.dumps(self.to_dict(), ensure_ascii=False)


def display_message(json_body: bytes | str) -> str:
    """Return the message held in a JSON error body.

    Raises ValueError when the body is not a well-formed error object.
    """
    data = json.loads(json_body)
    if not isinstance(data, dict):
        raise ValueError("error body is not a JSON object")
    message = data.get("message")
    if message is None:
        message = ""
    if not isinstance(message, str):
        raise ValueError("error message is not a string")
    code = data.get("code")
    if code is not None and (isinstance(code, bool) or not isinstance(code, int)):
        raise ValueError("error code is not an integer")
    return message