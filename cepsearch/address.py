"""Address record shared by the server and the client."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

_WIRE_NAMES = {
    "cep": "cep",
    "rua": "logradouro",
    "bairro": "bairro",
    "cidade": "localidade",
    "estado": "uf",
    "apiname": "apiname",
}

_VIACEP_NAMES = {
    "cep": "cep",
    "rua": "logradouro",
    "bairro": "bairro",
    "cidade": "localidade",
    "estado": "uf",
}

_BRASILAPI_NAMES = {
    "cep": "cep",
    "rua": "street",
    "bairro": "neighborhood",
    "cidade": "city",
    "estado": "state",
}


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _pick(data: Mapping[str, Any], names: Mapping[str, str]) -> dict[str, str]:
    return {attr: _text(data, key) for attr, key in names.items()}


@dataclass
class Address:
    """A postal address and the name of the service that supplied it."""

    cep: str = ""
    rua: str = ""
    bairro: str = ""
    cidade: str = ""
    estado: str = ""
    apiname: str = ""

    @classmethod
    def from_viacep(cls, data: Mapping[str, Any]) -> Address:
        """Build an address from a ViaCep response object."""
        return cls(**_pick(data, _VIACEP_NAMES), apiname="ViaCep")

    @classmethod
    def from_brasilapi(cls, data: Mapping[str, Any]) -> Address:
        """Build an address from a BrasilApi response object."""
        return cls(**_pick(data, _BRASILAPI_NAMES), apiname="BrasilApi")

    @classmethod
    def from_json(cls, body: bytes | str) -> Address:
        """Parse an address as the server sends it; raises ValueError if malformed."""
        data = json.loads(body)
        if not isinstance(data, dict):
            raise ValueError("address body is not a JSON object")
        return cls(**_pick(data, _WIRE_NAMES))

    def to_dict(self) -> dict[str, str]:
        """Return the address with its wire field names."""
        return {key: getattr(self, attr) for attr, key in _WIRE_NAMES.items()}

    def to_json(self) -> str:
        """Serialise the address as a JSON object."""
        return json.dumps(self.to_dict(), ensure_ascii=False)