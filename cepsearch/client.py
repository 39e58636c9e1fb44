"""Command-line client that asks the CEP server for an address."""

from __future__ import annotations

import http.client
import sys
import urllib.error
import urllib.parse
import urllib.request

from .address import Address
from .errors import display_message

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_TIMEOUT = 1.0

_TIMEOUT_MESSAGE = "__SERVER demorou para responder a Busca. Tente novamente!! \n {}"


class ClientError(Exception):
    """The server could not be reached or answered with an error."""


def fetch_address(cep: str, base_url: str = DEFAULT_BASE_URL, timeout: float = DEFAULT_TIMEOUT) -> Address:
    """Ask the server for the address of a CEP; raises ClientError on failure."""
    url = f"{base_url.rstrip('/')}/BuscaCep/{urllib.parse.quote(cep, safe='/')}"
    try:
        with urllib.request.urlopen(url, timeout=timeout) as response:
            status = response.status
            body = response.read()
    except urllib.error.HTTPError as exc:
        status = exc.code
        try:
            body = exc.read()
        except OSError as read_exc:
            raise ClientError(f"\nErro ao ler corpo da mensagem de erro\n__{read_exc}\n") from read_exc
        finally:
            exc.close()
    except urllib.error.URLError as exc:
        if isinstance(exc.reason, TimeoutError):
            raise ClientError(_TIMEOUT_MESSAGE.format(exc.reason)) from exc
        raise ClientError(f"Erro ao chamar o SERVER\n__{exc.reason}\n") from exc
    except TimeoutError as exc:
        raise ClientError(_TIMEOUT_MESSAGE.format(exc)) from exc
    except (ValueError, http.client.InvalidURL) as exc:
        raise ClientError("__Falha na requisição, tente novamente !!") from exc
    except (OSError, http.client.HTTPException) as exc:
        raise ClientError(f"Erro ao chamar o SERVER\n__{exc}\n") from exc

    if status != 200:
        try:
            message = display_message(body)
        except ValueError as exc:
            raise ClientError(f"Erro ao converter resposta.\n__[MESSAGE]{exc}\n") from exc
        raise ClientError(f"Falha durante a cotação\n{message}\n")

    try:
        return Address.from_json(body)
    except ValueError as exc:
        print(f"\nErro ao converter a resposta Body:{exc}", file=sys.stderr)
        return Address()


def format_address(address: Address) -> str:
    """Render an address the way the client prints it."""
    return (
        f"Você foi atendido por {address.apiname}\n"
        " ENDEREÇO RETORNADO\n"
        f" Rua: {address.rua}\n"
        f" Bairro: {address.bairro}\n"
        f" Cidade: {address.cidade}\n"
        f" Estado: {address.estado}\n"
        f" CEP: {address.cep}\n"
    )


def main(argv: list[str] | None = None) -> int:
    """Look up the CEP given on the command line and print the address."""
    args = sys.argv[1:] if argv is None else list(argv)
    cep = " ".join(args)
    print(f"Iniciando a busca do CEP [{cep}]")
    try:
        address = fetch_address(cep)
    except ClientError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(format_address(address), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())