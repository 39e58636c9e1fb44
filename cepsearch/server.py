"""HTTP server that looks up a CEP on two providers and answers with the fastest."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import re
import time
from collections.abc import AsyncIterator
from datetime import datetime
from http import HTTPStatus
from typing import Any

import aiohttp
from aiohttp import web

from .address import Address
from .errors import HttpError

log = logging.getLogger(__name__)

DEFAULT_PORT = 8080
DEFAULT_TIMEOUT = 1.0

SESSION_KEY = web.AppKey("session", aiohttp.ClientSession)
TIMEOUT_KEY = web.AppKey("timeout", float)

_WRONG_ENDPOINT = "The access must by in  of the endpoint http://localhost:8080/BuscaCep\n"
_MISSING_CEP = (
    "Type currency not send in parameter.\n"
    " Exemple: http://localhost:8080/BuscaCep/{CepCurrency}\n"
)
_EMPTY_CEP = "Um CEP deve ser informado, tente novamente !!"
_INVALID_CEP = "O CEP {} não é um número válido, tente novamente !!"
_TIMED_OUT = "Tempo de pesquisa excedido"
_FAILED = "Falha na requisição."

_NON_DIGITS = re.compile(r"[^0-9]+")


class ProviderError(Exception):
    """A provider lookup that failed or ran out of time."""

    def __init__(self, api_name: str, code: int, reason: str) -> None:
        self.api_name = api_name
        self.error = HttpError(
            f"__Error searching for {api_name}.\n____[MESSAGE] {reason}", int(code)
        )
        super().__init__(self.error.message)

    @property
    def code(self) -> int:
        return self.error.code


def _stamp() -> str:
    return datetime.now().strftime("%d/%m/%Y %H:%M:%S.%f")


def normalize_cep(raw: str) -> str:
    """Return the eight digits of a CEP; raises ValueError with the reason otherwise."""
    if raw == "":
        raise ValueError(_MISSING_CEP)
    digits = _NON_DIGITS.sub("", raw)
    if not digits:
        raise ValueError(_EMPTY_CEP)
    if len(digits) != 8:
        raise ValueError(_INVALID_CEP.format(raw))
    return digits


def provider_urls(cep: str) -> tuple[tuple[str, str], ...]:
    """Return (provider name, lookup URL) pairs for a CEP."""
    return (
        ("ViaCep", f"https://viacep.com.br/ws/{cep}/json/"),
        ("BrasilApi", f"https://brasilapi.com.br/api/cep/v1/{cep}"),
    )


async def search_cep(session: Any, url: str, api_name: str, timeout: float = DEFAULT_TIMEOUT) -> bytes:
    """Fetch the raw body of one provider's answer within the time limit."""
    log.info("--> Iniciando busca tipo:%s em %s", api_name, _stamp())

    async def fetch() -> bytes:
        async with session.get(url) as response:
            return await response.read()

    try:
        body = await asyncio.wait_for(fetch(), timeout)
    except (asyncio.TimeoutError, TimeoutError) as exc:
        log.info("Tempo excedido para consultar com fornecedor %s em %s", api_name, _stamp())
        raise ProviderError(api_name, HTTPStatus.REQUEST_TIMEOUT, _TIMED_OUT) from exc
    except aiohttp.ClientError as exc:
        log.info("Falha ao consultar CEP em %s [MESSAGE]%s", api_name, exc)
        raise ProviderError(api_name, HTTPStatus.BAD_REQUEST, _FAILED) from exc
    log.info("Capturados os dados do CEP com API: %s em %s", api_name, _stamp())
    return body


_PARSERS = {"ViaCep": Address.from_viacep, "BrasilApi": Address.from_brasilapi}


def _decode(body: bytes, api_name: str) -> dict[str, Any]:
    try:
        data = json.loads(body)
    except ValueError as exc:
        log.error("Erro ao converter a resposta de %s: %s", api_name, exc)
        return {}
    return data if isinstance(data, dict) else {}


async def lookup_address(session: Any, cep: str, timeout: float = DEFAULT_TIMEOUT) -> Address:
    """Query every provider at once; the first to finish decides the outcome.

    Returns the winner's address or raises its ProviderError.
    """

    async def query(api_name: str, url: str) -> Address:
        body = await search_cep(session, url, api_name, timeout)
        return _PARSERS[api_name](_decode(body, api_name))

    tasks = [asyncio.create_task(query(name, url)) for name, url in provider_urls(cep)]
    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
    winner = next(task for task in tasks if task in done)
    return winner.result()


def _json_response(payload: HttpError | Address, status: int) -> web.Response:
    return web.Response(
        text=payload.to_json() + "\n", status=int(status), content_type="application/json"
    )


async def _handle_search(request: web.Request) -> web.Response:
    segments = request.path.split("/")
    if len(segments) < 2 or segments[1] != "BuscaCep":
        log.info("The access must by in  of the endpoint http://localhost:8080/BuscaCep")
        return _json_response(
            HttpError(_WRONG_ENDPOINT, int(HTTPStatus.NOT_FOUND)), HTTPStatus.BAD_REQUEST
        )
    raw = request.match_info.get("cep", "")
    try:
        normalize_cep(raw)
    except ValueError as exc:
        log.info("%s", exc)
        return _json_response(
            HttpError(str(exc), int(HTTPStatus.BAD_REQUEST)), HTTPStatus.BAD_REQUEST
        )

    started = time.monotonic()
    log.info("-> Searching ADDRESS for the ZIPCODE:%s in %s", raw, _stamp())
    try:
        address = await lookup_address(request.app[SESSION_KEY], raw, request.app[TIMEOUT_KEY])
    except ProviderError as exc:
        response = _json_response(exc.error, exc.code)
    else:
        response = _json_response(address, HTTPStatus.OK)
    log.info("-> Time total in milliseconds traveled %.3fms", (time.monotonic() - started) * 1000)
    return response


async def _session_context(app: web.Application) -> AsyncIterator[None]:
    if SESSION_KEY in app:
        yield
        return
    async with aiohttp.ClientSession() as session:
        app[SESSION_KEY] = session
        yield


def create_app(timeout: float = DEFAULT_TIMEOUT) -> web.Application:
    """Build the web application serving /BuscaCep/{cep}."""
    app = web.Application()
    app[TIMEOUT_KEY] = float(timeout)
    app.router.add_route("*", "/BuscaCep/{cep}", _handle_search)
    app.router.add_route("*", "/{tail:.*}", _handle_search)
    app.cleanup_ctx.append(_session_context)
    return app


def main(argv: list[str] | None = None) -> int:
    """Run the CEP search server."""
    parser = argparse.ArgumentParser(description="CEP search server")
    parser.add_argument("--host", default=None)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    print(f"\nIniciando o servidor na porta {args.port} e aguardando requisições")
    web.run_app(create_app(args.timeout), host=args.host, port=args.port, print=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())