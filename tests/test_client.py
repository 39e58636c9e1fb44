import socket
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from cepsearch.address import Address
from cepsearch.client import ClientError, fetch_address, format_address
from cepsearch.errors import HttpError

SAMPLE = Address(
    cep="01001-000",
    rua="Praça da Sé",
    bairro="Sé",
    cidade="São Paulo",
    estado="SP",
    apiname="ViaCep",
)
SERVER_ERROR = HttpError("Um CEP deve ser informado, tente novamente !!", 400)


class _Handler(BaseHTTPRequestHandler):
    def _send(self, status, body):
        data = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        try:
            self.wfile.write(data)
        except OSError:
            pass

    def do_GET(self):
        cep = self.path.rsplit("/", 1)[-1]
        if cep == "01001000":
            self._send(200, SAMPLE.to_json())
        elif cep == "missing":
            self._send(400, SERVER_ERROR.to_json())
        elif cep == "badjson":
            self._send(400, "not json")
        elif cep == "garbled":
            self._send(200, "garbage")
        elif cep == "slow":
            time.sleep(0.5)
            self._send(200, SAMPLE.to_json())
        else:
            self._send(400, HttpError(self.path, 400).to_json())

    def log_message(self, *args):
        pass


@pytest.fixture
def base_url():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


def test_fetch_address_success(base_url):
    assert fetch_address("01001000", base_url=base_url) == SAMPLE


def test_fetch_address_reports_server_message(base_url):
    with pytest.raises(ClientError, match="Falha durante a cotação") as info:
        fetch_address("missing", base_url=base_url)
    assert SERVER_ERROR.message in str(info.value)


def test_fetch_address_unreadable_error_body(base_url):
    with pytest.raises(ClientError, match="Erro ao converter resposta"):
        fetch_address("badjson", base_url=base_url)


def test_fetch_address_unreadable_success_body(base_url, capsys):
    assert fetch_address("garbled", base_url=base_url) == Address()
    assert "Erro ao converter a resposta Body" in capsys.readouterr().err


def test_fetch_address_quotes_spaces(base_url):
    with pytest.raises(ClientError) as info:
        fetch_address("12 34", base_url=base_url)
    assert "/BuscaCep/12%2034" in str(info.value)


def test_fetch_address_timeout(base_url):
    with pytest.raises(ClientError, match="SERVER demorou para responder"):
        fetch_address("slow", base_url=base_url, timeout=0.1)


def test_fetch_address_unreachable_server():
    probe = socket.socket()
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    with pytest.raises(ClientError, match="Erro ao chamar o SERVER"):
        fetch_address("01001000", base_url=f"http://127.0.0.1:{port}")


def test_format_address_lists_every_field():
    text = format_address(SAMPLE)
    lines = text.splitlines()
    assert lines[0] == "Você foi atendido por ViaCep"
    assert lines[1] == " ENDEREÇO RETORNADO"
    assert f" Rua: {SAMPLE.rua}" in lines
    assert f" Bairro: {SAMPLE.bairro}" in lines
    assert f" Cidade: {SAMPLE.cidade}" in lines
    assert f" Estado: {SAMPLE.estado}" in lines
    assert lines[-1] == f" CEP: {SAMPLE.cep}"
    assert text.endswith("\n")