import json

import pytest

from cepsearch.errors import HttpError, display_message


def test_to_dict_uses_wire_names():
    error = HttpError("Um CEP deve ser informado, tente novamente !!", 400)
    assert error.to_dict() == {
        "message": "Um CEP deve ser informado, tente novamente !!",
        "code": 400,
    }


def test_to_json_keeps_non_ascii_text():
    error = HttpError("O CEP 123 não é um número válido", 400)
    text = error.to_json()
    assert "não é um número válido" in text
    assert json.loads(text) == error.to_dict()


def test_round_trip_through_display_message():
    error = HttpError("__Error searching for ViaCep.", 408)
    assert display_message(error.to_json()) == error.message


def test_display_message_accepts_bytes():
    error = HttpError("Falha", 400)
    assert display_message(error.to_json().encode("utf-8")) == "Falha"


def test_missing_message_gives_empty_text():
    assert display_message(b'{"code": 400}') == ""


def test_null_message_gives_empty_text():
    assert display_message('{"message": null}') == ""


@pytest.mark.parametrize(
    "body",
    [b"not json", b"[1, 2]", b"null", b'{"message": 5}', b'{"code": "x"}', b'{"code": 1.5}'],
)
def test_bad_bodies_raise(body):
    with pytest.raises(ValueError):
        display_message(body)