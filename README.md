# cepsearch

Look up a Brazilian postal code (CEP) and get its street address back.

The package has two parts:

- **a server** (`cepsearch.server`), which answers `GET /BuscaCep/{cep}`.
  It queries ViaCep and BrasilApi at the same time. The first provider to
  finish decides the reply: its address if it succeeded, its error if it
  failed. The other query is then cancelled.
- **a client** (`cepsearch.client`), which asks that server for one CEP and
  prints the address.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Running the server

```
cepsearch-server
```

Options:

- `--host` – the address to bind to. By default it binds to all interfaces.
- `--port` – the port to listen on. The default is 8080.
- `--timeout` – how many seconds each provider has to answer. The default is 1.0.

The server logs each lookup and the time it took to standard error.

A successful lookup returns status 200 and JSON like this:

```json
{"cep": "01001-000", "logradouro": "Praça da Sé", "bairro": "Sé",
 "localidade": "São Paulo", "uf": "SP", "apiname": "ViaCep"}
```

If the winning provider's body is not a JSON object, the fields in the reply
are empty strings.

Errors come back as `{"message": "...", "code": <int>}`:

- A path outside `/BuscaCep` gives HTTP status 400. The payload carries code 404.
- `/BuscaCep` with no CEP gives 400.
- A CEP with no digits gives 400.
- A CEP whose digits are not exactly eight gives 400. Characters other than
  digits are ignored when counting.
- A provider that runs out of time gives 408.
- A provider request that fails gives 400.

## Querying from the command line

With the server running:

```
cepsearch 01001-000
```

All arguments are joined with spaces to form the CEP. The client asks
`http://localhost:8080` and waits one second for the answer. It prints the
provider that answered, followed by the street, district, city, state and CEP.

On an error it prints a message to standard error and exits with status 1.
This covers a server error reply, a timeout, and a server that cannot be
reached.

## Using it from Python

```python
from cepsearch.client import ClientError, fetch_address, format_address

try:
    address = fetch_address("01001000", "http://localhost:8080", 1.0)
except ClientError as exc:
    print(exc)
else:
    print(format_address(address))
```

Other parts you can use:

- `cepsearch.server.create_app(timeout)` builds the aiohttp application. You
  can run it, mount it, or test it in your own code.
- `cepsearch.server.normalize_cep(raw)` validates input the same way the
  server does. It returns the eight digits, or raises `ValueError` with the
  reason.
- `cepsearch.server.lookup_address(session, cep, timeout)` runs the
  provider race with an `aiohttp.ClientSession`. It returns an `Address`,
  or raises `ProviderError`.
- `cepsearch.address.Address` is the address record. It can be built from
  a ViaCep or BrasilApi object, and read or written as the server's JSON.
- `cepsearch.errors.HttpError` is the error payload, and
  `cepsearch.errors.display_message` reads the message out of an error body.
- `cepsearch.ids.new_uuid()` returns a random UUID string.

## What it does not do

The server does not cache or store results. Every request queries the
providers again. Nothing beyond the one address is kept.