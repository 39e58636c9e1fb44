[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cepsearch"
version = "0.1.0"
description = "HTTP server and client that look up Brazilian postal codes (CEP) by querying two public address APIs at once"
requires-python = ">=3.10"
keywords = ["cep", "address", "postal-code", "brazil", "aiohttp", "http-server"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Framework :: aiohttp",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "aiohttp>=3.9",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
    "pytest-asyncio>=0.23",
    "aiohttp>=3.9",
]

[project.scripts]
cepsearch-server = "cepsearch.server:main"
cepsearch = "cepsearch.client:main"

[tool.hatch.build.targets.wheel]
packages = ["cepsearch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
