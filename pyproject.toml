[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aequi"
version = "2026.3.13"
description = "Bookkeeping toolkit: receipt image preprocessing and content-addressed storage, an MCP tool server and invoice rendering"
requires-python = ">=3.10"
keywords = [
    "accounting",
    "bookkeeping",
    "receipts",
    "invoices",
    "mcp",
    "json-rpc",
    "server-sent-events",
    "typst",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Framework :: aiohttp",
    "Topic :: Office/Business :: Financial :: Accounting",
]
dependencies = [
    "pillow>=10.0",
    "aiohttp>=3.9",
]

[project.optional-dependencies]
test = [
    "pytest>=8.0",
    "pytest-asyncio>=0.23",
]

[tool.hatch.build.targets.wheel]
packages = ["aequi"]

[tool.hatch.build.targets.sdist]
include = ["aequi", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
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
