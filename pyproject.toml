[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "actorcall"
version = "0.1.0"
description = "Cast, call and timer helpers for asyncio actors, with call results and big-endian payload encoding"
requires-python = ">=3.10"
dependencies = []
keywords = ["actor", "asyncio", "rpc", "timers", "serialization", "message passing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["actorcall"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
