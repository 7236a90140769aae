[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lineservers"
version = "0.1.0"
description = "Small line-oriented TCP servers and clients: upper-casing, maximum of numbers, delayed timers and a thread-pool line processor"
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "socket", "asyncio", "threads", "server", "client", "line protocol", "networking"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
lineservers-upper-server = "lineservers.upper:server_main"
lineservers-upper-client = "lineservers.upper:client_main"
lineservers-max-server = "lineservers.maxnum:server_main"
lineservers-max-client = "lineservers.maxnum:client_main"
lineservers-timer-server = "lineservers.timer:server_main"
lineservers-timer-client = "lineservers.timer:client_main"
lineservers-pool-demo = "lineservers.pool:main"

[tool.hatch.build.targets.wheel]
packages = ["lineservers"]

[tool.hatch.build.targets.sdist]
include = ["lineservers", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
