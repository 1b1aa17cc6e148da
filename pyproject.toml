[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "utpcore"
version = "0.5.1"
description = "Building blocks of the uTP (Micro Transport Protocol, BEP 29): packet codec, sequence numbers, RTT estimation, MTU probing and CUBIC congestion control"
requires-python = ">=3.10"
dependencies = []
keywords = ["utp", "bep29", "bittorrent", "transport", "congestion-control", "cubic", "udp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
utpcore-udp-bench = "utpcore.udp_bench:main"
utpcore-canary = "utpcore.canary:main"

[tool.hatch.build.targets.wheel]
packages = ["utpcore"]

[tool.hatch.build.targets.sdist]
include = ["utpcore", "tests"]

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
