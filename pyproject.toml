[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lobbybbs"
version = "0.101.0"
description = "Building blocks for a small multi-user telnet BBS: who lists, eXpress messages, friend lists, a pager, password hashing and a listener"
requires-python = ">=3.10"
keywords = ["bbs", "telnet", "chat", "messaging", "server"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: No Input/Output (Daemon)",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: BBS",
    "Topic :: Communications :: Chat",
]
dependencies = [
    "passlib",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
lobbybbs = "lobbybbs.server:main"

[tool.hatch.build.targets.wheel]
packages = ["lobbybbs"]

[tool.pytest.ini_options]
addopts = "-ra"
