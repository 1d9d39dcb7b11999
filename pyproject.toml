[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "urest"
version = "0.1.0"
description = "Building blocks for REST services and clients: ordered key/value maps, URL routing, request and response objects, cookies and an HTTP client"
requires-python = ">=3.10"
dependencies = []
keywords = ["rest", "http", "routing", "cookies", "web", "client"]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["urest"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
