[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "suplog"
version = "0.1.0"
description = "Structured logging building blocks: levels, entries, deferred fields, error-driven levels, blob offloading and error-report tooling"
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "structured-logging", "hooks", "error-reporting", "ulid"]
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
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["suplog"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
