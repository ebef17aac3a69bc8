[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "triagebot"
version = "0.1.0"
description = "Command parsing, mention detection, changelog splitting and repository configuration for an issue triage bot"
requires-python = ">=3.11"
keywords = [
    "triage",
    "bot",
    "issues",
    "pull-requests",
    "commands",
    "parser",
    "mentions",
    "changelog",
    "configuration",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Bug Tracking",
    "Topic :: Text Processing :: Markup :: Markdown",
]
dependencies = [
    "markdown-it-py",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["triagebot"]

[tool.hatch.build.targets.sdist]
include = [
    "triagebot",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
