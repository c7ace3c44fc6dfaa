[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "daylog"
version = "0.1.0"
description = "Daily activity log services: an action log, authentication and an API gateway"
requires-python = ">=3.10"
keywords = ["daily log", "time tracking", "rest api", "jwt", "gateway", "flask", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask>=2.2",
    "pyjwt>=2.6",
    "bcrypt>=4.0",
    "python-dotenv>=1.0",
    "requests>=2.28",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[project.scripts]
daylog-action = "daylog.action.server:main"
daylog-auth = "daylog.auth.server:main"
daylog-gateway = "daylog.gateway.server:main"

[tool.hatch.build.targets.wheel]
packages = ["daylog"]

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
ignore_missing_imports = true
