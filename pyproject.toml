[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fintrail"
version = "0.1.0"
description = "Personal finance tracker backend: SQLite transactions, net worth, a JSON settings store and a small query cache"
requires-python = ">=3.10"
dependencies = []
keywords = ["finance", "accounting", "budget", "transactions", "net-worth", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Accounting",
    "Topic :: Database",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
fintrail = "fintrail.commands:main"

[tool.hatch.build.targets.wheel]
packages = ["fintrail"]

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
