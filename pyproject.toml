[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "estatedesk"
version = "0.1.0"
description = "Staff-side records for a residential estate kept in SQLite: parking, payments, repairs, rosters, leave, training, visitors and yearly reports"
requires-python = ">=3.10"
dependencies = []
keywords = ["property management", "estate", "sqlite", "rosters", "payments", "visitors"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
estatedesk = "estatedesk.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["estatedesk"]

[tool.pytest.ini_options]
addopts = "-ra"
