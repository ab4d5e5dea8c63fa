[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qbtui"
version = "0.1.0"
description = "Building blocks for a terminal user interface to the qBittorrent Web API"
requires-python = ">=3.11"
keywords = ["qbittorrent", "torrent", "tui", "terminal", "webui", "rich"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: File Sharing",
    "Typing :: Typed",
]
dependencies = [
    "httpx>=0.25",
    "rich>=13.0",
    "platformdirs>=3.0",
    "tomli-w>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[tool.hatch.build.targets.wheel]
packages = ["qbtui"]

[tool.hatch.build.targets.sdist]
include = ["qbtui", "tests"]

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
