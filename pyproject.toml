[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "confstack"
version = "0.5.3"
description = "Configuration sources, normalized keys, file formats and typed value conversion"
requires-python = ">=3.11"
keywords = ["configuration", "config", "settings", "env", "environment", "toml", "yaml"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "pyyaml>=6.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
    "hypothesis>=6.80",
]

[tool.hatch.build.targets.wheel]
packages = ["confstack"]

[tool.hatch.build.targets.sdist]
include = ["confstack", "tests"]

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
