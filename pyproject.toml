[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vaultdiff"
version = "0.1.0"
description = "Compare secrets stored at two HashiCorp Vault paths and report what differs"
requires-python = ">=3.10"
keywords = ["vault", "secrets", "diff", "kv", "devops", "configuration"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
    "Topic :: Security",
]
dependencies = [
    "requests>=2.28",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[project.scripts]
vaultdiff = "vaultdiff.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["vaultdiff"]

[tool.hatch.build.targets.sdist]
include = ["vaultdiff", "tests"]

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
