[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gomodkit"
version = "0.1.0"
description = "Helpers for Go modules: build module commands, manage their launch scripts, and prepare documentation pages."
requires-python = ">=3.10"
keywords = ["go", "golang", "modules", "go-install", "documentation", "templates"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Topic :: Software Development :: Documentation",
]
dependencies = [
    "beautifulsoup4[html5lib]",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gomodkit-gendoc = "gomodkit.gopages.gendoc:main"

[tool.hatch.build.targets.wheel]
packages = ["gomodkit"]

[tool.hatch.build.targets.sdist]
include = ["gomodkit", "tests"]

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
