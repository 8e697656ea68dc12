[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "typelib"
version = "0.1.0"
description = "Registry of builtin and struct type layouts with YAML type-file loading and storing"
requires-python = ">=3.10"
keywords = ["types", "struct layout", "type database", "yaml", "memory"]
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
    "Topic :: Software Development :: Libraries",
]
dependencies = [
    "pyyaml>=6.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[tool.hatch.build.targets.wheel]
packages = ["typelib"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"

[[tool.mypy.overrides]]
module = ["yaml"]
ignore_missing_imports = true
