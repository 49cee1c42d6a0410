[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minijvm"
version = "0.1.0"
description = "Runtime core of a small Java virtual machine: command-line arguments, threads and interpreter frames"
requires-python = ">=3.10"
dependencies = []
keywords = ["jvm", "java", "bytecode", "interpreter", "virtual machine", "stack frame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["minijvm"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
