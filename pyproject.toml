[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dmrcc"
version = "0.1.0"
description = "Back end of a small C compiler: source AST, three-address intermediate code, x86-64 assembly tree and AT&T assembly emission"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "c", "x86-64", "assembly", "codegen", "tacky"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dmrcc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
