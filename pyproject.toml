[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "circomls"
version = "0.1.0"
description = "Lexer, error-tolerant parser, syntax tree and semantic index for the Circom circuit language"
requires-python = ">=3.10"
dependencies = []
keywords = ["circom", "parser", "lexer", "syntax-tree", "ast", "zero-knowledge"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["circomls"]

[tool.pytest.ini_options]
addopts = "-ra"
