[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minismash"
version = "0.1.0"
description = "Building blocks of a small shell: syntax checks, tokenizing, variable expansion, quote removal, redirections, pipes, command lookup and built-in commands"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "command-line", "tokenizer", "pipes", "redirection", "expansion"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["minismash"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
