[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tarfuzz"
version = "0.1.0"
description = "Header-field fuzzer that builds malformed tar archives and checks whether an extractor crashes on them"
requires-python = ">=3.10"
dependencies = []
keywords = ["fuzzing", "tar", "ustar", "testing", "archive"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing",
    "Topic :: System :: Archiving",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tarfuzz = "tarfuzz.fuzzer:main"

[tool.hatch.build.targets.wheel]
packages = ["tarfuzz"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
