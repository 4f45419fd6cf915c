[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fmtones"
version = "0.1.0"
description = "Fixed-point building blocks for six-operator FM synthesis: lookup tables, envelopes, patches, oscillators and filters"
requires-python = ">=3.10"
dependencies = []
keywords = ["synthesizer", "fm", "audio", "dsp", "fixed-point", "envelope", "fir"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["fmtones"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
