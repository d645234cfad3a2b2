[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mipssim"
version = "0.1.0"
description = "A small simulator for a subset of MIPS assembly, modelled as a five-stage datapath"
requires-python = ">=3.10"
dependencies = []
keywords = ["mips", "simulator", "assembly", "pipeline", "emulator"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mips-sim = "mipssim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mipssim"]

[tool.pytest.ini_options]
addopts = "-ra"
