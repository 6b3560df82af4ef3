[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rart"
version = "0.1.0"
description = "Adaptive random testing algorithms (FSCS-ART, KDFC-ART, LHS) with simulated fault zones"
requires-python = ">=3.10"
dependencies = []
keywords = ["adaptive random testing", "software testing", "kd-tree", "latin hypercube", "fault simulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rart"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
