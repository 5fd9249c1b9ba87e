[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pfdsp"
version = "0.1.0"
description = "FFTs of sizes 2^a*3^b*5^c, spectrum multiplication, complex frequency-shift mixers and a recursive quadrature oscillator on NumPy"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["fft", "dsp", "mixer", "frequency shift", "oscillator", "signal processing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
]

[project.optional-dependencies]
test = ["pytest", "numpy"]

[tool.hatch.build.targets.wheel]
packages = ["pfdsp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
