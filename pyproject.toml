[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hyped"
version = "0.1.0"
description = "Pod control building blocks: logging, clocks, GPIO/I2C/SPI/ADC access, sensor muxing, navigation and a hardware debugger shell"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "embedded",
    "gpio",
    "i2c",
    "spi",
    "adc",
    "sysfs",
    "kalman-filter",
    "navigation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: System :: Hardware",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
hyped-debugger = "hyped.debug.main:main"

[tool.hatch.build.targets.wheel]
packages = ["hyped"]

[tool.pytest.ini_options]
addopts = "-ra"
