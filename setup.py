import pathlib
import sys

from setuptools import find_packages
from setuptools import setup


assert sys.version_info >= (3, 10, 0), "dyntour requires Python 3.10+"

NAME = "dyntour"
VERSION = "0.1.0"
DESCRIPTION = "A guided tour of ODE solving, chaos analysis, SINDy and hybrid models"
PYTHON = ">=3.10"
LICENSE = "MIT"
CLASSIFIERS = [
    "Programming Language :: Python",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "License :: OSI Approved :: MIT License",
    "Topic :: Scientific/Engineering :: Mathematics",
]

here = pathlib.Path(__file__).parent

with open(here / "requirements.txt", "r") as f:
    REQUIRED = [line.strip() for line in f if line.strip()]

with open(here / "README.rst", "r") as f:
    LONG_DESCRIPTION = f.read()


setup(
    name=NAME,
    version=VERSION,
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/x-rst",
    packages=find_packages(exclude=["test", "test.*", "examples"]),
    install_requires=REQUIRED,
    extras_require={"dev": ["pytest>=7"]},
    python_requires=PYTHON,
    license=LICENSE,
    classifiers=CLASSIFIERS,
)
