#!/usr/bin/env python
import os

from setuptools import find_packages, setup


def get_version():
    about = {}
    with open(os.path.join("src", "raster_tools", "version.py")) as f:
        exec(f.read(), about)
    return about["__version__"]


setup(
    name="raster-tools",
    version=get_version(),
    description="Deterministic pixel transforms and compositing on NumPy buffers",
    license="MIT",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "attrs>=23.0.0",
        "numpy",
        "Pillow>=9.1.0",
    ],
    extras_require={
        "filters": ["scipy"],
        "test": ["pytest", "scipy"],
    },
    entry_points={
        "console_scripts": [
            "raster-tools=raster_tools.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Topic :: Multimedia :: Graphics",
    ],
)
