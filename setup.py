#!/usr/bin/env python3
"""
Setup script for RouteForge.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

setup(
    name="routeforge",
    version="0.1.0",
    description="Route pattern compiler with optional groups, reverse routing and query-string merging",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="RouteForge Contributors",
    packages=find_packages(include=["routeforge", "routeforge.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "click>=8.1.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "hypothesis>=6.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "routeforge=routeforge.cli.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Software Development :: Libraries",
    ],
    keywords="routing url patterns reverse-routing http",
)
