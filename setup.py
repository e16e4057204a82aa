#!/usr/bin/env python3
"""
Setup script for tetrisai
"""

from setuptools import setup, find_packages

# Read the README file
def read_readme():
    with open("README.md", "r", encoding="utf-8") as fh:
        return fh.read()

# Read requirements
def read_requirements():
    with open("requirements.txt", "r", encoding="utf-8") as fh:
        return [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="tetrisai",
    version="0.1.0",
    description="Tetris board simulation with a two-level expectimax autoplayer",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["tetrisai", "tetrisai.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Topic :: Games/Entertainment :: Puzzle Games",
    ],
    python_requires=">=3.9",
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "tetrisai=tetrisai.main:main",
        ],
    },
    keywords=[
        "tetris",
        "ai",
        "expectimax",
        "gymnasium",
    ],
)
