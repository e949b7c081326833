#!/usr/bin/env python3
"""
Setup configuration for tracklink
Link catalog tracks to video search results with confidence scores
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "rapidfuzz>=3.0.0",
    "numpy>=1.24.0",
    "scipy>=1.10.0",
    "click>=8.1.7",
    "rich-click>=1.7.0",
    "pyyaml>=6.0.1",
    "tqdm>=4.66.1",
]

setup(
    name="tracklink",
    version="0.1.0",
    author="tracklink Team",
    description="Cross-catalog record linkage for music tracks and video search results",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["tracklink", "tracklink.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Text Processing :: General",
    ],
    python_requires=">=3.10",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "black>=23.11.0",
            "flake8>=6.1.0",
            "mypy>=1.7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tracklink=tracklink.cli:main",
        ],
    },
    keywords="music matching record-linkage youtube spotify levenshtein",
)
