#!/usr/bin/env python3
"""
Setup script for Folder Organizer
Allows installation via pip
"""

from pathlib import Path

from setuptools import find_packages, setup

# Read README
this_directory = Path(__file__).parent
long_description = (
    (this_directory / "README.md").read_text(encoding="utf-8")
    if (this_directory / "README.md").exists()
    else ""
)

setup(
    name="folder-organizer",
    version="0.4.0",
    author="Folder Organizer Contributors",
    author_email="",
    description="Copies finished downloads and mirrors directory trees as files arrive",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Utilities",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: MacOS",
        "Operating System :: POSIX :: Linux",
        "Operating System :: Microsoft :: Windows",
    ],
    python_requires=">=3.9",
    entry_points={
        "console_scripts": [
            "folder-organizer=folder_organizer.main:main",
        ],
    },
    install_requires=[
        "watchdog>=3.0",
        "rich>=13.0.0",
        "tenacity>=8.2",
        "python-dotenv>=1.0",
        "guessit>=3.7",
        "tomli>=2.0; python_version < '3.11'",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "pytest-xdist>=3.0",
            "hypothesis>=6.0",
        ],
    },
    keywords="watch, downloads, mirror, sync, organize, files, directory",
)
