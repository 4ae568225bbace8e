"""
setup.py

Packaging metadata and CLI entry point for kontent-validation-export.

Version: 1.0.0 — Runs a Management API environment validation, waits for it
to finish and exports the reported issues to CSV and JSON.
"""
from setuptools import setup, find_packages

setup(
    name="kontent-validation-export",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click",
        "pydantic>=2.0",
        "requests",
        "pyyaml",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "hypothesis",
        ],
    },
    entry_points={
        "console_scripts": [
            "kontent-validation-export=cli:cli",
        ],
    },
    python_requires=">=3.10",
)
