"""
Setup script for the contest-results package.

Installs the contest_results package from src/ together with its SQLite
schema, and exposes the backfill CLI as ``contest-results``.
"""

from setuptools import setup, find_packages

setup(
    name="contest-results",
    version="1.0.0",
    description="Result Aggregation Engine - compile write-once contest Results from progress and submissions",
    author="Contest Platform Team",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "pytest>=7.0",
            "build",
            "wheel",
        ],
    },
    package_data={
        "contest_results._store": ["schema.sql"],
    },
    entry_points={
        "console_scripts": [
            "contest-results=contest_results.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
