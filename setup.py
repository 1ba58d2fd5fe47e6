"""
Setup script for stepwise.

Stepwise is the stepped session engine behind timed knowledge quizzes
and timed workouts:

1. Session engine - traversal, timing, pause/resume and scoring
2. Completion history - append-only results with best score, streak and level
3. Terminal driver - run any catalog session from the command line

The 'stepwise' command is the entry point.
"""

from setuptools import find_namespace_packages, setup

setup(
    name="stepwise",
    version="1.0.0",
    description="Stepped session engine for timed quizzes and workouts",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_namespace_packages(include=["src", "src.*"]),
    py_modules=["config"],
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "stepwise=src.cli.stepwise_cli:run_cli",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
    ],
    keywords="quiz workout training session engine cli",
)
