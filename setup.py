"""Setup configuration for pical."""

from setuptools import setup, find_packages
from pathlib import Path

# Read the contents of README file
current_directory = Path(__file__).parent
long_description = (current_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="pical",
    version="0.1.0",
    description="Parse iCal calendars into a sorted list of events with recurrences expanded",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "*.tests", "*.tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        # No external runtime dependencies - uses only Python stdlib
    ],
    extras_require={
        "dev": [
            "black>=25.9.0",
            "pytest>=8.4.2",
        ],
    },
    entry_points={
        "console_scripts": [
            "pical=pical.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Office/Business :: Scheduling",
    ],
    keywords="calendar ical ics rrule recurrence",
)
