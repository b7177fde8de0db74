"""Setup script for icalbuilder."""

from pathlib import Path

from setuptools import find_packages, setup

HERE = Path(__file__).parent

# Packages only needed to run the test suite
TEST_PACKAGES = ("pytest", "icalendar")


def read_requirements(path: Path) -> tuple[list[str], list[str]]:
    """Split requirements.txt into runtime and test requirements."""
    runtime: list[str] = []
    testing: list[str] = []
    if not path.exists():
        return runtime, testing

    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        target = testing if line.lower().startswith(TEST_PACKAGES) else runtime
        target.append(line)
    return runtime, testing


readme = HERE / "README.md"
install_requires, test_requires = read_requirements(HERE / "requirements.txt")

setup(
    name="icalbuilder",
    version="1.0.0",
    description="Build iCalendar (RFC 5545) documents with validated events, attendees and alarms",
    long_description=readme.read_text(encoding="utf-8") if readme.exists() else "",
    long_description_content_type="text/markdown",
    author="icalbuilder Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"icalbuilder": ["py.typed"]},
    include_package_data=True,
    install_requires=install_requires,
    extras_require={
        "test": test_requires,
        "dev": test_requires + ["black>=23.0.0", "isort>=5.12.0", "mypy>=1.0.0"],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Office/Business :: Scheduling",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords="calendar ical icalendar ics rfc5545 vevent rrule",
    zip_safe=False,
)
