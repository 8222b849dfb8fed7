"""Pytest configuration and shared fixtures for the mdscroll test suite."""

import os
from pathlib import Path
from typing import Generator

import pytest
from hypothesis import Phase, Verbosity, settings

from mdscroll.themes import Theme, get_theme

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


SCENARIO_MARKDOWN = "# Title\n\nHello [link](test.md) world"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def theme() -> Theme:
    """Return the default theme."""
    return get_theme("default")


@pytest.fixture
def scenario_markdown() -> str:
    """Heading followed by a paragraph with one link."""
    return SCENARIO_MARKDOWN


@pytest.fixture
def sample_markdown() -> str:
    """Document exercising every block kind."""
    return (
        "# Guide\n"
        "\n"
        "Intro with **bold** and *italic* text.\n"
        "\n"
        "## Install\n"
        "\n"
        "```bash\n"
        "pip install mdscroll\n"
        "mdscroll README.md\n"
        "```\n"
        "\n"
        "- first\n"
        "- second\n"
        "\n"
        "> quoted words\n"
        "\n"
        "---\n"
        "\n"
        "### Links\n"
        "\n"
        "See [intro](#guide) and [site](https://example.com).\n"
    )


@pytest.fixture
def temp_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a working directory and chdir into it for the test."""
    previous = Path.cwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(previous)
