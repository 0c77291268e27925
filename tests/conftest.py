"""
Pytest configuration and shared fixtures for envsource tests.

This module provides fixtures and configuration that are shared across all tests.
"""
import pytest

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


SAMPLE_SOURCE = '''
name1=value1
export name2=value2
name3="Hello\\nWorld"

name4=value4 # this is a comment

# this is a comment as well
'''


@pytest.fixture
def sourcer():
    """Fixture providing a Sourcer with the default configuration."""
    from envsource import Sourcer

    return Sourcer()


@pytest.fixture
def sample_source():
    """Fixture providing a small source exercising exports, quotes and comments."""
    return SAMPLE_SOURCE


@pytest.fixture
def sample_pairs():
    """Fixture providing the definitions found in sample_source, in order."""
    return [
        ("name1", "value1"),
        ("name2", "value2"),
        ("name3", "Hello\nWorld"),
        ("name4", "value4"),
    ]


@pytest.fixture
def fake_environ():
    """Plain dict used as the environment so tests never touch os.environ."""
    return {}


@pytest.fixture
def tmp_env_file(tmp_path, sample_source):
    """Fixture writing sample_source to a .env file and returning its path."""
    path = tmp_path / ".env"
    path.write_text(sample_source, encoding="utf-8")
    return path
