"""
Shared pytest fixtures for envconfig tests

Provides:
- A clean process environment for tests that bind from os.environ
- Descriptor cache reset between tests
"""

import os

import pytest

from envconfig.schema import describe_record


@pytest.fixture
def clean_environment():
    """Snapshot os.environ and restore it after the test."""
    original_env = os.environ.copy()

    yield os.environ

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def clear_descriptor_cache():
    """Drop cached descriptors so locally defined records do not accumulate."""
    yield
    describe_record.cache_clear()
