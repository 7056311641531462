"""
Shared fixtures: a python one-liner stands in for the zonememstat binary.
"""

import sys

import pytest

GZ_LINE = "                               global            -      850 16777215        0         0     -"
NGZ_LINE = " 6dc5da73-e4e5-45b6-80b9-5d2073e9b1ee        amon0      174   1024        0         0 7.11193"


def python_argv(script: str) -> list[str]:
    return [sys.executable, "-c", script]


@pytest.fixture
def fake_zonememstat_argv() -> list[str]:
    """
    argv for a child printing one global and one non-global zone line
    """
    return python_argv(f"print({GZ_LINE!r}); print({NGZ_LINE!r})")
