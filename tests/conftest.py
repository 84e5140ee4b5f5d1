"""Shared pytest configuration."""

import os
import tempfile


def pytest_configure(config):
    # The exercise registry reads ~/.iron-log/exercises when first imported;
    # point HOME at an empty directory so a developer's overrides never leak in.
    os.environ["HOME"] = tempfile.mkdtemp(prefix="iron-log-home-")
