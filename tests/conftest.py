"""Shared fixtures for the adapter tests."""

import os
import sys
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def fake_binary(tmp_path: Path) -> Callable[[str], str]:
    """Factory writing an executable that runs the given Python source.

    A /bin/sh wrapper execs the current interpreter, so the script sees the
    same argv a real model binary would.
    """
    counter = iter(range(1000))

    def make(source: str) -> str:
        index = next(counter)
        script = tmp_path / f"fake_model_{index}.py"
        script.write_text(source)
        wrapper = tmp_path / f"fake_model_{index}"
        wrapper.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{script}" "$@"\n')
        os.chmod(wrapper, 0o755)
        return str(wrapper)

    return make


@pytest.fixture
def echo_binary(fake_binary) -> str:
    """Binary that prints the value passed with -p."""
    return fake_binary(
        "import sys\n"
        "args = sys.argv[1:]\n"
        "print(args[args.index('-p') + 1])\n"
    )
