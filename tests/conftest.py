"""Pytest configuration file."""

import sys

import pytest

PYTHON = sys.executable


def script(source):
    """Command line running a small Python program in the child."""
    return [PYTHON, '-c', source]


ECHO = script('import sys\nfor line in sys.stdin.buffer: sys.stdout.buffer.write(line)')
EXIT_7 = script('import sys; sys.exit(7)')
EXIT_NOW = script('pass')
GREP_B = script('import sys\nfor line in sys.stdin:\n    if "b" in line: sys.stdout.write(line)')
PRINT_PID = script('import os, time; print(os.getpid(), flush=True); time.sleep(0.2)')


@pytest.fixture(params=['fork_exec', 'subprocess'])
def backend(request):
    """Name of each spawn backend in turn."""
    return request.param


@pytest.fixture
def no_zombie():
    """Check that a pid has already been reaped."""
    import os

    def check(pid):
        with pytest.raises(ChildProcessError):
            os.waitpid(pid, os.WNOHANG)

    return check
