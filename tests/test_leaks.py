"""Descriptor leak checks: every way of running a child gives its fds back."""

import gc
import os

import pytest

from conftest import ECHO, EXIT_7, PRINT_PID
from pyfeed.background import spawn_async
from pyfeed.driver import check_output, execute
from pyfeed.fork_exec import EXEC_FAILURE
from pyfeed.stream import ProcessStream

FD_DIR = '/proc/self/fd'

pytestmark = pytest.mark.skipif(not os.path.isdir(FD_DIR), reason='needs /proc/self/fd')


def open_fds():
    gc.collect()
    return len(os.listdir(FD_DIR))


def check_output_run(backend):
    output, status = check_output(ECHO, ['a\n', 'b\n'], backend=backend)
    assert output == ['a', 'b']


def early_close_run(backend):
    stream = ProcessStream(PRINT_PID, backend=backend)
    assert int(stream.begin().value) > 0
    stream.close()


def abandoned_stream_run(backend):
    stream = ProcessStream(PRINT_PID, backend=backend)
    stream.begin()
    del stream


def background_run(backend):
    output = []
    status = spawn_async(ECHO, ['a\n'], output.append, backend=backend).result(10)
    assert status.code == 0


def stopped_reading_run(backend):
    assert execute(EXIT_7, ['x' * 1023 + '\n'] * 256, print, backend=backend).code == 7


def exec_failure_run(backend):
    assert execute('/no/such/program', ['a\n'], print, backend=backend).code == EXEC_FAILURE


@pytest.mark.parametrize('run_once', [
    check_output_run, early_close_run, abandoned_stream_run,
    background_run, stopped_reading_run, exec_failure_run,
])
def test_no_descriptor_is_left_open(backend, run_once):
    run_once(backend)
    before = open_fds()
    for _ in range(20):
        run_once(backend)
    assert open_fds() == before
