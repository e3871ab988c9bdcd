"""Tests for the blocking driver."""

from collections import deque

import pytest

from conftest import ECHO, EXIT_7, EXIT_NOW, GREP_B, PRINT_PID, PYTHON, script
from pyfeed.driver import check_output, drain, execute, pump_input, run
from pyfeed.pipe import DuplexChannel
from pyfeed.process import SpawnError


@pytest.mark.parametrize('count', [0, 1, 10, 1000])
def test_echo_returns_every_line_in_order(backend, count):
    lines = [f'line {i}\n' for i in range(count)]
    output = []
    status = execute(ECHO, list(lines), output.append, backend=backend)
    assert output == [line[:-1] for line in lines]
    assert status.exited and status.code == 0


@pytest.mark.parametrize('count', [0, 3, 100])
def test_exit_code_does_not_depend_on_input(backend, count):
    status = execute(EXIT_7, ['ignored\n'] * count, print, backend=backend)
    assert status.code == 7


def test_child_that_reads_nothing_gives_no_lines(backend):
    calls = []
    status = execute(EXIT_NOW, [], calls.append, backend=backend)
    assert calls == []
    assert status.code == 0


def test_filter_never_waits_for_missing_lines(backend):
    lines = ['abc\n', 'xyz\n', 'bcd\n', 'qqq\n']
    output, status = check_output(GREP_B, lines, backend=backend)
    assert output == ['abc', 'bcd']
    assert all('b' in line for line in output)
    assert status.code == 0


def test_two_runs_are_independent(no_zombie):
    first, first_status = check_output(PRINT_PID)
    second, second_status = check_output(PRINT_PID)
    assert first != second
    assert first_status.code == second_status.code == 0
    for output in (first, second):
        no_zombie(int(output[0]))


def test_input_queue_is_consumed():
    lines = ['a\n', 'b\n']
    execute(ECHO, lines, print)
    assert lines == []


def test_deque_input_queue_is_consumed():
    lines = deque(['a\n', 'b\n'])
    assert check_output(ECHO, lines)[0] == ['a', 'b']
    assert not lines


def test_tuple_and_generator_inputs():
    assert check_output(ECHO, ('a\n', 'b\n'))[0] == ['a', 'b']
    assert check_output(ECHO, (f'{i}\n' for i in range(3)))[0] == ['0', '1', '2']


def test_no_newline_is_added():
    assert check_output(ECHO, ['a', 'b', 'c\n'])[0] == ['abc']


def test_final_partial_line_is_delivered():
    output, _ = check_output(script('import sys; sys.stdout.write("a\\nb")'))
    assert output == ['a', 'b']


def test_blank_lines_are_delivered():
    assert check_output(ECHO, ['\n', 'x\n', '\n'])[0] == ['', 'x', '']


def test_child_closing_its_input_early_is_not_an_error(caplog):
    lines = deque(['x' * 1023 + '\n'] * 4096)
    with caplog.at_level('WARNING', logger='pyfeed.driver'):
        status = execute(EXIT_7, lines, print)
    assert status.code == 7
    assert lines
    assert 'closed its input' in caplog.text


def test_pump_input_keeps_unwritten_lines():
    channel = DuplexChannel()
    channel.to_child.read_fd.close()
    channel.set_as_parent_end()
    lines = ['a\n', 'b\n']
    assert pump_input(channel, lines) is False
    assert lines == ['a\n', 'b\n']
    assert channel.output_closed
    channel.close()


def test_drain_removes_only_what_was_taken():
    queue = ['a', 'b', 'c']
    for item in drain(queue):
        if item == 'b':
            break
    assert queue == ['b', 'c']


def test_concurrent_pumping_handles_big_outputs(backend):
    lines = [f'{i:0999d}\n' for i in range(5000)]
    output, status = check_output(ECHO, lines, concurrent=True, backend=backend)
    assert len(output) == 5000
    assert output[-1] == f'{4999:0999d}'
    assert status.code == 0


def test_on_line_errors_propagate_and_child_is_reaped(no_zombie):
    seen = []

    def on_line(line):
        seen.append(int(line))
        raise RuntimeError('stop')

    with pytest.raises(RuntimeError):
        execute(PRINT_PID, [], on_line)
    no_zombie(seen[0])


def test_on_line_errors_propagate_in_concurrent_mode():
    def on_line(line):
        raise KeyError(line)

    with pytest.raises(KeyError):
        execute([PYTHON, '-c', 'while True: print("y" * 100)'], ['x\n'] * 10, on_line, concurrent=True)


def test_run_result():
    result = run(ECHO, ['a\n'])
    assert result.stdout == ['a']
    assert result.argv.path == PYTHON
    assert result.check() is result


def test_spawn_failure_happens_before_any_io():
    def failing(command, channel):
        raise OSError(11, 'no more processes')

    from types import SimpleNamespace
    lines = ['a\n']
    with pytest.raises(SpawnError):
        execute(ECHO, lines, print, backend=SimpleNamespace(spawn=failing, wait=None))
    assert lines == ['a\n']


def test_encoding(backend):
    output, _ = check_output(ECHO, ['héllo\n'], backend=backend, encoding='latin-1')
    assert output == ['héllo']


def test_input_complete_reports_a_finished_queue(backend):
    result = run(ECHO, ['a\n', 'b\n'], backend=backend)
    assert result.input_complete is True


def test_input_complete_reports_a_child_that_stopped_reading(backend):
    lines = deque(['x' * 1023 + '\n'] * 4096)
    result = run(EXIT_7, lines, backend=backend)
    assert result.input_complete is False
    assert result.status.code == 7
    assert lines


def test_input_complete_in_concurrent_mode():
    assert run(ECHO, ['a\n'], concurrent=True).input_complete is True
    lines = deque(['x' * 1023 + '\n'] * 4096)
    assert run(EXIT_7, lines, concurrent=True).input_complete is False


def test_result_fields_are_unchanged_by_input_complete():
    result = run(ECHO, ['a\n'])
    argv, status, stdout = result
    assert stdout == ['a']
    assert 'input_complete' not in repr(result)


def test_big_list_queue_is_consumed(backend):
    lines = [f'{i}\n' for i in range(100000)]
    output, status = check_output(ECHO, lines, concurrent=True, backend=backend)
    assert len(output) == 100000
    assert output[-1] == '99999'
    assert lines == []
    assert status.code == 0


def test_drain_trims_a_list_when_closed():
    queue = ['a', 'b', 'c', 'd']
    pending = drain(queue)
    assert [next(pending), next(pending), next(pending)] == ['a', 'b', 'c']
    assert queue == ['a', 'b', 'c', 'd']
    pending.close()
    assert queue == ['c', 'd']


def test_drain_leaves_an_untouched_list_alone():
    queue = ['a']
    drain(queue).close()
    assert queue == ['a']
