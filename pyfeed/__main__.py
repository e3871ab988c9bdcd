from doctest import testmod
from . import fd, thread, pipe, posix_wait, command, fork_exec, subprocess, process
from . import driver, background, stream, util

from .process import change_default_backend, get_backend

print('checking backends...')
for mod in fork_exec, subprocess:
    print(f'\t{mod.__name__}...')
    testmod(mod)
print()

for backend in 'fork_exec', 'subprocess':
    change_default_backend(backend)
    print(f'with backend {get_backend.default.__name__}...')
    for mod in fd, thread, pipe, posix_wait, command, process, driver, background, stream, util:
        print(f'\t{mod.__name__}...')
        testmod(mod)
    print()
