#!/usr/bin/env python3

import setuptools

long_description = '''pyfeed - treat a child process as a line filter

Spawn a program, feed lines to its stdin and read its stdout back line by
line, either blocking with a callback, in the background with a future, or
lazily through an iterator.
'''

setuptools.setup(
    name='pyfeed',
    version='0.1.0',
    author='Mihail Georgiev',
    author_email='misho88@gmail.com',
    description='pyfeed - feed lines through a child process',
    long_description=long_description,
    long_description_content_type='text/plain',
    packages=setuptools.find_packages(exclude=['tests']),
    python_requires='>=3.10',
    install_requires=['funcpipes'],
    extras_require={'test': ['pytest']},
)
