"""
The registry of sonar log readers. Each reader module in `pyglf.io.sonar`
provides an `is_a` function, which is found by walking the package on first
use.
"""

import os
from pyglf.io.general.base import GLFIOError, GLFOpenError, check_for_openers

__classification__ = "UNCLASSIFIED"
__author__ = "Benjamin Blundell"


###########
# Module variables
_openers = []
_parsed_openers = False


def register_opener(open_func):
    """
    Add a sonar log opener to the registry. Openers are tried in the order
    of registration.

    Parameters
    ----------
    open_func
        Takes a file name, and returns a reader if the file is of its log
        format, or `None` if not. An opener which recognises the format but
        fails to parse the file raises instead.

    Returns
    -------
    None
    """

    if not callable(open_func):
        raise TypeError('open_func must be a callable')
    if open_func not in _openers:
        _openers.append(open_func)


def parse_openers():
    """
    Register the `is_a` function of each module in `pyglf.io.sonar`, once.
    """

    global _parsed_openers
    if _parsed_openers:
        return
    _parsed_openers = True

    check_for_openers('pyglf.io.sonar', register_opener)


def open_sonar(file_name):
    """
    Open a sonar log with the first registered reader which recognises it.

    Parameters
    ----------
    file_name : str|os.PathLike

    Returns
    -------
    pyglf.io.sonar.glf.GLFReader

    Raises
    ------
    GLFOpenError
        The file does not exist.
    GLFFormatError
        The file is a recognised log, but its record stream is malformed.
    GLFIOError
        No reader recognises the file.
    """

    if not os.path.isfile(file_name):
        raise GLFOpenError('Sonar log file {} does not exist.'.format(file_name))
    parse_openers()
    for opener in _openers:
        reader = opener(file_name)
        if reader is not None:
            return reader

    raise GLFIOError(
        'The format of file {} does not match any sonar log reader.'.format(file_name))
