"""
The basic exception definitions for reading, and the opener registration
helper used by the format specific converters.
"""

__classification__ = "UNCLASSIFIED"
__author__ = "Benjamin Blundell"

import logging
from typing import Callable
from importlib import import_module
import pkgutil

from pyglf.compliance import GLFError

logger = logging.getLogger(__name__)


class GLFIOError(GLFError):
    """A custom exception class for discovered input/output errors."""


class GLFOpenError(GLFIOError):
    """The file system refused to provide the requested file."""


class GLFContainerError(GLFIOError):
    """The zip container is unreadable, or lacks the `.dat` record stream."""


class GLFFormatError(GLFIOError):
    """
    The record stream is truncated or malformed. This covers reads past the end
    of the buffer, failed sentinel checks, and unsupported record types.
    """


class UnsupportedCompressionError(GLFError, NotImplementedError):
    """The image payload uses a compression scheme which can not be decoded."""


class GLFIndexError(GLFError, IndexError):
    """The requested image index is outside of the image record collection."""


class DecompressionError(GLFError):
    """The zlib decoder rejected the payload, or gave the wrong size output."""


############
# module walking to register openers

def check_for_openers(start_package: str, register_method: Callable) -> None:
    """
    Walks the package, and registers the discovered openers. That is, the modules
    with an :meth:`is_a` method.

    Parameters
    ----------
    start_package : str
    register_method : Callable
    """

    module = import_module(start_package)
    for details in pkgutil.walk_packages(module.__path__, start_package+'.'):
        _, module_name, is_pkg = details
        if is_pkg:
            # don't bother checking for packages
            continue
        sub_module = import_module(module_name)
        if hasattr(sub_module, 'is_a'):
            logger.debug('Registering opener from module {}'.format(module_name))
            register_method(sub_module.is_a)
