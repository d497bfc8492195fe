"""
**pyglf** reads the GLF log files recorded by Tritech Gemini multibeam sonars.

A GLF file is a zip archive holding a `.dat` stream of image and status
records. The frames are exposed as 8-bit grayscale numpy arrays, see
:class:`pyglf.io.sonar.glf.GLFReader`, or :func:`pyglf.io.open` for the
general entry point.
"""

from .__about__ import *
import logging


__all__ = ['__version__',
           '__classification__', '__author__', '__url__', '__email__',
           '__title__', '__summary__',
           '__license__', '__copyright__']


# the package logger, quiet unless the application says otherwise
logger = logging.getLogger(__name__)
logger.setLevel(logging.WARNING)
