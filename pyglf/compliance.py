__classification__ = "UNCLASSIFIED"
__author__ = "Benjamin Blundell"


class GLFError(Exception):
    """A custom exception class for errors raised by pyglf."""
