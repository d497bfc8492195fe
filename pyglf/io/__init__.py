"""
The reading entry point. Format specific readers live in the sub-packages.
"""

__classification__ = "UNCLASSIFIED"


def open(file_name):
    """
    Given a file, try to find and return the appropriate reader object. Errors
    from a reader which recognised the file, but failed to read it, are
    raised unchanged.

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
        The file is a GLF capture with a malformed record stream.
    GLFIOError
        The file is not of any supported format.
    """

    from .sonar.converter import open_sonar
    return open_sonar(file_name)
