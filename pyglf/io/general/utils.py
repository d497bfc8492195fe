"""
Common functionality for file type checks and little-endian binary parsing.
"""

__classification__ = "UNCLASSIFIED"
__author__ = "Benjamin Blundell"


from typing import Union, BinaryIO, Any, Optional, Tuple
import os
import struct

import numpy

from pyglf.io.general.base import GLFFormatError


###########
# general file type checks

def is_file_like(the_input: Any) -> bool:
    """
    Verify whether the provided input appear to provide a "file-like object". This
    term is used ubiquitously, but not all usages are identical. In this case, we
    mean that there exist callable attributes `read`, `write`, `seek`, and `tell`.

    Note that this does not check the mode (binary/string or read/write/append),
    as it is not clear that there is any generally accessible way to do so.

    Parameters
    ----------
    the_input

    Returns
    -------
    bool
    """

    out = True
    for attribute in ['read', 'write', 'seek', 'tell']:
        value = getattr(the_input, attribute, None)
        out &= callable(value)
    return out


def is_real_file(the_input: BinaryIO) -> bool:
    """
    Determine if the file-like object is associated with an actual file, as
    opposed to an in-memory buffer.

    Parameters
    ----------
    the_input : BinaryIO

    Returns
    -------
    bool
    """

    if not hasattr(the_input, 'fileno'):
        return False
    # noinspection PyBroadException
    try:
        fileno = the_input.fileno()
        return isinstance(fileno, int) and (fileno >= 0)
    except Exception:
        return False


def _fetch_initial_bytes(file_name: Union[str, BinaryIO], size: int) -> Optional[bytes]:
    header = b''
    if is_file_like(file_name):
        current_location = file_name.tell()
        file_name.seek(0, os.SEEK_SET)
        header = file_name.read(size)
        file_name.seek(current_location, os.SEEK_SET)
    elif isinstance(file_name, str):
        if not os.path.isfile(file_name):
            return None

        with open(file_name, 'rb') as fi:
            header = fi.read(size)

    if len(header) != size:
        return None
    return header


def is_zip(file_name: Union[str, BinaryIO]) -> bool:
    """
    Test whether the given input starts with a zip local file header (or is an
    empty zip archive), based solely on checking initial bytes.

    Parameters
    ----------
    file_name : str|BinaryIO

    Returns
    -------
    bool
    """

    header = _fetch_initial_bytes(file_name, 4)
    if header is None:
        return False
    return header in (b'PK\x03\x04', b'PK\x05\x06')


###########
# little-endian primitive reading

class ByteReader(object):
    """
    Little-endian reads of primitive values at arbitrary offsets of an immutable
    byte buffer. Every read is bounds checked, and a read which falls outside
    of the buffer raises a :class:`GLFFormatError`.
    """

    __slots__ = ('_buffer', )
    _u8 = struct.Struct('<B')
    _u16 = struct.Struct('<H')
    _u32 = struct.Struct('<I')
    _u64 = struct.Struct('<Q')
    _f32 = struct.Struct('<f')
    _f64 = struct.Struct('<d')

    def __init__(self, buffer: bytes):
        """

        Parameters
        ----------
        buffer : bytes
        """

        if not isinstance(buffer, bytes):
            raise TypeError('buffer must be of type bytes. Got type {}'.format(type(buffer)))
        self._buffer = buffer

    @property
    def buffer(self) -> bytes:
        """
        bytes: The underlying buffer.
        """

        return self._buffer

    def __len__(self):
        return len(self._buffer)

    def check_bounds(self, offset: int, size: int) -> None:
        """
        Verify that `size` bytes may be read starting at `offset`.

        Parameters
        ----------
        offset : int
        size : int

        Raises
        ------
        GLFFormatError
        """

        if offset < 0 or size < 0 or offset + size > len(self._buffer):
            raise GLFFormatError(
                'Attempted to read {} bytes at offset {}, but the buffer has '
                'length {}'.format(size, offset, len(self._buffer)))

    def _read(self, the_struct: struct.Struct, offset: int):
        self.check_bounds(offset, the_struct.size)
        return the_struct.unpack_from(self._buffer, offset)[0]

    def read_u8(self, offset: int) -> int:
        return self._read(self._u8, offset)

    def read_u16(self, offset: int) -> int:
        return self._read(self._u16, offset)

    def read_u32(self, offset: int) -> int:
        return self._read(self._u32, offset)

    def read_u64(self, offset: int) -> int:
        return self._read(self._u64, offset)

    def read_f32(self, offset: int) -> float:
        return self._read(self._f32, offset)

    def read_f64(self, offset: int) -> float:
        return self._read(self._f64, offset)

    def read_bytes(self, offset: int, count: int) -> bytes:
        """
        Fetch a copy of `count` bytes, starting at `offset`.

        Parameters
        ----------
        offset : int
        count : int

        Returns
        -------
        bytes
        """

        self.check_bounds(offset, count)
        return self._buffer[offset:offset+count]

    def read_f64_array(self, offset: int, count: int) -> numpy.ndarray:
        """
        Fetch `count` consecutive little-endian doubles, starting at `offset`.

        Parameters
        ----------
        offset : int
        count : int

        Returns
        -------
        numpy.ndarray
            Of dtype float64 and shape `(count, )`.
        """

        self.check_bounds(offset, 8*count)
        if count == 0:
            return numpy.zeros((0, ), dtype='float64')
        return numpy.frombuffer(self._buffer, dtype='<f8', count=count, offset=offset).astype('float64')

    def unpack(self, fmt: str, offset: int) -> Tuple:
        """
        Unpack a group of values using a :mod:`struct` format string. The format
        is always interpreted as little-endian with no alignment padding.

        Parameters
        ----------
        fmt : str
            The format string, without byte order character.
        offset : int

        Returns
        -------
        tuple
        """

        fmt = '<' + fmt
        self.check_bounds(offset, struct.calcsize(fmt))
        return struct.unpack_from(fmt, self._buffer, offset)
