"""
The common information (CI) header, which prefixes every record of the `.dat`
record stream.
"""

__classification__ = "UNCLASSIFIED"
__author__ = "Benjamin Blundell"

from datetime import datetime
from typing import Tuple

from pyglf.io.general.base import GLFFormatError
from pyglf.io.general.utils import ByteReader
from pyglf.io.sonar.gemini_elements.epoch import gemini_epoch, gemini_time


HEADER_SIZE = 21
HEADER_SENTINEL = 0x2A  # ascii `*`


class CIHeader(object):
    """
    The 21 byte header in front of each record.

    ======  =====  ==========================================
    offset  width  field
    ======  =====  ==========================================
    0       1      `*` sentinel
    1       1      version (ignored)
    2       4      payload length, including this header
    6       8      seconds since the Gemini epoch (double)
    14      1      header type
    15      2      device id
    17      2      node id
    19      2      reserved
    ======  =====  ==========================================
    """

    def __init__(self, payload_length=0, time=None, header_type=0, device_id=0, node_id=0, offset=0):
        """

        Parameters
        ----------
        payload_length : int
            The payload length, **excluding** the header itself.
        time : None|datetime
        header_type : int
        device_id : int
        node_id : int
        offset : int
            The position of this header in the `.dat` buffer.
        """

        self.header_size = HEADER_SIZE
        self.payload_length = payload_length
        self.time = gemini_epoch() if time is None else time  # type: datetime
        self.header_type = header_type
        self.device_id = device_id
        self.node_id = node_id
        self.offset = offset

    def __len__(self):
        return self.header_size

    def __str__(self):
        return '({}, {}, {}, {}, {})'.format(
            self.payload_length, self.time, self.header_type, self.device_id, self.node_id)

    def __repr__(self):
        return 'CIHeader(payload_length={}, time={!r}, header_type={}, device_id={}, node_id={}, offset={})'.format(
            self.payload_length, self.time, self.header_type, self.device_id, self.node_id, self.offset)

    @classmethod
    def from_buffer(cls, reader: ByteReader, offset: int) -> Tuple['CIHeader', int]:
        """
        Parse the header starting at the given offset.

        Parameters
        ----------
        reader : ByteReader
        offset : int

        Returns
        -------
        header : CIHeader
        offset : int
            The offset just beyond this header.

        Raises
        ------
        GLFFormatError
        """

        reader.check_bounds(offset, HEADER_SIZE)
        if reader.read_u8(offset) != HEADER_SENTINEL:
            raise GLFFormatError(
                'Expected record sentinel `*` at offset {}, got {}'.format(offset, reader.read_bytes(offset, 1)))
        # byte at offset+1 is a version number, which is ignored

        payload_length = reader.read_u32(offset + 2)
        if payload_length < HEADER_SIZE:
            raise GLFFormatError(
                'Record at offset {} states length {}, which is less than the '
                'header size'.format(offset, payload_length))

        seconds = reader.read_f64(offset + 6)
        try:
            time = gemini_time(seconds)
        except (ValueError, OverflowError):
            raise GLFFormatError('Record at offset {} has unusable time value {}'.format(offset, seconds))

        header_type = reader.read_u8(offset + 14)
        device_id = reader.read_u16(offset + 15)
        node_id = reader.read_u16(offset + 17)
        header = cls(
            payload_length=payload_length - HEADER_SIZE, time=time, header_type=header_type,
            device_id=device_id, node_id=node_id, offset=offset)
        return header, offset + HEADER_SIZE
