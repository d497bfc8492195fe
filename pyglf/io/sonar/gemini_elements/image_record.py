"""
The Gemini image record, which describes one sonar frame. The pixel payload
stays in the `.dat` buffer, and the record only keeps its position and size.
"""

__classification__ = "UNCLASSIFIED"
__author__ = "Benjamin Blundell"

import logging
from datetime import datetime
from typing import Tuple

import numpy

from pyglf.io.general.base import GLFFormatError
from pyglf.io.general.utils import ByteReader
from pyglf.io.sonar.gemini_elements.ciheader import CIHeader
from pyglf.io.sonar.gemini_elements.epoch import gemini_time

logger = logging.getLogger(__name__)


RECORD_TYPE = 1
RECORD_VERSION = 0xEFEF
END_TAG = 0xDEDE

COMPRESSION_ZLIB = 0
COMPRESSION_NONE = 1
COMPRESSION_H264 = 2


class ImageRecord(object):
    """
    A single frame from the sonar, including the location of the (possibly
    compressed) pixel data in the `.dat` buffer and the bearing table.
    """

    def __init__(self, header: CIHeader):
        """

        Parameters
        ----------
        header : CIHeader
            The header which precedes this record.
        """

        self.header = header
        self.version = RECORD_VERSION
        self.image_version = 0
        self.range_start = 0  # in samples
        self.range_end = 0
        self.range_compression = 0
        self.bearing_start = 0  # in beams
        self.bearing_end = 0
        self.compression_type = COMPRESSION_NONE
        self.data_ptr = 0  # absolute offset into the .dat buffer
        self.data_size = 0
        self.bearing_table = numpy.zeros((0, ), dtype='float64')
        self.state_flags = 0
        self.modulation_frequency = 0
        self.beam_form_app = 0.0
        self.db_tx_time = header.time  # type: datetime
        self.ping_flags = 0
        self.sos_at_xd = 0.0  # speed of sound at the transducer
        self.percent_gain = 0
        self.chirp = 0
        self.sonar_type = 0
        self.platform = 0
        self.record_size = 0  # excluding the CI header

    @property
    def image_width(self) -> int:
        """
        int: The image width in pixels, one column per beam.
        """

        return self.bearing_end - self.bearing_start

    @property
    def image_height(self) -> int:
        """
        int: The image height in pixels, one row per range sample.
        """

        return self.range_end - self.range_start

    @property
    def expected_size(self) -> int:
        """
        int: The number of pixels, and so the size of the uncompressed payload.
        """

        return self.image_width*self.image_height

    @property
    def is_compressed(self) -> bool:
        """
        bool: Is the pixel payload stored in compressed form?
        """

        return self.compression_type in [COMPRESSION_ZLIB, COMPRESSION_H264]

    @classmethod
    def from_buffer(cls, header: CIHeader, reader: ByteReader, offset: int) -> Tuple['ImageRecord', int]:
        """
        Parse the image record body, starting just after the CI header.

        Parameters
        ----------
        header : CIHeader
        reader : ByteReader
        offset : int

        Returns
        -------
        record : ImageRecord
        offset : int
            The offset just beyond this record.

        Raises
        ------
        GLFFormatError
        """

        out = cls(header)
        fp = offset

        record_type, version = reader.unpack('2H', fp)
        if record_type != RECORD_TYPE:
            raise GLFFormatError(
                'Image record at offset {} has record type {}, expected {}'.format(fp, record_type, RECORD_TYPE))
        if version != RECORD_VERSION:
            raise GLFFormatError(
                'Image record at offset {} has version 0x{:04X}, expected 0x{:04X}'.format(
                    fp, version, RECORD_VERSION))
        out.version = version
        fp += 4

        out.image_version, out.range_start, out.range_end, out.range_compression, \
            out.bearing_start, out.bearing_end = reader.unpack('H2IH2I', fp)
        fp += 20
        if out.bearing_end < out.bearing_start or out.range_end < out.range_start:
            raise GLFFormatError(
                'Image record at offset {} has inverted extent, bearings ({}, {}) '
                'and ranges ({}, {})'.format(
                    offset, out.bearing_start, out.bearing_end, out.range_start, out.range_end))

        if out.image_version == 3:
            out.compression_type = reader.read_u16(fp)
            fp += 2
        else:
            out.compression_type = COMPRESSION_NONE

        out.data_size = reader.read_u32(fp)
        out.data_ptr = fp + 4
        reader.check_bounds(out.data_ptr, out.data_size)
        fp += 4 + out.data_size

        bearing_count = out.image_width
        out.bearing_table = reader.read_f64_array(fp, bearing_count)
        fp += 8*bearing_count

        out.state_flags, out.modulation_frequency = reader.unpack('2I', fp)
        fp += 8

        out.beam_form_app = reader.read_f32(fp)
        tx_seconds = reader.read_f64(fp + 4)
        try:
            out.db_tx_time = gemini_time(tx_seconds)
        except (ValueError, OverflowError):
            raise GLFFormatError(
                'Image record at offset {} has unusable transmit time {}'.format(offset, tx_seconds))
        out.ping_flags, out.sos_at_xd, out.percent_gain, out.chirp, out.sonar_type, out.platform = \
            reader.unpack('HfH3B', fp + 12)
        # one pad byte at fp + 23
        end_tag = reader.read_u16(fp + 24)
        if end_tag != END_TAG:
            raise GLFFormatError(
                'Image record at offset {} has end tag 0x{:04X}, expected 0x{:04X}'.format(
                    offset, end_tag, END_TAG))
        fp += 26
        out.record_size = fp - offset

        if out.image_version != 3 and out.data_size != out.expected_size:
            # older records carry no compression field, so infer it from the size
            out.compression_type = COMPRESSION_ZLIB

        logger.debug(
            'Parsed image record at offset {}, version {}, size {}x{}, '
            'compression type {}'.format(
                offset, out.image_version, out.image_width, out.image_height, out.compression_type))
        return out, fp
