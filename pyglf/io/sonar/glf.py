"""
Functionality for reading Tritech Gemini GLF log files.

A GLF file is a zip archive, usually holding `.cfg`, `.dat` and `.xml` entries.
The `.dat` entry is a sequence of records, each a 21 byte CI header followed by
a type specific body. Image records are indexed on opening, and the frames are
only extracted (and decompressed) on request.
"""

__classification__ = "UNCLASSIFIED"
__author__ = "Benjamin Blundell"

import logging
import os
import zipfile
import zlib
from collections import namedtuple
from typing import Union, BinaryIO, List, Tuple, Optional

import numpy

from pyglf.io.general.base import GLFOpenError, GLFContainerError, \
    GLFFormatError, GLFIndexError, UnsupportedCompressionError, DecompressionError
from pyglf.io.general.utils import ByteReader, is_file_like, is_real_file, is_zip
from pyglf.io.sonar.gemini_elements.ciheader import CIHeader
from pyglf.io.sonar.gemini_elements.image_record import ImageRecord, \
    COMPRESSION_ZLIB, COMPRESSION_H264
from pyglf.io.sonar.gemini_elements.status_record import StatusRecord

try:
    import PIL.Image
except ImportError:
    PIL = None

logger = logging.getLogger(__name__)


HEADER_TYPES = {
    0: 'image record',
    1: 'V4 protocol',
    2: 'analog video',
    3: 'Gemini status',
    98: 'raw serial',
    99: 'generic',
}
"""
The CI header type codes. Only image and status records are supported.
"""


NextImage = namedtuple('NextImage', ['idx', 'image'])
NextImage.__doc__ = """
A frame for a given sonar, paired with the index of the following image record
for the same sonar.
"""


########
# base expected functionality for a module with an implemented Reader

def is_a(file_name):
    """
    Tests whether a given file_name corresponds to a GLF file. Returns a reader instance, if so.

    Only a file which is not a zip container, or whose container has no usable
    `.dat` entry, is rejected. A container holding a malformed record stream
    is a GLF file which failed to parse, and the error is raised.

    Parameters
    ----------
    file_name : str|BinaryIO
        the file_name to check. A file object is only accepted if backed by a
        file on disk.

    Returns
    -------
    GLFReader|None
        `GLFReader` instance if GLF file, `None` otherwise

    Raises
    ------
    GLFFormatError
    """

    if is_file_like(file_name):
        if not is_real_file(file_name):
            return None
        file_name = getattr(file_name, 'name', None)
        if not isinstance(file_name, str):
            return None
    file_name = os.fspath(file_name)
    if not is_zip(file_name):
        return None

    try:
        glf_details = GLFDetails(file_name)
    except GLFContainerError:
        return None
    logger.info('File {} is determined to be a GLF file with {} image records.'.format(
        file_name, len(glf_details.images)))
    return GLFReader(glf_details)


####################
# container and record stream parsing

def read_zip_dat(file_object: BinaryIO) -> Optional[bytes]:
    """
    Fetch the contents of the `.dat` record stream from the GLF zip container.
    This is the first entry whose name contains `dat`.

    Parameters
    ----------
    file_object : BinaryIO
        Readable and seekable.

    Returns
    -------
    None|bytes
        `None` if the container is unreadable or has no `.dat` entry.
    """

    try:
        with zipfile.ZipFile(file_object, 'r') as archive:
            for info in archive.infolist():
                if 'dat' in info.filename:
                    return archive.read(info)
    except (zipfile.BadZipFile, zlib.error, NotImplementedError, RuntimeError, EOFError, OSError):
        return None
    return None


def parse_dat(dat_buffer: bytes) -> Tuple[List[ImageRecord], List[StatusRecord]]:
    """
    Walk the complete `.dat` record stream, and parse each record.

    Parameters
    ----------
    dat_buffer : bytes

    Returns
    -------
    images : List[ImageRecord]
        In stream order, which is time order for a well formed capture.
    statuses : List[StatusRecord]
        In stream order.

    Raises
    ------
    GLFFormatError
    """

    reader = ByteReader(dat_buffer)
    image_records = []  # type: List[ImageRecord]
    status_records = []  # type: List[StatusRecord]

    offset = 0
    while offset < len(dat_buffer) - 2:
        header, offset = CIHeader.from_buffer(reader, offset)
        if header.header_type == 0:
            record, offset = ImageRecord.from_buffer(header, reader, offset)
            image_records.append(record)
        elif header.header_type == 3:
            record, offset = StatusRecord.from_buffer(header, reader, offset)
            status_records.append(record)
        elif header.header_type in HEADER_TYPES:
            raise GLFFormatError(
                'Record at offset {} is of unsupported type {} ({})'.format(
                    header.offset, header.header_type, HEADER_TYPES[header.header_type]))
        else:
            raise GLFFormatError(
                'Record at offset {} has unknown type {}'.format(header.offset, header.header_type))

    logger.info('Parsed {} image records and {} status records from {} bytes'.format(
        len(image_records), len(status_records), len(dat_buffer)))
    return image_records, status_records


class GLFDetails(object):
    """
    Parses and holds the record index and the `.dat` buffer of a GLF file.
    """

    __slots__ = ('_file_name', '_dat', '_images', '_statuses')

    def __init__(self, file_name: Union[str, os.PathLike]):
        """

        Parameters
        ----------
        file_name : str|os.PathLike
            The path to the GLF file.

        Raises
        ------
        GLFOpenError
            The file could not be opened.
        GLFContainerError
            The zip container is unreadable, or there is no `.dat` entry.
        GLFFormatError
            The record stream is truncated or malformed.
        """

        self._file_name = os.fspath(file_name)
        if not isinstance(self._file_name, str):
            raise TypeError('file_name must be a path. Got type {}'.format(type(file_name)))

        try:
            file_object = open(self._file_name, 'rb')
        except OSError as e:
            raise GLFOpenError('Failed to open GLF file {}: {}'.format(self._file_name, e))
        with file_object:
            dat_buffer = read_zip_dat(file_object)
        if dat_buffer is None:
            raise GLFContainerError(
                'File {} is not a readable zip container with a .dat entry'.format(self._file_name))

        images, statuses = parse_dat(dat_buffer)
        self._dat = dat_buffer
        self._images = tuple(images)
        self._statuses = tuple(statuses)

    @property
    def file_name(self) -> str:
        """
        str: The GLF file name.
        """

        return self._file_name

    @property
    def dat(self) -> bytes:
        """
        bytes: The raw contents of the `.dat` entry.
        """

        return self._dat

    @property
    def images(self) -> Tuple[ImageRecord, ...]:
        """
        Tuple[ImageRecord, ...]: The image records, in stream order.
        """

        return self._images

    @property
    def statuses(self) -> Tuple[StatusRecord, ...]:
        """
        Tuple[StatusRecord, ...]: The status records, in stream order.
        """

        return self._statuses


class GLFReader(object):
    """
    A reader for the frames of a GLF file. Frames are fetched by image record
    index, as 8-bit grayscale arrays of shape `(height, width)`.
    """

    __slots__ = ('_glf_details', '_closed')

    def __init__(self, glf_details: Union[str, os.PathLike, GLFDetails]):
        """

        Parameters
        ----------
        glf_details : str|os.PathLike|GLFDetails
            file name or GLFDetails object
        """

        if isinstance(glf_details, (str, os.PathLike)):
            glf_details = GLFDetails(glf_details)
        if not isinstance(glf_details, GLFDetails):
            raise TypeError('The input argument for a GLFReader must be a '
                            'filename or GLFDetails object')
        self._glf_details = glf_details
        self._closed = False

    @property
    def glf_details(self) -> GLFDetails:
        """
        GLFDetails: The details object.
        """

        self._validate_closed()
        return self._glf_details

    @property
    def file_name(self) -> str:
        return self.glf_details.file_name

    @property
    def dat(self) -> bytes:
        """
        bytes: The raw contents of the `.dat` entry.
        """

        return self.glf_details.dat

    @property
    def images(self) -> Tuple[ImageRecord, ...]:
        """
        Tuple[ImageRecord, ...]: The image records, in stream order.
        """

        return self.glf_details.images

    @property
    def statuses(self) -> Tuple[StatusRecord, ...]:
        """
        Tuple[StatusRecord, ...]: The status records, in stream order.
        """

        return self.glf_details.statuses

    @property
    def sonar_ids(self) -> Tuple[int, ...]:
        """
        Tuple[int, ...]: The distinct sonar (device) ids of the image records, sorted.
        """

        return tuple(sorted(set(entry.header.device_id for entry in self.images)))

    @property
    def closed(self) -> bool:
        """
        bool: Is the reader closed? Reading will result in a ValueError
        """

        return self._closed

    def _validate_closed(self):
        if self._closed:
            raise ValueError('I/O operation of closed reader')

    def __len__(self):
        return len(self.images)

    def __str__(self):
        return self.file_name

    def extract_image(self, idx: int) -> numpy.ndarray:
        """
        Extract the frame for the given image record, decompressing as required.

        Parameters
        ----------
        idx : int
            The image record index.

        Returns
        -------
        numpy.ndarray
            Of dtype uint8 and shape `(image_height, image_width)`.

        Raises
        ------
        GLFIndexError
            The index is out of range.
        GLFFormatError
            The payload extends beyond the buffer, or has the wrong size.
        UnsupportedCompressionError
            The payload is H.264 compressed.
        DecompressionError
            The zlib payload is corrupt, or inflates to the wrong size.
        """

        images = self.images
        idx = int(idx)
        if not (0 <= idx < len(images)):
            raise GLFIndexError(
                'Image index {} is out of range for {} image records'.format(idx, len(images)))

        img_rec = images[idx]
        dat = self.dat
        ptr = img_rec.data_ptr
        dat_size = img_rec.data_size
        if ptr + dat_size > len(dat):
            raise GLFFormatError(
                'Image record {} data pointer {} with size {} exceeds the data length {}'.format(
                    idx, ptr, dat_size, len(dat)))
        raw_img_data = dat[ptr:ptr + dat_size]
        width = img_rec.image_width
        height = img_rec.image_height

        if img_rec.compression_type == COMPRESSION_ZLIB:
            try:
                img_data = zlib.decompress(raw_img_data)
            except zlib.error as e:
                raise DecompressionError('Failed to inflate image record {}: {}'.format(idx, e))
            if len(img_data) != width*height:
                raise DecompressionError(
                    'Image record {} inflated to {} bytes, expected {}x{}'.format(
                        idx, len(img_data), width, height))
        elif img_rec.compression_type == COMPRESSION_H264:
            raise UnsupportedCompressionError(
                'Image record {} is H.264 compressed, which is not supported'.format(idx))
        else:
            if dat_size != width*height:
                raise GLFFormatError(
                    'Image record {} has {} bytes of uncompressed data, expected {}x{}'.format(
                        idx, dat_size, width, height))
            img_data = raw_img_data

        return numpy.frombuffer(img_data, dtype='uint8').reshape((height, width)).copy()

    def extract_image_next_sonarid(self, idx: int, sonar_id: int) -> Optional[NextImage]:
        """
        Extract the first frame at or after `idx` for the given sonar, along with the
        index of the following frame for the same sonar. This permits iterating
        over the frames of one sonar in a multiplexed capture.

        Parameters
        ----------
        idx : int
            The image record index from which to start searching.
        sonar_id : int
            The sonar (device) id.

        Returns
        -------
        None|NextImage
            `None` if there is no matching frame, or no following matching frame.
        """

        images = self.images
        idx = int(idx)
        if idx < 0:
            raise GLFIndexError('Image index {} must be non-negative'.format(idx))

        tidx = idx
        while tidx < len(images) and images[tidx].header.device_id != sonar_id:
            tidx += 1
        if tidx >= len(images):
            return None

        nidx = tidx + 1
        while nidx < len(images) and images[nidx].header.device_id != sonar_id:
            nidx += 1
        if nidx >= len(images):
            return None

        return NextImage(nidx, self.extract_image(tidx))

    def save_image(self, idx: int, out_file: Union[str, BinaryIO], image_format: Optional[str] = None) -> None:
        """
        Extract the given frame and save it as an image file. This requires the
        PIL (pillow) library.

        Parameters
        ----------
        idx : int
        out_file : str|BinaryIO
        image_format : None|str
            Passed through to PIL, inferred from the file extension if `None`.
        """

        if PIL is None:
            raise ValueError('Saving images requires the PIL library')
        data = self.extract_image(idx)
        PIL.Image.fromarray(data).save(out_file, format=image_format)

    def close(self) -> None:
        """
        Release the `.dat` buffer and the record index.
        """

        self._glf_details = None
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exception_type, exception_value, traceback):
        self.close()
