import io
import os
import struct
import tempfile
import unittest
import zipfile

import numpy

from pyglf.io.general.base import GLFFormatError
from pyglf.io.general.utils import ByteReader, is_file_like, is_real_file, is_zip


class TestByteReader(unittest.TestCase):
    def setUp(self):
        self.buffer = struct.pack('<BHIQfd', 0xAB, 0xCDEF, 0x01020304, 2**40 + 5, 0.5, -1.25)
        self.reader = ByteReader(self.buffer)

    def test_reads(self):
        self.assertEqual(len(self.reader), 27)
        self.assertEqual(self.reader.read_u8(0), 0xAB)
        self.assertEqual(self.reader.read_u16(1), 0xCDEF)
        self.assertEqual(self.reader.read_u32(3), 0x01020304)
        self.assertEqual(self.reader.read_u64(7), 2**40 + 5)
        self.assertEqual(self.reader.read_f32(15), 0.5)
        self.assertEqual(self.reader.read_f64(19), -1.25)
        self.assertEqual(self.reader.read_bytes(1, 2), b'\xef\xcd')
        self.assertEqual(self.reader.unpack('BH', 0), (0xAB, 0xCDEF))

    def test_f64_array(self):
        reader = ByteReader(b'\x00' + struct.pack('<3d', 1.0, 2.5, -3.0))
        values = reader.read_f64_array(1, 3)
        self.assertEqual(values.dtype, numpy.float64)
        self.assertTrue(numpy.all(values == numpy.array([1.0, 2.5, -3.0])))
        self.assertEqual(reader.read_f64_array(25, 0).shape, (0, ))

    def test_bounds(self):
        with self.subTest(msg='past the end'):
            with self.assertRaises(GLFFormatError):
                self.reader.read_f64(20)
        with self.subTest(msg='negative offset'):
            with self.assertRaises(GLFFormatError):
                self.reader.read_u8(-1)
        with self.subTest(msg='byte slice'):
            with self.assertRaises(GLFFormatError):
                self.reader.read_bytes(20, 8)
        with self.subTest(msg='array'):
            with self.assertRaises(GLFFormatError):
                self.reader.read_f64_array(0, 4)
        with self.subTest(msg='grouped'):
            with self.assertRaises(GLFFormatError):
                self.reader.unpack('3d', 7)

    def test_type(self):
        with self.assertRaises(TypeError):
            ByteReader(bytearray(4))


class TestFileChecks(unittest.TestCase):
    def test_is_file_like(self):
        self.assertTrue(is_file_like(io.BytesIO()))
        self.assertFalse(is_file_like('file.glf'))

    def test_is_real_file(self):
        self.assertFalse(is_real_file(io.BytesIO(b'data')))
        self.assertFalse(is_real_file('file.glf'))
        with tempfile.TemporaryDirectory() as tmpdirname:
            file_name = os.path.join(tmpdirname, 'test.glf')
            with open(file_name, 'wb') as fi:
                self.assertTrue(is_real_file(fi))

    def test_is_zip(self):
        with tempfile.TemporaryDirectory() as tmpdirname:
            zip_name = os.path.join(tmpdirname, 'test.glf')
            with zipfile.ZipFile(zip_name, 'w') as archive:
                archive.writestr('test.dat', b'data')
            self.assertTrue(is_zip(zip_name))

            text_name = os.path.join(tmpdirname, 'test.txt')
            with open(text_name, 'w') as fi:
                fi.write('not a zip')
            self.assertFalse(is_zip(text_name))

            self.assertFalse(is_zip(os.path.join(tmpdirname, 'missing.glf')))

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, 'w') as archive:
            archive.writestr('test.dat', b'data')
        buffer.seek(3)
        self.assertTrue(is_zip(buffer))
        self.assertEqual(buffer.tell(), 3)
