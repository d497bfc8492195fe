"""
Basic First Example
===================

This indicates the basic functionality for reading a Tritech Gemini GLF log file.
It is intended that this script will be read, and the relevant portions run
individually.

Check out a given module, class, or function using it's path
>>> help('pyglf.io.sonar.glf.GLFReader')
"""


"""
General file opening
--------------------

Open a sonar log file using the general purpose opener. This iterates over the
readers defined in pyglf.io.sonar, and returns the first one which recognises
the file. A missing file raises a GLFOpenError, a GLF file with a malformed record
stream raises a GLFFormatError, and a file of no supported format raises a
GLFIOError.
"""
from pyglf.io import open as open_sonar_file

reader = open_sonar_file('<path to file>')
print(type(reader))


"""
Direct file opening
-------------------
"""
from pyglf.io.sonar.glf import GLFReader
reader = GLFReader('<path to file>')  # same class as referenced above


"""
Record metadata
---------------

The image records and status records are parsed on opening, in the order they
were recorded.
"""

print('{} image records, {} status records'.format(len(reader), len(reader.statuses)))
print('sonar ids {}'.format(reader.sonar_ids))

the_record = reader.images[0]
print(the_record.header)  # (payload_length, time, header_type, device_id, node_id)
print(the_record.image_width, the_record.image_height, the_record.compression_type)
print(the_record.bearing_table[:5])

the_status = reader.statuses[0]
print(the_status.die_t, the_status.surface_ip_address, the_status.mac_address)


"""
Read frame data
---------------

Frames are decompressed on request, and returned as uint8 arrays of shape
(image_height, image_width).
"""

frame = reader.extract_image(0)
print(frame.shape, frame.dtype)

# save a frame as an image, this requires pillow
reader.save_image(0, 'frame_0.png')

# walk the frames of a single sonar in a multiplexed capture
sonar_id = reader.sonar_ids[0]
idx = 0
while True:
    result = reader.extract_image_next_sonarid(idx, sonar_id)
    if result is None:
        break
    print(result.idx, result.image.mean())
    idx = result.idx

reader.close()
