"""
Build synthetic GLF captures for the unit tests.
"""

import struct
import zipfile


def ci_header(header_type, body_length, seconds=0.0, device_id=0, node_id=0, sentinel=b'*'):
    """The 21 byte CI header, where the stored length includes the header."""
    return struct.pack(
        '<cBIdBHH2x', sentinel, 1, body_length + 21, seconds, header_type, device_id, node_id)


def image_body(
        payload, bearing_start=0, bearing_end=4, range_start=0, range_end=2,
        image_version=3, compression_type=1, bearings=None, tx_seconds=0.0,
        state_flags=0, modulation_frequency=0, beam_form_app=0.0, ping_flags=0,
        sos_at_xd=1500.0, percent_gain=50, chirp=0, sonar_type=0, platform=0,
        record_type=1, version=0xEFEF, end_tag=0xDEDE, range_compression=0):
    if bearings is None:
        bearings = [0.1*i for i in range(bearing_end - bearing_start)]
    out = struct.pack('<2H', record_type, version)
    out += struct.pack(
        '<H2IH2I', image_version, range_start, range_end, range_compression, bearing_start, bearing_end)
    if image_version == 3:
        out += struct.pack('<H', compression_type)
    out += struct.pack('<I', len(payload)) + payload
    out += struct.pack('<{}d'.format(len(bearings)), *bearings)
    out += struct.pack('<2I', state_flags, modulation_frequency)
    out += struct.pack(
        '<fdHfH3B', beam_form_app, tx_seconds, ping_flags, sos_at_xd, percent_gain,
        chirp, sonar_type, platform)
    out += b'\x00' + struct.pack('<H', end_tag)
    return out


def status_body(
        bf_version=1, da_version=2, flags=3, device_id=0, xd_selected=1,
        temperatures=None, link_type=4, uplink_speed=100.0, downlink_speed=1000.0,
        link_quality=99, packet_counts=(10, 1, 2, 3, 0), lost_line_count=5,
        general_count=6, sonar_alt_ip=0x0A01A8C0, surface_ip=0x0201A8C0,
        subnet_mask=(255, 255, 255, 0), mac_addr=(0, 1, 2, 0xAB, 0xCD, 0xEF),
        boot_sts_register=7, boot_sts_register_da=8, fpga_time=123456789,
        dip_switch=9, shutdown_status=1, net_adap_found=1):
    if temperatures is None:
        temperatures = [20.0 + i for i in range(15)]
    out = struct.pack('<4HBx', bf_version, da_version, flags, device_id, xd_selected)
    out += struct.pack('<15d', *temperatures)
    out += struct.pack(
        '<H2dH5I', link_type, uplink_speed, downlink_speed, link_quality, *packet_counts)
    out += struct.pack('<4I', lost_line_count, general_count, sonar_alt_ip, surface_ip)
    out += struct.pack('<4B', *subnet_mask) + struct.pack('<6B', *mac_addr)
    out += struct.pack(
        '<2IQ2HBx', boot_sts_register, boot_sts_register_da, fpga_time, dip_switch,
        shutdown_status, net_adap_found)
    return out


def image_record(payload, seconds=0.0, device_id=0, node_id=0, **kwargs):
    """A complete image record, CI header included."""
    body = image_body(payload, **kwargs)
    return ci_header(0, len(body), seconds=seconds, device_id=device_id, node_id=node_id) + body


def status_record(seconds=0.0, device_id=0, **kwargs):
    """A complete status record, CI header included."""
    body = status_body(device_id=device_id, **kwargs)
    return ci_header(3, len(body), seconds=seconds, device_id=device_id) + body


def write_glf(file_name, dat_buffer, dat_name='capture.dat', companions=True):
    """Write the record stream into a GLF zip container."""
    with zipfile.ZipFile(file_name, 'w', zipfile.ZIP_DEFLATED) as archive:
        if companions:
            archive.writestr('capture.cfg', '<config/>')
        archive.writestr(dat_name, dat_buffer)
        if companions:
            archive.writestr('capture.xml', '<log/>')


def mark_encrypted(file_name):
    """Set the encryption flag bit on every entry of a written zip container."""
    with open(file_name, 'rb') as fi:
        the_bytes = bytearray(fi.read())
    for signature, flag_offset in [(b'PK\x03\x04', 6), (b'PK\x01\x02', 8)]:
        location = the_bytes.find(signature)
        while location >= 0:
            flags = struct.unpack_from('<H', the_bytes, location + flag_offset)[0]
            struct.pack_into('<H', the_bytes, location + flag_offset, flags | 0x1)
            location = the_bytes.find(signature, location + 4)
    with open(file_name, 'wb') as fi:
        fi.write(the_bytes)
