"""
The Gemini status record, a snapshot of the sonar health and link state at
the time of recording.
"""

__classification__ = "UNCLASSIFIED"
__author__ = "Benjamin Blundell"

import logging
from typing import Tuple

from pyglf.io.general.utils import ByteReader
from pyglf.io.sonar.gemini_elements.ciheader import CIHeader

logger = logging.getLogger(__name__)


STATUS_RECORD_SIZE = 218


def _ip_string(value: int) -> str:
    # stored little-endian, so the low byte is the first octet
    return '.'.join(str((value >> shift) & 0xFF) for shift in (0, 8, 16, 24))


class StatusRecord(object):
    """
    The status of the sonar at a particular time. The field descriptions follow
    the Genesis log file format document (0716-SDS-00001).
    """

    def __init__(self, header: CIHeader):
        """

        Parameters
        ----------
        header : CIHeader
            The header which precedes this record.
        """

        self.header = header
        self.bf_version = 0
        self.da_version = 0
        self.flags = 0
        self.device_id = 0  # the sonar id
        self.xd_selected = 0
        # MK2 boards: FPGA PCB, HSC PCB and DA FPGA temperatures, then the transducer
        self.vga_t1 = 0.0
        self.vga_t2 = 0.0
        self.vga_t3 = 0.0
        self.vga_t4 = 0.0
        self.psu_t = 0.0
        self.die_t = 0.0
        self.tx_t = 0.0
        self.afe0_top_temp = 0.0
        self.afe0_bot_temp = 0.0
        self.afe1_top_temp = 0.0
        self.afe1_bot_temp = 0.0
        self.afe2_top_temp = 0.0
        self.afe2_bot_temp = 0.0
        self.afe3_top_temp = 0.0
        self.afe3_bot_temp = 0.0
        self.link_type = 0
        self.uplink_speed = 0.0
        self.downlink_speed = 0.0
        self.link_quality = 0  # percentage
        self.packet_count = 0
        self.recv_error = 0
        self.resent_packet_count = 0
        self.dropped_packet_count = 0
        self.unknown_packet_count = 0  # not used by the sonar
        self.lost_line_count = 0
        self.general_count = 0
        self.sonar_alt_ip = 0
        self.surface_ip = 0
        self.subnet_mask = (0, 0, 0, 0)
        self.mac_addr = (0, 0, 0, 0, 0, 0)
        self.boot_sts_register = 0
        self.boot_sts_register_da = 0
        self.fpga_time = 0
        self.dip_switch = 0
        self.shutdown_status = 0  # 0 temperature, 1 out of water, 2 out of water indicator
        self.net_adap_found = False
        self.record_size = STATUS_RECORD_SIZE

    @property
    def surface_ip_address(self) -> str:
        """
        str: The IP address of the connected surface computer.
        """

        return _ip_string(self.surface_ip)

    @property
    def sonar_alt_ip_address(self) -> str:
        """
        str: The alternative IP address of the sonar.
        """

        return _ip_string(self.sonar_alt_ip)

    @property
    def mac_address(self) -> str:
        """
        str: The MAC address, as colon separated hex.
        """

        return ':'.join('{:02X}'.format(entry) for entry in self.mac_addr)

    @classmethod
    def from_buffer(cls, header: CIHeader, reader: ByteReader, offset: int) -> Tuple['StatusRecord', int]:
        """
        Parse the status record body, starting just after the CI header.

        Parameters
        ----------
        header : CIHeader
        reader : ByteReader
        offset : int

        Returns
        -------
        record : StatusRecord
        offset : int
            The offset just beyond this record.

        Raises
        ------
        GLFFormatError
        """

        out = cls(header)
        reader.check_bounds(offset, STATUS_RECORD_SIZE)
        fp = offset

        out.bf_version, out.da_version, out.flags, out.device_id, out.xd_selected = \
            reader.unpack('4HB', fp)
        fp += 10

        out.vga_t1, out.vga_t2, out.vga_t3, out.vga_t4 = reader.unpack('4d', fp)
        fp += 32

        out.psu_t, out.die_t, out.tx_t = reader.unpack('3d', fp)
        fp += 24

        out.afe0_top_temp, out.afe0_bot_temp, out.afe1_top_temp, out.afe1_bot_temp, \
            out.afe2_top_temp, out.afe2_bot_temp, out.afe3_top_temp, out.afe3_bot_temp = \
            reader.unpack('8d', fp)
        fp += 64

        out.link_type, out.uplink_speed, out.downlink_speed, out.link_quality, \
            out.packet_count, out.recv_error, out.resent_packet_count, \
            out.dropped_packet_count, out.unknown_packet_count = reader.unpack('H2dH5I', fp)
        fp += 40

        out.lost_line_count, out.general_count, out.sonar_alt_ip, out.surface_ip = \
            reader.unpack('4I', fp)
        out.subnet_mask = reader.unpack('4B', fp + 16)
        out.mac_addr = reader.unpack('6B', fp + 20)
        fp += 26

        out.boot_sts_register, out.boot_sts_register_da, out.fpga_time, out.dip_switch, \
            out.shutdown_status, net_adap_found = reader.unpack('2IQ2HB', fp)
        out.net_adap_found = (net_adap_found != 0)
        fp += 22  # includes one trailing pad byte

        out.record_size = fp - offset
        logger.debug('Parsed status record at offset {} for sonar {}'.format(offset, out.device_id))
        return out, fp
