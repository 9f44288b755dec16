# Sample /proc/net/dev tables shared by the tests.

NETDEV_TABLE = """\
Inter-|   Receive                                                |  Transmit
 face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed
    lo:  123456     789    0    0    0     0          0         0   123456     789    0    0    0     0       0          0
  eth0: 9876543   12345    1    2    0     0          0        10  1234567    2345    0    3    0     0       0          0
  eth1:       0       0    0    0    0     0          0         0        0       0    0    0    0     0       0          0
"""

SIMPLE_TABLE = """\
Inter-|Receive|Transmit
 face |bytes packets|bytes packets
eth0: 100 2 200 3
"""


def simple_table(*rows):
    """Build a two-field (bytes, packets) table from (device, rx_bytes, rx_packets, tx_bytes, tx_packets) rows"""
    lines = ["Inter-|Receive|Transmit", " face |bytes packets|bytes packets"]
    for device, rx_bytes, rx_packets, tx_bytes, tx_packets in rows:
        lines.append(f"{device}: {rx_bytes} {rx_packets} {tx_bytes} {tx_packets}")
    return "\n".join(lines) + "\n"


