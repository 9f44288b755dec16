# -------------------------------------------------------------------------------
# MIT License
#
# Copyright (c) 2026 Advanced Micro Devices, Inc. All Rights Reserved.
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
# -------------------------------------------------------------------------------

"""Parser for the per-interface traffic table exposed at /proc/net/dev.

The table carries a title line, a pipe-delimited header and one line per
device, e.g.:

Inter-|   Receive                            |  Transmit
 face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed
    lo:  123456     789    0    0    0     0          0         0   123456     789    0    0    0     0       0          0
  eth0: 9876543   12345    0    0    0     0          0        10  1234567    2345    0    0    0     0       0          0

Each device becomes a record of raw string values keyed "receive_<field>" and
"transmit_<field>", plus the derived "receive_mbits"/"transmit_mbits" for the
"bytes" field.
"""

import logging
import math
import re
from typing import Dict, Iterable

from netdevstat.exceptions import ConversionError, FormatError, SourceUnavailable
from netdevstat.utils import resolveProcPath

FIELD_SEPARATOR = re.compile(r"[ :] *")
BYTES_FIELD = "bytes"
BYTES_PER_MEGABIT = 1048576 / 8


def bytes_to_megabits(value: float) -> float:
    """Convert a byte count to megabits, normalized to 4 decimal digits"""
    return float(format_megabits(value))


def format_megabits(value: float) -> str:
    return "%.4f" % (value / BYTES_PER_MEGABIT)


def to_float(field: str, value: str) -> float:
    """Convert a counter token, rejecting non-finite values and digit separators"""
    try:
        number = float(value)
    except ValueError:
        raise ConversionError(field, value) from None
    if "_" in value or not math.isfinite(number):
        raise ConversionError(field, value)
    return number


def parse_netdev_stats(lines: Iterable[str], ignore: re.Pattern) -> Dict[str, Dict[str, str]]:
    """Parse the net/dev table into per-device field records.

    Args:
        lines (Iterable[str]): Table content, one entry per line (an open file works).
        ignore (re.Pattern): Devices whose name matches are skipped entirely.

    Returns:
        dict: Device name -> {field key -> raw string value}.

    Raises:
        FormatError: The header or a device line has an unexpected shape.
        ConversionError: A value is not numeric.
    """
    lines = iter(lines)
    next(lines, None)  # title line
    header_line = next(lines, None)
    if header_line is None:
        raise FormatError("missing header line in net/dev", "")

    header_line = header_line.rstrip("\n")
    parts = header_line.split("|")
    if len(parts) != 3:  # interface + receive + transmit
        raise FormatError("invalid header line in net/dev", header_line)

    header = parts[1].split()
    num_fields = len(header)

    netdev = {}
    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue

        tokens = FIELD_SEPARATOR.split(line)
        if len(tokens) != 2 * num_fields + 1:
            raise FormatError("invalid line in net/dev", raw_line.rstrip("\n"))

        device = tokens[0]
        if ignore.search(device):
            logging.debug("Ignoring device: %s" % device)
            continue
        if device in netdev:
            raise FormatError("duplicate device in net/dev", raw_line.rstrip("\n"))

        record = {}
        for i, field in enumerate(header):
            rx_value = tokens[i + 1]
            tx_value = tokens[i + 1 + num_fields]
            rx_key = "receive_" + field
            tx_key = "transmit_" + field

            rx_number = to_float(rx_key, rx_value)
            tx_number = to_float(tx_key, tx_value)
            if field == BYTES_FIELD:
                record["receive_mbits"] = format_megabits(rx_number)
                record["transmit_mbits"] = format_megabits(tx_number)

            record[rx_key] = rx_value
            record[tx_key] = tx_value

        netdev[device] = record

    return netdev


def get_netdev_stats(procfs: str, ignore: re.Pattern) -> Dict[str, Dict[str, str]]:
    """Read and parse <procfs>/net/dev"""
    path = resolveProcPath(procfs, "net", "dev")
    try:
        f = open(path, "r", encoding="utf-8")
    except OSError as e:
        raise SourceUnavailable(path, e) from e

    with f:
        try:
            return parse_netdev_stats(f, ignore)
        except UnicodeDecodeError as e:
            raise FormatError("undecodable content in net/dev", str(e)) from e
