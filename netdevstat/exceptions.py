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

"""Errors raised while sampling the network device table.

Every error aborts the current scrape: nothing is emitted for that cycle.
"""


class NetdevError(Exception):
    """Base class for network device sampling failures"""


class FormatError(NetdevError):
    """Header or data line does not have the expected token shape"""

    def __init__(self, message: str, line: str):
        super().__init__(f"{message}: {line}")
        self.line = line


class ConversionError(NetdevError):
    """Field expected to be numeric could not be converted"""

    def __init__(self, field: str, value: str):
        super().__init__(f"invalid value {value!r} for {field} in net/dev")
        self.field = field
        self.value = value


class SourceUnavailable(NetdevError):
    """Backing table could not be opened"""

    def __init__(self, path, reason: Exception):
        super().__init__(f"unable to open {path}: {reason}")
        self.path = path
        self.reason = reason
