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

import configparser
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

CONFIG_ENV = "NETDEVSTAT_CONFIG"
DEFAULT_CONFIG_PATHS = ["/etc/netdevstat/netdevstat.config"]


class PrefixFilter(logging.Filter):
    """Prepend a fixed prefix to every log message"""

    def __init__(self, prefix):
        super().__init__()
        self.prefix = prefix

    def filter(self, record):
        record.msg = self.prefix + str(record.msg)
        return True


def removeQuotes(string):
    if string.startswith('"') and string.endswith('"'):
        return string[1:-1]
    elif string.startswith("'") and string.endswith("'"):
        return string[1:-1]
    else:
        return string


def findConfigFile(configFileArgument=None):
    """Locate runtime config file.

    Precedence: command-line argument, NETDEVSTAT_CONFIG environment variable,
    system-wide default location. Returns None when nothing is found, in which
    case built-in defaults apply.
    """
    if configFileArgument:
        return configFileArgument

    envFile = os.environ.get(CONFIG_ENV)
    if envFile:
        return envFile

    for path in DEFAULT_CONFIG_PATHS:
        if os.path.isfile(path):
            return path

    return None


def readConfig(configFile=None):
    config = configparser.ConfigParser()
    if configFile is None:
        logging.debug("No runtime config file provided; using defaults")
    else:
        if not os.path.isfile(configFile):
            logging.error("[ERROR]: Unable to find runtime config file %s" % configFile)
            sys.exit(1)
        logging.info("Reading runtime config from %s" % configFile)
        config.read(configFile)

    if not config.has_section("netdevstat.collectors"):
        config.add_section("netdevstat.collectors")
    return config


def parseBuckets(string):
    """Parse a comma-separated list of histogram bucket boundaries.

    Raises:
        ValueError: An entry is not numeric, or boundaries are not strictly increasing.
    """
    buckets = [float(item) for item in removeQuotes(string.strip()).split(",") if item.strip()]
    if len(buckets) == 0:
        raise ValueError("empty bucket list")
    for lower, upper in zip(buckets, buckets[1:]):
        if upper <= lower:
            raise ValueError("bucket boundaries must be strictly increasing: %s" % string)
    return buckets


def getVersion():
    try:
        return version("netdevstat")
    except PackageNotFoundError:
        return "Unknown"


def resolveProcPath(procfs, *parts):
    return Path(procfs).joinpath(*parts)
