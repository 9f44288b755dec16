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

"""Info metric

Implements an info metric to log execution details including code version and
the exported metric namespace. Example:

netdevstat_info{namespace="node",schema="1.0",version="1.0.0"} 1.0
"""

import configparser
import logging

from prometheus_client import CollectorRegistry, Gauge

import netdevstat.utils as utils
from netdevstat.collector_base import Collector


class INFO(Collector):
    def __init__(self, config: configparser.ConfigParser):
        """Initialize info metric.

        Args:
            config (configparser.ConfigParser): Cached copy of runtime configuration.
        """
        logging.debug(f"Initializing {self.__class__.__name__} data collector")

        self.__version = utils.getVersion()
        self.__schema = 1.0
        self.__namespace = "node"
        if config.has_section("netdevstat.collectors.netdev"):
            self.__namespace = utils.removeQuotes(
                config["netdevstat.collectors.netdev"].get("namespace", self.__namespace)
            )

    def registerMetrics(self, registry: CollectorRegistry):
        """Register metrics of interest"""

        labels = ["version", "namespace", "schema"]
        self.__info = Gauge("netdevstat_info", "Info metric", labelnames=labels, registry=registry)
        self.__info.labels(version=self.__version, namespace=self.__namespace, schema=self.__schema).set(1)
        logging.info("--> [registered] netdevstat_info (gauge)")

    def updateMetrics(self):
        """Update registered metrics of interest"""

        return
