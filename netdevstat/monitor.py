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

# Prometheus data collector for network device traffic.
#
# Supporting monitor class to implement a prometheus data collector with one
# or more custom collector(s).
# --

import importlib
import logging
import os
import platform
import re
import sys
import time

from prometheus_client import CollectorRegistry, Gauge, generate_latest

from netdevstat import utils
from netdevstat.collector_definitions import COLLECTORS
from netdevstat.exceptions import NetdevError


class Monitor:
    def __init__(self, config, logFile=None):

        self.config = config  # cache runtime configuration

        logLevel = os.environ.get("NETDEVSTAT_LOG_LEVEL", "INFO").upper()
        if logFile:
            hostname = platform.node().split(".", 1)[0]
            logging.basicConfig(
                format=f"[{hostname}: %(asctime)s] %(message)s",
                level=logLevel,
                filename=logFile,
                datefmt="%H:%M:%S",
            )
        else:
            logging.basicConfig(format="%(message)s", level=logLevel, stream=sys.stdout)

        if not self.config.has_section("netdevstat.collectors"):
            self.config.add_section("netdevstat.collectors")

        allowed_ips = utils.removeQuotes(config["netdevstat.collectors"].get("allowed_ips", "127.0.0.1"))
        self.allowed_ips = re.split(r",\s*", allowed_ips)
        logging.info("Allowed query IPs = %s" % self.allowed_ips)

        self.__registry = CollectorRegistry()

        # initialize collection of data collectors
        self.__collectors = []

        logging.debug("Completed collector initialization (base class)")
        return

    @property
    def registry(self):
        return self.__registry

    @property
    def collectors(self):
        return list(self.__collectors)

    def initMetrics(self):

        for collector in COLLECTORS:
            runtime_option = collector["runtime_option"]
            default = collector["enabled_by_default"]
            if runtime_option:
                enabled = self.config["netdevstat.collectors"].getboolean(runtime_option, default)
            else:
                enabled = default
            if enabled:
                module = importlib.import_module(collector["file"])
                cls = getattr(module, collector["className"])
                self.__collectors.append(cls(config=self.config))

        # Initialize all metrics
        prefix_filter = utils.PrefixFilter("   ")
        for collector in self.__collectors:
            logging.info("\nRegistering metrics for collector: %s" % collector.__class__.__name__)
            logging.getLogger().addFilter(prefix_filter)
            try:
                collector.registerMetrics(self.__registry)
            finally:
                logging.getLogger().removeFilter(prefix_filter)

        # Register performance runtime metric(s)
        self.__subtimers = self.config["netdevstat.collectors"].getboolean("enable_perf_collector_subtimers", False)
        logging.info(
            "\nRegistering performance metrics for collector timing (subtimers enabled = %s)" % self.__subtimers
        )

        self.__perfMetric = Gauge(
            "netdevstat_perf_runtime_seconds",
            "Time to complete one data collection sample in seconds",
            labelnames=["collector"],
            registry=self.__registry,
        )

        # Gather metrics on startup (establishes counter baselines)
        try:
            self.updateAllMetrics()
        except NetdevError as e:
            logging.warning("Initial sample failed: %s" % e)

    def updateAllMetrics(self):
        """Sample all collectors and render the exposition text.

        Raises:
            NetdevError: A collector failed to sample; nothing is rendered for this scrape.
        """
        start_time_total = time.perf_counter()

        for collector in self.__collectors:
            start_time = time.perf_counter()
            collector.updateMetrics()
            if self.__subtimers:
                elapsed_time = time.perf_counter() - start_time
                self.__perfMetric.labels(collector.__class__.__name__).set(elapsed_time)
        latest = generate_latest(self.__registry)

        elapsed_time_total = time.perf_counter() - start_time_total
        self.__perfMetric.labels("total").set(elapsed_time_total)

        return latest
