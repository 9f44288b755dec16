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

"""Network device monitoring

Implements prometheus metrics for the per-interface traffic counters listed in
/proc/net/dev. Every table field becomes a gauge labeled by device, and the
receive/transmit byte counters additionally feed two histograms of per-scrape
megabit deltas. Example metrics:

node_network_receive_bytes{device="eth0"} 9.876543e+06
node_network_transmit_packets{device="eth0"} 2345.0
node_network_receive_mbits{device="eth0"} 75.3521
node_network_receive_megabits_hist_bucket{device="eth0",le="27500.0"} 12.0
node_network_transmit_megabits_hist_count{device="eth0"} 12.0

Configuration (netdevstat.config):
[netdevstat.collectors.netdev]
ignored_devices = ^(lo|veth.*|docker.*|br-.*|virbr.*)$
procfs_path = /proc
namespace = node
subsystem = network
histogram_buckets = 27500, 35750, 41250, 44000, 49500, 54450, 56500
"""

import configparser
import logging
import re
import sys
import threading
from collections import namedtuple
from enum import Enum

from prometheus_client import CollectorRegistry, Histogram
from prometheus_client.core import GaugeMetricFamily

import netdevstat.utils as utils
from netdevstat.collector_base import Collector
from netdevstat.delta_sampler import DeltaSampler, Direction
from netdevstat.netdev_parser import BYTES_FIELD, get_netdev_stats

DEFAULT_IGNORED_DEVICES = r"^(lo|veth.*|docker.*|br-.*|virbr.*)$"
DEFAULT_BUCKETS = [27500, 35750, 41250, 44000, 49500, 54450, 56500]

GaugeDescriptor = namedtuple("GaugeDescriptor", ["name", "documentation"])


class HistogramField(Enum):
    """Field keys routed to a histogram instead of a gauge"""

    RECEIVE = "receive_megabits_hist"
    TRANSMIT = "transmit_megabits_hist"

    @property
    def documentation(self) -> str:
        verb = "received" if self is HistogramField.RECEIVE else "transmitted"
        return f"Histogram of network megabits {verb} between scrapes."

    @property
    def direction(self) -> Direction:
        return Direction.RECEIVE if self is HistogramField.RECEIVE else Direction.TRANSMIT

    @classmethod
    def from_key(cls, key: str):
        """Return the histogram field for key, or None for pass-through gauge fields"""
        try:
            return cls(key)
        except ValueError:
            return None


class NETDEV(Collector):
    def __init__(self, config: configparser.ConfigParser):
        """Initialize the NETDEV data collector.

        Args:
            config (configparser.ConfigParser): Cached copy of runtime configuration.
        """
        logging.debug("Initializing network device data collector")

        ignored_devices = DEFAULT_IGNORED_DEVICES
        buckets = ",".join(str(b) for b in DEFAULT_BUCKETS)
        self.__procfs = "/proc"
        self.__namespace = "node"
        self.__subsystem = "network"

        section = "netdevstat.collectors.netdev"
        if config.has_section(section):
            ignored_devices = utils.removeQuotes(config[section].get("ignored_devices", ignored_devices))
            buckets = config[section].get("histogram_buckets", buckets)
            self.__procfs = utils.removeQuotes(config[section].get("procfs_path", self.__procfs))
            self.__namespace = utils.removeQuotes(config[section].get("namespace", self.__namespace))
            self.__subsystem = utils.removeQuotes(config[section].get("subsystem", self.__subsystem))

        try:
            self.__ignore = re.compile(ignored_devices)
        except re.error as e:
            logging.error("[ERROR]: Invalid ignored_devices pattern %s (%s)" % (ignored_devices, e))
            sys.exit(1)

        try:
            self.__buckets = utils.parseBuckets(buckets)
        except ValueError as e:
            logging.error("[ERROR]: Invalid histogram_buckets setting (%s)" % e)
            sys.exit(1)

        self.__sampler = DeltaSampler()
        self.__descriptors = {}
        self.__histograms = {}
        self.__pending = None

        # Serializes whole scrapes: parse, counter baselines and histogram updates
        self.__lock = threading.Lock()

    def registerMetrics(self, registry: CollectorRegistry):
        """Register metrics of interest"""

        # Histograms live in a private registry and are exported through
        # collect() after the gauges of the same scrape.
        self.__histogram_registry = CollectorRegistry()
        for field in HistogramField:
            self.__histograms[field] = Histogram(
                field.value,
                field.documentation,
                labelnames=["device"],
                namespace=self.__namespace,
                subsystem=self.__subsystem,
                buckets=self.__buckets,
                registry=self.__histogram_registry,
            )
            logging.info("--> [registered] %s (histogram)" % self.__metric_name(field.value))

        registry.register(self)
        logging.info("--> [registered] %s (gauges, one per net/dev field)" % self.__metric_name("<field>"))

    def updateMetrics(self):
        """Sample the device table; gauges are exported on the following collect()"""
        with self.__lock:
            self.__pending = self.__sample()
        return

    def collect(self):
        """Custom collector hook called by prometheus_client on every exposition"""
        with self.__lock:
            gauges = self.__pending
            self.__pending = None
            if gauges is None:
                gauges = self.__sample()
            return self.__emit(gauges)

    # --------------------------------------------------------------------------------------
    # Additional custom methods unique to this collector

    def __metric_name(self, key: str) -> str:
        return "_".join(part for part in (self.__namespace, self.__subsystem, key) if part)

    def __descriptor(self, key: str) -> GaugeDescriptor:
        desc = self.__descriptors.get(key)
        if desc is None:
            desc = GaugeDescriptor(self.__metric_name(key), f"Network device statistic {key}.")
            self.__descriptors[key] = desc
        return desc

    def __sample(self):
        """Read the device table, derive per-scrape deltas and observe them.

        Parsing completes before any counter baseline is touched, so a failed
        scrape leaves the delta state as it was. Deltas go to the histograms in
        the same step that advances the baselines.

        Returns:
            dict: Device name -> {field key -> value} for the gauge fields.
        """
        netdev = get_netdev_stats(self.__procfs, self.__ignore)

        samples = {}
        for device, record in netdev.items():
            fields = dict(record)
            for field in HistogramField:
                total = record.get(field.direction.prefix + BYTES_FIELD)
                if total is None:
                    continue
                fields[field.value] = self.__sampler.observe(device, field.direction, float(total))

            gauges = {}
            for key, value in fields.items():
                field = HistogramField.from_key(key)
                if field is not None:
                    self.__histograms[field].labels(device=device).observe(value)
                else:
                    gauges[key] = value
            samples[device] = gauges
        return samples

    def __emit(self, samples):
        gauges = {}
        for device, fields in samples.items():
            for key, value in fields.items():
                family = gauges.get(key)
                if family is None:
                    desc = self.__descriptor(key)
                    family = GaugeMetricFamily(desc.name, desc.documentation, labels=["device"])
                    gauges[key] = family
                family.add_metric([device], float(value))

        families = list(gauges.values())
        for field in HistogramField:
            families.extend(self.__histograms[field].collect())
        return families

    @property
    def sampler(self) -> DeltaSampler:
        return self.__sampler

    @property
    def descriptors(self):
        return dict(self.__descriptors)
