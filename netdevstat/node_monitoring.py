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
# Serves the /metrics endpoint with Flask, hosted by gunicorn. Runtime
# configuration is provided via an INI file:
#
# [netdevstat.collectors]
# port = 8001
# allowed_ips = 127.0.0.1
# enable_netdev = True
# --

import argparse
import logging
import sys

import gunicorn.app.base
from flask import Flask, abort, request
from prometheus_client import CONTENT_TYPE_LATEST

from netdevstat import utils
from netdevstat.exceptions import NetdevError
from netdevstat.monitor import Monitor


class NetdevstatServer(gunicorn.app.base.BaseApplication):
    def __init__(self, app, options=None):
        self.options = options or {}
        self.application = app
        super().__init__()

    def load_config(self):
        config = {key: value for key, value in self.options.items() if key in self.cfg.settings and value is not None}
        for key, value in config.items():
            self.cfg.set(key.lower(), value)

    def load(self):
        return self.application


def create_app(monitor):
    app = Flask("netdevstat")

    @app.before_request
    def restrict_ips():
        if request.remote_addr not in monitor.allowed_ips:
            abort(403)

    @app.route("/metrics")
    def metrics():
        try:
            latest = monitor.updateAllMetrics()
        except NetdevError as e:
            logging.error("Scrape failed: %s" % e)
            return "", 500
        return latest, {"Content-Type": CONTENT_TYPE_LATEST}

    return app


def main():
    parser = argparse.ArgumentParser(description="Prometheus exporter for network device traffic")
    parser.add_argument("--configfile", type=str, help="runtime config file", default=None)
    parser.add_argument("--port", type=int, help="port to serve metrics on (overrides config file)", default=None)
    parser.add_argument("--logfile", type=str, help="log to file instead of stdout", default=None)
    args = parser.parse_args()

    config = utils.readConfig(utils.findConfigFile(args.configfile))
    monitor = Monitor(config, logFile=args.logfile)

    port = args.port
    if port is None:
        port = config["netdevstat.collectors"].getint("port", 8001)
    host = utils.removeQuotes(config["netdevstat.collectors"].get("host", "0.0.0.0"))

    app = create_app(monitor)

    # Collectors are initialized in the worker so that all metric state lives
    # in the serving process.
    def post_fork(server, worker):
        monitor.initMetrics()

    options = {
        "bind": "%s:%s" % (host, port),
        "workers": 1,
        "post_fork": post_fork,
    }

    logging.info("Serving metrics on %s" % options["bind"])
    server = NetdevstatServer(app, options)
    server.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
