# Packaging for netdevstat: a Prometheus exporter for the per-interface
# traffic counters listed in /proc/net/dev.

from setuptools import find_packages, setup

setup(
    name="netdevstat",
    version="1.0.0",
    description="Prometheus exporter for network device traffic counters",
    license="MIT",
    packages=find_packages(include=["netdevstat", "netdevstat.*"]),
    python_requires=">=3.8",
    install_requires=[
        "prometheus_client>=0.17",
        "flask>=2.2",
        "gunicorn>=20.1",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "netdevstat-monitor=netdevstat.node_monitoring:main",
        ],
    },
)
