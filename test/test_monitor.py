import pytest
from netdev_tables import NETDEV_TABLE, SIMPLE_TABLE
from prometheus_client.parser import text_string_to_metric_families

from netdevstat.collector_info import INFO
from netdevstat.collector_netdev import NETDEV
from netdevstat.exceptions import FormatError
from netdevstat.monitor import Monitor
from netdevstat.node_monitoring import create_app


def metric_names(text):
    """Names of the metric families in exposition text."""
    return {family.name for family in text_string_to_metric_families(text)}


class TestMonitor:
    """Unit tests for Monitor collector loading and rendering."""

    def test_init_metrics(self, procfs, config):
        """Test enabled collectors are loaded and their metrics rendered."""
        procfs(NETDEV_TABLE)
        monitor = Monitor(config)
        monitor.initMetrics()

        assert [type(c) for c in monitor.collectors] == [INFO, NETDEV]

        names = metric_names(monitor.updateAllMetrics().decode("utf-8"))
        assert "node_network_receive_bytes" in names
        assert "node_network_transmit_mbits" in names
        assert "node_network_receive_megabits_hist" in names
        assert "node_network_transmit_megabits_hist" in names
        assert "netdevstat_info" in names
        assert "netdevstat_perf_runtime_seconds" in names

    def test_netdev_disabled(self, procfs, config):
        """Test enable_netdev = False leaves only the info collector."""
        config["netdevstat.collectors"]["enable_netdev"] = "False"
        monitor = Monitor(config)
        monitor.initMetrics()

        assert [type(c) for c in monitor.collectors] == [INFO]
        names = metric_names(monitor.updateAllMetrics().decode("utf-8"))
        assert "node_network_receive_bytes" not in names

    def test_missing_table_at_startup(self, procfs, config):
        """Test a missing table at start-up is logged, not fatal."""
        monitor = Monitor(config)
        monitor.initMetrics()

        procfs(SIMPLE_TABLE)
        names = metric_names(monitor.updateAllMetrics().decode("utf-8"))
        assert "node_network_receive_bytes" in names

    def test_failed_scrape_raises(self, procfs, config):
        """Test a malformed table propagates out of updateAllMetrics()."""
        procfs(SIMPLE_TABLE)
        monitor = Monitor(config)
        monitor.initMetrics()

        procfs("title\nbroken header\n")
        with pytest.raises(FormatError):
            monitor.updateAllMetrics()

    def test_undecodable_table_at_startup(self, procfs, config):
        """Test undecodable bytes at start-up are logged, not fatal."""
        root = procfs(SIMPLE_TABLE)
        (root / "net" / "dev").write_bytes(SIMPLE_TABLE.encode("utf-8") + b"eth\xff: 1 2 3 4\n")
        monitor = Monitor(config)
        monitor.initMetrics()

        with pytest.raises(FormatError):
            monitor.updateAllMetrics()

    def test_allowed_ips(self, config):
        """Test allowed_ips is split into a list."""
        config["netdevstat.collectors"]["allowed_ips"] = "127.0.0.1, 10.0.0.5"
        monitor = Monitor(config)
        assert monitor.allowed_ips == ["127.0.0.1", "10.0.0.5"]


class TestMetricsEndpoint:
    """Unit tests for the Flask /metrics endpoint."""

    @pytest.fixture
    def client(self, procfs, config):
        """Flask test client for an initialized monitor."""
        procfs(SIMPLE_TABLE)
        monitor = Monitor(config)
        monitor.initMetrics()
        app = create_app(monitor)
        return app.test_client()

    def test_metrics(self, client):
        """Test /metrics serves exposition text."""
        response = client.get("/metrics")
        assert response.status_code == 200
        assert response.headers["Content-Type"].startswith("text/plain")

        text = response.get_data(as_text=True)
        assert 'node_network_receive_bytes{device="eth0"} 100.0' in text
        assert 'node_network_receive_megabits_hist_count{device="eth0"} 2.0' in text

    def test_failed_scrape_returns_error(self, client, procfs):
        """Test a failed scrape answers 500 with no metrics."""
        procfs(SIMPLE_TABLE + "eth1: 1\n")
        response = client.get("/metrics")
        assert response.status_code == 500
        assert response.get_data(as_text=True) == ""

    def test_undecodable_table_returns_error(self, client, procfs):
        """Test undecodable bytes in the table answer 500."""
        (procfs.root / "net" / "dev").write_bytes(b"title\n face |bytes|bytes\n\xff: 1 2\n")
        response = client.get("/metrics")
        assert response.status_code == 500

    def test_disallowed_ip(self, client):
        """Test requests from unlisted addresses are refused."""
        response = client.get("/metrics", environ_base={"REMOTE_ADDR": "192.168.1.20"})
        assert response.status_code == 403
