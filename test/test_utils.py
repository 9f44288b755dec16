import pytest

from netdevstat import utils


@pytest.mark.parametrize(
    "value, expected",
    [('"^lo$"', "^lo$"), ("'^lo$'", "^lo$"), ("^lo$", "^lo$"), ('"unbalanced', '"unbalanced')],
)
def test_remove_quotes(value, expected):
    """Test surrounding quotes are stripped from config values."""
    assert utils.removeQuotes(value) == expected


class TestParseBuckets:
    """Unit tests for parseBuckets()."""

    def test_parse(self):
        """Test a comma-separated bucket list."""
        assert utils.parseBuckets("27500, 35750,41250") == [27500.0, 35750.0, 41250.0]

    def test_quoted(self):
        """Test a quoted bucket list."""
        assert utils.parseBuckets('"1,2,3"') == [1.0, 2.0, 3.0]

    @pytest.mark.parametrize("value", ["", "1, abc", "10, 5", "1, 1"])
    def test_invalid(self, value):
        """Test empty, non-numeric and non-increasing bucket lists are rejected."""
        with pytest.raises(ValueError):
            utils.parseBuckets(value)


class TestConfig:
    """Unit tests for runtime config discovery and reading."""

    def test_find_config_argument(self, monkeypatch):
        """Test the command-line argument wins over the environment."""
        monkeypatch.setenv(utils.CONFIG_ENV, "/tmp/from-env.config")
        assert utils.findConfigFile("/tmp/arg.config") == "/tmp/arg.config"
        assert utils.findConfigFile() == "/tmp/from-env.config"

    def test_find_config_default(self, monkeypatch, tmp_path):
        """Test no config file is found when none exists."""
        monkeypatch.delenv(utils.CONFIG_ENV, raising=False)
        monkeypatch.setattr(utils, "DEFAULT_CONFIG_PATHS", [str(tmp_path / "missing.config")])
        assert utils.findConfigFile() is None

    def test_read_config(self, tmp_path):
        """Test config values are read from an INI file."""
        path = tmp_path / "netdevstat.config"
        path.write_text("[netdevstat.collectors.netdev]\nignored_devices = \"^(lo|tun.*)$\"\n")
        config = utils.readConfig(str(path))
        assert config.has_section("netdevstat.collectors")
        assert utils.removeQuotes(config["netdevstat.collectors.netdev"]["ignored_devices"]) == "^(lo|tun.*)$"

    def test_read_config_defaults(self):
        """Test the collectors section exists without a config file."""
        config = utils.readConfig(None)
        assert config.sections() == ["netdevstat.collectors"]

    def test_read_config_missing(self, tmp_path):
        """Test a missing config file aborts start-up."""
        with pytest.raises(SystemExit):
            utils.readConfig(str(tmp_path / "missing.config"))


def test_prefix_filter():
    """Test PrefixFilter prepends its prefix to log messages."""
    import logging

    record = logging.LogRecord("test", logging.INFO, __file__, 1, "message", None, None)
    assert utils.PrefixFilter("   ").filter(record)
    assert record.msg == "   message"


def test_resolve_proc_path():
    """Test procfs paths resolve under a custom root."""
    assert str(utils.resolveProcPath("/host/proc", "net", "dev")) == "/host/proc/net/dev"
