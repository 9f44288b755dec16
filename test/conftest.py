import configparser

import pytest


@pytest.fixture
def procfs(tmp_path):
    """Fake procfs root; returns a function writing the net/dev table."""
    (tmp_path / "net").mkdir()

    def write(content):
        (tmp_path / "net" / "dev").write_text(content, encoding="utf-8")
        return tmp_path

    write.root = tmp_path
    return write


@pytest.fixture
def config(procfs):
    config = configparser.ConfigParser()
    config["netdevstat.collectors"] = {"enable_netdev": "True"}
    config["netdevstat.collectors.netdev"] = {
        "procfs_path": str(procfs.root),
        "ignored_devices": "^lo$",
    }
    return config
