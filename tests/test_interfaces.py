from __future__ import annotations

import psutil

from firewall_api.routes import interfaces as interfaces_routes


def _fake_net_if_addrs(*names: str):
    return lambda: {name: [] for name in names}


def test_interfaces_in_host_order(client, monkeypatch) -> None:
    monkeypatch.setattr(psutil, "net_if_addrs", _fake_net_if_addrs("lo", "eth0"))

    r = client.get("/interfaces")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/json")
    assert r.json() == [{"iface": "lo"}, {"iface": "eth0"}]


def test_interfaces_empty_host(client, monkeypatch) -> None:
    monkeypatch.setattr(psutil, "net_if_addrs", _fake_net_if_addrs())
    r = client.get("/interfaces")
    assert r.status_code == 200
    assert r.json() == []


def test_interfaces_enumeration_failure_is_500(client, monkeypatch) -> None:
    def _boom():
        raise OSError("getifaddrs failed")

    monkeypatch.setattr(psutil, "net_if_addrs", _boom)

    r = client.get("/interfaces")
    assert r.status_code == 500
    assert r.json() == {"message": "getifaddrs failed"}
    assert r.headers["access-control-allow-origin"] == "*"


def test_list_host_interfaces_uses_real_host() -> None:
    names = [i.iface for i in interfaces_routes.list_host_interfaces()]
    assert names == list(psutil.net_if_addrs())
