"""
Tests for the Network record and the NetworkRegistry
"""
import pytest

from bacwallet.core import NETWORKS, NetworkError
from bacwallet.data import DEFAULT_REGISTRY, Network, NetworkRegistry

from tests.known_values import BACNET


def test_default_networks(registry):
    """
    Every scalar value of a network resolves back to it, including the regtest port and magic
    """
    livenet = registry.get("livenet")
    testnet = registry.get("testnet")

    assert registry.default is livenet, "Livenet should be the default network"
    assert len(registry) == 2, "Registry should start with livenet and testnet"

    assert registry.get("mainnet") is livenet, "Alias lookup failed"
    assert registry.get(NETWORKS.LIVENET["xprivkey"]) is livenet, "xprivkey lookup failed"
    assert registry.get("regtest") is testnet, "Regtest alias should resolve to testnet"
    assert registry.get(NETWORKS.REGTEST_PORT) is testnet, "Regtest port should resolve to testnet"
    assert registry.get(NETWORKS.REGTEST_MAGIC) is testnet, "Regtest magic should resolve to testnet"
    assert registry.get(testnet) is testnet, "A registered network should resolve to itself"


def test_get_with_keys(registry):
    """
    Lookups restricted to named fields only match those fields
    """
    livenet = registry.get("livenet")
    assert registry.get(0x80, "privatekey") is livenet, "Field lookup failed"
    assert registry.get(0x80, ["pubkeyhash", "privatekey"]) is livenet, "Multi field lookup failed"
    assert registry.get(0x80, "pubkeyhash") is None, "Lookup matched the wrong field"


def test_unknown_identifiers(registry):
    assert registry.get("nonexistent") is None, "Unknown name should not resolve"
    assert registry.get(["livenet"]) is None, "Unhashable identifiers should not resolve"

    # Networks are compared by identity, so an equal copy from another registry is not in this one
    assert DEFAULT_REGISTRY.get("livenet") not in registry, "Network from another registry found by identity"


def test_add_and_remove(registry):
    bacnet = registry.add(BACNET)

    assert isinstance(bacnet, Network), "Add should return the new Network"
    assert registry.get("bacnet-dev") is bacnet, "Added network not found by alias"
    assert registry.get(BACNET["xpubkey"]) is bacnet, "Added network not found by xpubkey"
    assert bacnet.to_dict()["dns_seeds"] == [], "Missing dns seeds should default to an empty list"

    registry.set_default("bacnet")
    assert registry.default is bacnet, "Failed to set default network"

    registry.remove(bacnet)
    assert registry.get("bacnet") is None, "Removed network still resolves"
    assert registry.get(BACNET["xprivkey"]) is None, "Removed network lookup entries still present"
    assert registry.default is None, "Removing the default network should clear the default"


def test_add_errors(registry):
    """
    Missing or unknown fields and values already owned by another network are rejected
    """
    missing = dict(BACNET)
    missing.pop("xprivkey")
    with pytest.raises(NetworkError):
        registry.add(missing)

    with pytest.raises(NetworkError):
        registry.add({**BACNET, "segwit_hrp": "bac"})

    with pytest.raises(NetworkError):
        registry.add({**BACNET, "privatekey": NETWORKS.LIVENET["privatekey"]})
    assert registry.get("bacnet") is None, "Failed add should leave no network behind"

    with pytest.raises(NetworkError):
        registry.set_default("bacnet")


def test_empty_registry():
    empty = NetworkRegistry()
    assert empty.default is None, "Empty registry should have no default"
    assert empty.get("livenet") is None, "Empty registry should resolve nothing"
    assert list(empty) == [], "Empty registry should iterate nothing"
