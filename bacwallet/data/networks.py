"""
The Network record and the NetworkRegistry.

A Network holds the version constants each key format depends on. The registry maps every scalar value of a
network (name, alias, version numbers, port, magic) back to the network, so any of them can be used as an
identifier. A registry is an explicit value: components take a registry argument and fall back to
DEFAULT_REGISTRY, which is built once at import time.
"""
import threading
from dataclasses import dataclass, fields
from typing import Any, Iterable, Iterator, Optional

from bacwallet.core import NETWORKS, NetworkError, get_logger

__all__ = ["Network", "NetworkRegistry", "DEFAULT_REGISTRY"]

logger = get_logger(__name__)

REQUIRED_FIELDS = ("name", "pubkeyhash", "privatekey", "xpubkey", "xprivkey")


@dataclass(frozen=True, eq=False)
class Network:
    """Immutable network parameters. Two networks are the same only if they are the same object"""
    name: str
    pubkeyhash: int
    privatekey: int
    xpubkey: int
    xprivkey: int
    alias: Optional[str] = None
    scripthash: Optional[int] = None
    magic: Optional[int] = None
    port: Optional[int] = None
    dns_seeds: tuple[str, ...] = ()

    def __str__(self):
        return self.name

    def lookup_values(self) -> list:
        """Every scalar field value, in field order. Tuples and unset fields are skipped"""
        values = []
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None and not isinstance(value, tuple):
                values.append(value)
        return values

    def to_dict(self) -> dict:
        network_dict = {f.name: getattr(self, f.name) for f in fields(self)}
        network_dict["dns_seeds"] = list(self.dns_seeds)
        return network_dict


class NetworkRegistry:
    """
    Ordered collection of networks with a reverse lookup table and a default network
    """

    def __init__(self, networks: Iterable[dict] = (), default: Any = None):
        self._networks: list[Network] = []
        self._lookup: dict[Any, Network] = {}
        self._default: Optional[Network] = None
        self._lock = threading.RLock()

        for params in networks:
            self.add(params)
        if default is not None:
            self.set_default(default)

    @classmethod
    def with_defaults(cls) -> "NetworkRegistry":
        """
        Registry holding livenet (alias mainnet) and testnet (alias regtest). The regtest port and magic resolve to
        testnet.
        """
        registry = cls([NETWORKS.LIVENET, NETWORKS.TESTNET], default=NETWORKS.DEFAULT)
        testnet = registry.get("testnet")
        registry.add_lookup(NETWORKS.REGTEST_PORT, testnet)
        registry.add_lookup(NETWORKS.REGTEST_MAGIC, testnet)
        return registry

    # --- OVERRIDES --- #
    def __contains__(self, network) -> bool:
        return any(n is network for n in self._networks)

    def __iter__(self) -> Iterator[Network]:
        return iter(self.networks)

    def __len__(self) -> int:
        return len(self._networks)

    # --- PROPERTIES --- #
    @property
    def networks(self) -> tuple[Network, ...]:
        return tuple(self._networks)

    @property
    def default(self) -> Optional[Network]:
        return self._default

    # --- METHODS --- #
    def set_default(self, identifier) -> Network:
        network = self.get(identifier)
        if network is None:
            raise NetworkError(f"Cannot set unknown network {identifier!r} as default")
        self._default = network
        return network

    def add(self, params: dict) -> Network:
        """
        Validate the required fields, build an immutable Network and index all of its scalar values
        """
        missing = [name for name in REQUIRED_FIELDS if params.get(name) is None]
        if missing:
            raise NetworkError(f"Network parameters missing required fields: {missing}")

        known = {f.name for f in fields(Network)}
        unknown = set(params) - known
        if unknown:
            raise NetworkError(f"Unknown network parameters: {sorted(unknown)}")

        kwargs = dict(params)
        kwargs["dns_seeds"] = tuple(params.get("dns_seeds") or ())
        network = Network(**kwargs)

        with self._lock:
            for value in network.lookup_values():
                owner = self._lookup.get(value)
                if owner is not None:
                    raise NetworkError(f"Lookup value {value!r} already belongs to network {owner.name}")
            for value in network.lookup_values():
                self._lookup[value] = network
            self._networks.append(network)

        logger.info(f"Added network {network.name}")
        return network

    def add_lookup(self, value, network: Network):
        """Attach an extra lookup key to a registered network"""
        with self._lock:
            if network not in self:
                raise NetworkError(f"Network {network} is not registered")
            owner = self._lookup.get(value)
            if owner is not None and owner is not network:
                raise NetworkError(f"Lookup value {value!r} already belongs to network {owner.name}")
            self._lookup[value] = network

    def get(self, identifier, keys: str | list[str] | None = None) -> Optional[Network]:
        """
        Resolve a network from a Network, a lookup value, or - when keys are given - the value of the named field(s)
        """
        if identifier in self:
            return identifier

        if keys is not None:
            keys = [keys] if isinstance(keys, str) else keys
            for network in self._networks:
                if any(getattr(network, key, None) == identifier for key in keys):
                    return network
            return None

        try:
            return self._lookup.get(identifier)
        except TypeError:
            # Unhashable identifiers never match
            return None

    def remove(self, network: Network):
        """Remove the network and every lookup entry that points to it"""
        with self._lock:
            if network not in self:
                return
            self._networks = [n for n in self._networks if n is not network]
            self._lookup = {k: v for k, v in self._lookup.items() if v is not network}
            if self._default is network:
                self._default = None

        logger.info(f"Removed network {network.name}")


DEFAULT_REGISTRY = NetworkRegistry.with_defaults()
