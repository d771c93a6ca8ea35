"""
Fixtures used in the tests
"""
import pytest

from bacwallet.cryptography import EllipticCurve
from bacwallet.data import NetworkRegistry, load_wordlist
from bacwallet.wallet import HDPrivateKey

from tests.known_values import BIP32_SEED, BIP32_SEED_KEY


@pytest.fixture()
def registry():
    """A fresh registry, so tests can add and remove networks"""
    return NetworkRegistry.with_defaults()


@pytest.fixture(scope="session")
def wordlist():
    return load_wordlist()


@pytest.fixture()
def curve():
    """
    y^2 = x^3 + 7 (mod 11), order 12
    """
    return EllipticCurve(a=0, b=7, p=11, order=12, generator=(2, 2))


@pytest.fixture()
def known_hd_key():
    """Master key of BIP32 test vector 1"""
    return HDPrivateKey.from_seed(BIP32_SEED, seed_key=BIP32_SEED_KEY)
