"""
Elliptic curve cryptography and hash functions
"""
# cryptography/__init__.py
from bacwallet.cryptography.ecc import *
from bacwallet.cryptography.hash_functions import *
