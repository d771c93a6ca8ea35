"""
Encoding, wordlists and network parameters
"""

# data/__init__.py
from bacwallet.data.codec import *
from bacwallet.data.networks import *
from bacwallet.data.wordlist import *
