"""
Contains the core elements that are used within bacwallet

Core:
    -Provides the reference formats and constants
    -Provides custom exceptions for the key, mnemonic and network elements
    -Provides stream helpers and logging
"""
# core/__init__.py
from bacwallet.core.byte_stream import *
from bacwallet.core.exceptions import *
from bacwallet.core.formats import *
from bacwallet.core.logging import *
