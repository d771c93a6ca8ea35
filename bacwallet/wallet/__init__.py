"""
All classes and methods which have to do with the bacwallet keys
"""
# wallet/__init__.py
from bacwallet.wallet.sources import *

from bacwallet.wallet.mnemonic import *
from bacwallet.wallet.privkey import *
from bacwallet.wallet.pubkey import *
from bacwallet.wallet.xkeys import *
