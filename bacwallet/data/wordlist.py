"""
Loads a BIP39 wordlist
"""
from functools import lru_cache
from pathlib import Path

from mnemonic import Mnemonic as _Bip39Wordlists

from bacwallet.core import WALLET, WalletError

__all__ = ["load_wordlist", "load_wordlist_file"]


def _checked(words: tuple[str, ...], source: str) -> tuple[str, ...]:
    if len(words) != WALLET.WORDLIST_SIZE:
        raise WalletError(f"{source} wordlist must have {WALLET.WORDLIST_SIZE} words. Found {len(words)}")
    if len(set(words)) != WALLET.WORDLIST_SIZE:
        raise WalletError(f"{source} wordlist contains duplicates.")
    return words


@lru_cache(maxsize=None)
def load_wordlist(language: str = WALLET.DEFAULT_LANGUAGE) -> tuple[str, ...]:
    """Return the BIP39 wordlist for the given language as an immutable tuple."""
    if language not in _Bip39Wordlists.list_languages():
        raise WalletError(f"No wordlist available for language {language!r}")
    return _checked(tuple(_Bip39Wordlists(language).wordlist), language)


def load_wordlist_file(wordlist_file: Path) -> tuple[str, ...]:
    """Return a custom newline separated wordlist."""
    with Path(wordlist_file).open(encoding="utf-8") as f:
        words = tuple(line.strip() for line in f if line.strip())
    return _checked(words, str(wordlist_file))
