"""
The Mnemonic class - a phrase of BIP39 words encoding entropy plus a checksum, and the seed derived from it.

Entropy of ENT bits gets ENT / 32 checksum bits appended, taken from the front of SHA256(entropy). The result is cut
into 11-bit groups, each of which indexes a word in the 2048 word list:

    ENT   CS   words
    128   4    12
    160   5    15
    192   6    18
    224   7    21
    256   8    24
"""
from secrets import token_bytes
from typing import Sequence

from bacwallet.core import WALLET, WalletError, get_logger
from bacwallet.cryptography import pbkdf2, sha256
from bacwallet.data import load_wordlist

__all__ = ["Mnemonic", "entropy_checksum", "entropy_to_mnemonic", "mnemonic_to_entropy", "is_valid_mnemonic",
           "generate_mnemonic", "to_seed"]

logger = get_logger(__name__)

WORD_BITS = WALLET.WORD_BITS
WORD_MASK = (1 << WORD_BITS) - 1


# --- ENTROPY <-> PHRASE --- #
def entropy_checksum(entropy: bytes) -> int:
    """
    Return the leading len(entropy) * 8 // 32 bits of SHA256(entropy) as an integer
    """
    checksum_bits = len(entropy) * 8 // 32
    hash_int = int.from_bytes(sha256(entropy), "big")
    return hash_int >> (WALLET.HASH_BITS - checksum_bits)


def entropy_to_mnemonic(entropy: bytes, wordlist: Sequence[str] | None = None) -> str:
    """
    Returns the space separated phrase for the given entropy. If entropy plus checksum is not a whole number of words
    we return the empty string
    """
    wordlist = load_wordlist() if wordlist is None else wordlist

    entropy_bits = len(entropy) * 8
    checksum_bits = entropy_bits // 32
    total_bits = entropy_bits + checksum_bits
    if total_bits % WORD_BITS != 0:
        return ""

    # Shift entropy by checksum_bits then OR the checksum to append it
    ent_check = (int.from_bytes(entropy, "big") << checksum_bits) | entropy_checksum(entropy)

    word_count = total_bits // WORD_BITS
    words = []
    for i in range(word_count):
        shift = total_bits - WORD_BITS * (i + 1)
        words.append(wordlist[(ent_check >> shift) & WORD_MASK])
    return " ".join(words)


def mnemonic_to_entropy(phrase: str | Sequence[str], wordlist: Sequence[str] | None = None) -> bytes:
    """
    Recover the entropy from a phrase, verifying the checksum. Raises WalletError for unknown words, a word count
    outside 12 to 48 words in steps of 3, or a checksum mismatch.
    """
    wordlist = load_wordlist() if wordlist is None else wordlist
    words = phrase.split() if isinstance(phrase, str) else list(phrase)

    word_count = len(words)
    if word_count == 0 or word_count % 3 != 0:
        raise WalletError(f"Invalid number of words in mnemonic: {word_count}")

    # 33 bits per 3 words: 32 of entropy and 1 of checksum
    total_bits = word_count * WORD_BITS
    checksum_bits = total_bits // 33
    entropy_bits = total_bits - checksum_bits
    _check_entropy_bits(entropy_bits)

    index_map = {word: i for i, word in enumerate(wordlist)}
    ent_check = 0
    for word in words:
        if word not in index_map:
            raise WalletError(f"Word not in wordlist: {word!r}")
        ent_check = (ent_check << WORD_BITS) | index_map[word]

    checksum = ent_check & ((1 << checksum_bits) - 1)
    entropy = (ent_check >> checksum_bits).to_bytes(entropy_bits // 8, "big")
    if entropy_checksum(entropy) != checksum:
        raise WalletError("Mnemonic phrase fails checksum validation")
    return entropy


def is_valid_mnemonic(phrase: str | Sequence[str], wordlist: Sequence[str] | None = None) -> bool:
    try:
        mnemonic_to_entropy(phrase, wordlist)
    except WalletError:
        return False
    return True


def _check_entropy_bits(entropy_bits: int):
    if (entropy_bits % WALLET.ENTROPY_STEP_BITS != 0
            or not WALLET.MIN_ENTROPY_BITS <= entropy_bits <= WALLET.MAX_ENTROPY_BITS):
        raise WalletError(
            f"Entropy of {entropy_bits} bits not allowed. Must be a multiple of {WALLET.ENTROPY_STEP_BITS} between "
            f"{WALLET.MIN_ENTROPY_BITS} and {WALLET.MAX_ENTROPY_BITS}")


# --- SEED --- #
def to_seed(mnemonic, passphrase: str = "") -> bytes:
    """
    Returns the 64 byte seed for a phrase (or Mnemonic) and optional passphrase
    """
    return pbkdf2(mnemonic=str(mnemonic), passphrase=passphrase)


class Mnemonic:
    """
    Immutable mnemonic. Built from a given phrase, which must validate, or from fresh entropy.
    """
    __slots__ = ("_phrase", "_wordlist")

    def __init__(self, phrase: str | Sequence[str] | None = None,
                 entropy_bits: int = WALLET.DEFAULT_ENTROPY_BITS, wordlist: Sequence[str] | None = None):
        wordlist = load_wordlist() if wordlist is None else tuple(wordlist)

        if phrase is not None:
            words = phrase.split() if isinstance(phrase, str) else list(phrase)
            mnemonic_to_entropy(words, wordlist)
            phrase = " ".join(words)
        else:
            _check_entropy_bits(entropy_bits)
            phrase = entropy_to_mnemonic(token_bytes(entropy_bits // 8), wordlist)
            logger.debug(f"Generated {len(phrase.split())} word mnemonic")

        self._phrase = phrase
        self._wordlist = wordlist

    @classmethod
    def from_entropy(cls, entropy: bytes, wordlist: Sequence[str] | None = None) -> "Mnemonic":
        _check_entropy_bits(len(entropy) * 8)
        wordlist = load_wordlist() if wordlist is None else tuple(wordlist)
        phrase = entropy_to_mnemonic(entropy, wordlist)
        if not phrase:
            raise WalletError("Entropy does not produce a whole number of words")
        return cls(phrase, wordlist=wordlist)

    # --- OVERRIDES --- #
    def __str__(self):
        return self._phrase

    def __repr__(self):
        return f"<Mnemonic words={len(self.words)}>"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Mnemonic):
            return False
        return self._phrase == other.phrase and self._wordlist == other.wordlist

    def __hash__(self) -> int:
        return hash(self._phrase)

    # --- PROPERTIES --- #
    @property
    def phrase(self) -> str:
        return self._phrase

    @property
    def wordlist(self) -> tuple[str, ...]:
        return self._wordlist

    @property
    def words(self) -> list[str]:
        return self._phrase.split(" ")

    # --- METHODS --- #
    def to_entropy(self) -> bytes:
        return mnemonic_to_entropy(self._phrase, self._wordlist)

    def to_seed(self, passphrase: str = "") -> bytes:
        """
        Returns seed value associated with mnemonic phrase of the object
        """
        return to_seed(self._phrase, passphrase)

    def to_hd_private_key(self, passphrase: str = "", network=None, **kwargs):
        """
        Returns the root HDPrivateKey for this mnemonic's seed. Extra keyword arguments go to HDPrivateKey.from_seed
        """
        from bacwallet.wallet.xkeys import HDPrivateKey
        return HDPrivateKey.from_seed(self.to_seed(passphrase), network=network, **kwargs)


def generate_mnemonic(entropy_bits: int = WALLET.DEFAULT_ENTROPY_BITS,
                      wordlist: Sequence[str] | None = None) -> Mnemonic:
    """Draw entropy_bits of fresh entropy and return its Mnemonic"""
    return Mnemonic(entropy_bits=entropy_bits, wordlist=wordlist)
