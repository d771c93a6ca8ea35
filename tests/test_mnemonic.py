"""
Tests for the Mnemonic class and the BIP39 phrase functions
"""
from secrets import token_bytes

import pytest

from bacwallet.core import WalletError
from bacwallet.data import load_wordlist, load_wordlist_file
from bacwallet.wallet import (HDPrivateKey, Mnemonic, entropy_to_mnemonic, generate_mnemonic, is_valid_mnemonic,
                              mnemonic_to_entropy, to_seed)

from tests.known_values import BIP32_SEED_KEY

KNOWN_MNEMONIC = ['nature', 'bike', 'manual', 'ensure', 'audit', 'special', 'upon', 'pole', 'donate', 'mean', 'simple',
                  'dolphin', 'siren', 'panel', 'twice', 'atom', 'caught', 'stereo', 'shed', 'leave', 'behave', 'kit',
                  'canal', 'rack']
KNOWN_SEED = \
    "3a6d4603e997d4335795e2cfce9d62697157d462d02be4d14b3a86a94f7ee290f23c30b8563b8b4bde1498cdfd11f3b9e8a31783ff740e8eaaa5df794b7624e4"

# BIP39 reference vectors, all with passphrase "TREZOR"
ZERO_PHRASE = "abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon about"
ZERO_SEED = \
    "c55257c360c07c72029aebc1b53c05ed0362ada38ead3e3e9efa3708e53495531f09a6987599d18264c1e1c92f2cf141630c7a3c4ab7c81b2f001698e7463b04"
ZERO_XPRV = \
    "xprv9s21ZrQH143K3h3fDYiay8mocZ3afhfULfb5GX8kCBdno77K4HiA15Tg23wpbeF1pLfs1c5SPmYHrEpTuuRhxMwvKDwqdKiGJS9XFKzUsAF"
SEVENS_PHRASE = "legal winner thank year wave sausage worth useful legal winner thank yellow"
SEVENS_SEED = \
    "2e8905819b8723fe2c1d161860e5ee1830318dbf49a83bd451cfb8440c28bd6fa457fe1296106559a3c80937a1c1069be3a3a5bd381ee6260e8d9739fce1f607"


def test_seed_phrase():
    """
    Given a known phrase, we create a Mnemonic object and verify we get the same seed
    """
    known_mnemonic = Mnemonic(KNOWN_MNEMONIC)
    assert known_mnemonic.to_seed() == bytes.fromhex(KNOWN_SEED), "Failed to generate known seed from known phrase"
    assert known_mnemonic.phrase == " ".join(KNOWN_MNEMONIC), "Word list and phrase construction disagree"


def test_reference_vectors():
    """
    Entropy to phrase, phrase to entropy and phrase to seed for the published vectors
    """
    assert entropy_to_mnemonic(bytes(16)) == ZERO_PHRASE, "Failed to encode all zero entropy"
    assert entropy_to_mnemonic(bytes([0x7f] * 16)) == SEVENS_PHRASE, "Failed to encode 0x7f entropy"
    assert entropy_to_mnemonic(bytes([0xff] * 16)) == " ".join(["zoo"] * 11 + ["wrong"]), \
        "Failed to encode all 0xff entropy"
    assert entropy_to_mnemonic(bytes(32)) == " ".join(["abandon"] * 23 + ["art"]), \
        "Failed to encode 256 bits of zero entropy"

    assert mnemonic_to_entropy(SEVENS_PHRASE) == bytes([0x7f] * 16), "Failed to recover entropy from phrase"

    assert to_seed(ZERO_PHRASE, "TREZOR") == bytes.fromhex(ZERO_SEED), "Failed to derive known seed"
    assert Mnemonic(SEVENS_PHRASE).to_seed("TREZOR") == bytes.fromhex(SEVENS_SEED), "Failed to derive known seed"


def test_word_counts():
    """
    Entropy of 128 to 256 bits in 32 bit steps gives 12 to 24 words. Entropy that doesn't fill a whole number of
    words gives the empty phrase
    """
    for entropy_bytes, word_count in [(16, 12), (20, 15), (24, 18), (28, 21), (32, 24), (64, 48)]:
        mnemonic = Mnemonic.from_entropy(token_bytes(entropy_bytes))
        assert len(mnemonic.words) == word_count, f"Expected {word_count} words for {entropy_bytes} bytes"
        assert len(mnemonic.to_entropy()) == entropy_bytes, "Entropy length changed in round trip"

    assert entropy_to_mnemonic(token_bytes(17)) == "", "Non word aligned entropy should give the empty phrase"


def test_validate_mnemonic():
    random_mnemonic = Mnemonic()
    assert is_valid_mnemonic(random_mnemonic.phrase), "Failed to validate phrase for random Mnemonic"
    assert len(generate_mnemonic(256).words) == 24, "Expected 24 words for 256 bits of entropy"

    # Last word carries the checksum
    assert not is_valid_mnemonic(" ".join(["abandon"] * 12)), "Phrase with a bad checksum validated"
    assert not is_valid_mnemonic(ZERO_PHRASE.replace("about", "notaword")), "Phrase with unknown word validated"
    assert not is_valid_mnemonic("abandon abandon"), "Phrase with a bad word count validated"
    assert not is_valid_mnemonic("abandon abandon about"), "Phrase below 128 bits of entropy validated"
    assert not is_valid_mnemonic(" ".join(["abandon"] * 51)), "Phrase above 512 bits of entropy validated"
    assert not is_valid_mnemonic(""), "Empty phrase validated"


def test_mnemonic_errors():
    with pytest.raises(WalletError):
        Mnemonic("abandon abandon about")
    with pytest.raises(WalletError):
        Mnemonic(" ".join(["abandon"] * 12))
    with pytest.raises(WalletError):
        Mnemonic(entropy_bits=100)
    with pytest.raises(WalletError):
        Mnemonic(entropy_bits=544)
    with pytest.raises(WalletError):
        Mnemonic.from_entropy(token_bytes(17))


def test_mnemonic_identity():
    """
    Mnemonics compare by phrase and wordlist. Extra whitespace in the given phrase is dropped
    """
    assert Mnemonic(ZERO_PHRASE) == Mnemonic("  " + ZERO_PHRASE.replace(" ", "   ")), "Whitespace changed identity"
    assert Mnemonic(ZERO_PHRASE) != Mnemonic(SEVENS_PHRASE), "Different phrases compared equal"
    assert str(Mnemonic(ZERO_PHRASE)) == ZERO_PHRASE, "String form should be the phrase"
    assert len({Mnemonic(ZERO_PHRASE), Mnemonic(ZERO_PHRASE)}) == 1, "Equal mnemonics hashed differently"


def test_mnemonic_to_hd_private_key():
    """
    The root key of the all zero vector, using the published seed key
    """
    hd_key = Mnemonic(ZERO_PHRASE).to_hd_private_key(passphrase="TREZOR", seed_key=BIP32_SEED_KEY)
    assert isinstance(hd_key, HDPrivateKey), "Expected an HDPrivateKey"
    assert hd_key.to_string() == ZERO_XPRV, "Failed to derive known root key from phrase"


def test_wordlists(wordlist, tmp_path):
    assert len(wordlist) == 2048, "English wordlist should have 2048 words"
    assert wordlist[0] == "abandon" and wordlist[-1] == "zoo", "English wordlist out of order"
    assert load_wordlist() is wordlist, "Wordlist should be loaded once"

    with pytest.raises(WalletError):
        load_wordlist("klingon")

    # A custom wordlist encodes the same indices with different words
    custom_file = tmp_path / "custom.txt"
    custom_file.write_text("\n".join(f"w{i:04d}" for i in range(2048)))
    custom = load_wordlist_file(custom_file)
    phrase = entropy_to_mnemonic(bytes(16), custom)
    assert phrase.split()[0] == "w0000", "Custom wordlist not used"
    assert Mnemonic(phrase, wordlist=custom).to_entropy() == bytes(16), "Custom wordlist round trip failed"

    short_file = tmp_path / "short.txt"
    short_file.write_text("one\ntwo\n")
    with pytest.raises(WalletError):
        load_wordlist_file(short_file)
