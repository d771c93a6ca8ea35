"""
bacwallet - mnemonic phrases, secp256k1 keys and root extended keys for the BAC chain

    core:         constants, exceptions, byte streams and logging
    cryptography: hash functions and the secp256k1 curve
    data:         Base58 codec, BIP39 wordlists and the network registry
    wallet:       Mnemonic, PrivateKey, PublicKey, HDPrivateKey and HDPublicKey
"""
