"""
Network identities.

A transaction is bound to one network through its passphrase: the SHA-256
of the passphrase is prefixed to every signed payload.
"""

from .codec.hashes import network_id

PUBLIC_NETWORK_PASSPHRASE = "Public Global Stellar Network ; September 2015"
TEST_NETWORK_PASSPHRASE = "Test SDF Network ; September 2015"

NETWORKS = {
    "public": PUBLIC_NETWORK_PASSPHRASE,
    "testnet": TEST_NETWORK_PASSPHRASE,
}


def resolve_passphrase(name_or_passphrase: str) -> str:
    """Map a short network name ("public", "testnet") to its passphrase."""
    return NETWORKS.get(name_or_passphrase.lower(), name_or_passphrase)


__all__ = [
    "PUBLIC_NETWORK_PASSPHRASE",
    "TEST_NETWORK_PASSPHRASE",
    "NETWORKS",
    "network_id",
    "resolve_passphrase",
]
