"""
Stellar transaction builder

Assembles ledger transactions from a source account, ordered operations,
an optional memo and timebounds, and produces a deterministic signed
envelope in its binary and base64 transport forms.
"""

# Errors and configuration
from .runtime.errors import *
from .config import TxnBuildConfig, get_config, set_config
from .network import PUBLIC_NETWORK_PASSPHRASE, TEST_NETWORK_PASSPHRASE, network_id

# Codec, keys and signers
from .codec import xdr, strkey, hash_transaction
from .crypto import Keypair
from .signers import Signer, SignerError, Ed25519Signer

# Transaction building
from .tx import *

__version__ = "0.1.0"
__all__ = [
    # Errors
    "ErrorCode",
    "TxnBuildError",
    "ConfigError",
    "ValidationError",
    "EncodingError",
    "CryptoError",
    "SequenceError",
    "BuildError",

    # Configuration and networks
    "TxnBuildConfig",
    "get_config",
    "set_config",
    "PUBLIC_NETWORK_PASSPHRASE",
    "TEST_NETWORK_PASSPHRASE",
    "network_id",

    # Codec and keys
    "xdr",
    "strkey",
    "hash_transaction",
    "Keypair",
    "Signer",
    "SignerError",
    "Ed25519Signer",

    # Accounts and values
    "Account",
    "SimpleAccount",
    "HorizonAccount",
    "Asset",
    "NativeAsset",
    "CreditAsset",
    "parse_amount",
    "format_amount",
    "parse_price",
    "Memo",
    "MemoText",
    "MemoID",
    "MemoHash",
    "MemoReturn",
    "Timebounds",
    "TIMEOUT_INFINITE",
    "set_timebounds",
    "set_timeout",
    "set_no_timeout",
    "FeePolicy",
    "DEFAULT_BASE_FEE",
    "compute_fee",

    # Operations
    "Operation",
    "AccountFlag",
    "AccountSigner",
    "CreateAccount",
    "Payment",
    "PathPayment",
    "ManageOffer",
    "CreatePassiveOffer",
    "SetOptions",
    "ChangeTrust",
    "AllowTrust",
    "AccountMerge",
    "Inflation",
    "ManageData",
    "BumpSequence",
    "create_offer_op",
    "update_offer_op",
    "delete_offer_op",
    "remove_trustline_op",

    # Transactions
    "Transaction",
    "BuiltTransaction",
    "SignedTransaction",
    "TransactionState",
]
