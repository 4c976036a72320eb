from .factories import mk_account, mk_transaction, build_sign_encode, FailingSigner

__all__ = [
    "mk_account",
    "mk_transaction",
    "build_sign_encode",
    "FailingSigner",
]
