"""
Assets.

Either the native lumen or a credit asset identified by a code of up to
twelve alphanumeric characters and the issuing account.
"""

from __future__ import annotations
import re
from abc import ABC, abstractmethod
from typing import Optional

from ..codec import strkey
from ..codec.xdr import Asset as XdrAsset, AllowTrustAsset, AssetType, PublicKey
from ..runtime.errors import ValidationError, ErrorCode

_CODE_RE = re.compile(r"^[a-zA-Z0-9]{1,12}$")


class Asset(ABC):
    """Asset capability consumed by operations."""

    @abstractmethod
    def is_native(self) -> bool:
        pass

    @abstractmethod
    def get_code(self) -> str:
        pass

    @abstractmethod
    def get_issuer(self) -> Optional[str]:
        pass

    @abstractmethod
    def to_xdr(self) -> XdrAsset:
        pass


class NativeAsset(Asset):
    """The native lumen."""

    def is_native(self) -> bool:
        return True

    def get_code(self) -> str:
        return "XLM"

    def get_issuer(self) -> Optional[str]:
        return None

    def to_xdr(self) -> XdrAsset:
        return XdrAsset(AssetType.NATIVE)

    def __eq__(self, other) -> bool:
        return isinstance(other, NativeAsset)

    def __hash__(self) -> int:
        return hash(AssetType.NATIVE)

    def __repr__(self) -> str:
        return "NativeAsset()"


class CreditAsset(Asset):
    """Issued asset; codes of 1-4 chars are alphanum4, 5-12 alphanum12."""

    def __init__(self, code: str, issuer: str):
        self.code = code
        self.issuer = issuer

    def is_native(self) -> bool:
        return False

    def get_code(self) -> str:
        return self.code

    def get_issuer(self) -> Optional[str]:
        return self.issuer

    def asset_type(self) -> AssetType:
        if not isinstance(self.code, str) or not _CODE_RE.match(self.code):
            raise ValidationError(f"invalid asset code {self.code!r}: must be 1-12 alphanumeric characters",
                                  ErrorCode.INVALID_ASSET)
        return AssetType.CREDIT_ALPHANUM4 if len(self.code) <= 4 else AssetType.CREDIT_ALPHANUM12

    def _padded_code(self, asset_type: AssetType) -> bytes:
        width = 4 if asset_type == AssetType.CREDIT_ALPHANUM4 else 12
        return self.code.encode("ascii").ljust(width, b"\x00")

    def to_xdr(self) -> XdrAsset:
        """
        Wire form of the asset.

        Raises:
            ValidationError: If the code is malformed
            EncodingError: If the issuer is not a valid account address
        """
        asset_type = self.asset_type()
        issuer = PublicKey(strkey.decode_account_id(self.issuer))
        return XdrAsset(asset_type, self._padded_code(asset_type), issuer)

    def to_allow_trust_asset(self) -> AllowTrustAsset:
        """Code-only form used by AllowTrust; the issuer is implied by the source."""
        asset_type = self.asset_type()
        return AllowTrustAsset(asset_type, self._padded_code(asset_type))

    def __eq__(self, other) -> bool:
        if not isinstance(other, CreditAsset):
            return False
        return self.code == other.code and self.issuer == other.issuer

    def __hash__(self) -> int:
        return hash((self.code, self.issuer))

    def __repr__(self) -> str:
        return f"CreditAsset('{self.code}', '{self.issuer}')"


def asset_from_xdr(xdr_asset: XdrAsset) -> Asset:
    """Rebuild a high-level asset from its wire form."""
    if xdr_asset.type == AssetType.NATIVE:
        return NativeAsset()
    code = xdr_asset.code.rstrip(b"\x00").decode("ascii")
    return CreditAsset(code, xdr_asset.issuer.to_address())


__all__ = [
    "Asset",
    "NativeAsset",
    "CreditAsset",
    "asset_from_xdr",
]
