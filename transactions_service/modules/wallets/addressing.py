"""Wallet addressing schemes.

A wallet carries both a surrogate ``id`` and a random numeric ``code``. Which of
the two callers use to address wallets is decided once, here, and the engine
only ever handles opaque :data:`WalletRef` values.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Literal

from .exceptions import InvalidWalletError
from .models import Wallet, WalletRef

AddressingMode = Literal["code", "id"]


@dataclass(slots=True, frozen=True)
class WalletAddressing:
    mode: AddressingMode = "code"
    code_length: int = 12

    @property
    def key(self) -> str:
        """Name of the wallet column references are matched against."""
        return "code" if self.mode == "code" else "id"

    def parse(self, ref: object) -> WalletRef:
        if isinstance(ref, bool):
            raise InvalidWalletError(f"malformed wallet reference: {ref!r}")
        if self.mode == "id":
            if isinstance(ref, int):
                value = ref
            elif isinstance(ref, str) and ref.isdigit():
                value = int(ref)
            else:
                raise InvalidWalletError(f"malformed wallet reference: {ref!r}")
            if value <= 0:
                raise InvalidWalletError(f"malformed wallet reference: {ref!r}")
            return value

        code = str(ref) if isinstance(ref, int) else ref
        if not isinstance(code, str) or len(code) != self.code_length or not code.isdigit():
            raise InvalidWalletError(f"malformed wallet reference: {ref!r}")
        return code

    def ref_of(self, wallet: Wallet) -> WalletRef:
        return wallet.code if self.mode == "code" else wallet.id

    def generate_code(self) -> str:
        return "".join(secrets.choice("0123456789") for _ in range(self.code_length))


__all__ = ["AddressingMode", "WalletAddressing"]
