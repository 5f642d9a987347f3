# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_attestation

"""
Fixed-size enclave identity values.

A single base class, parametrised by ``SIZE``, backs every identity kind so that
conversion, display and (constant-time) equality are implemented once.
Distinct subclasses keep MRENCLAVE and MRSIGNER values from being mixed up.
"""

import hmac
from typing import ClassVar, Optional, Tuple, Type, TypeVar

SGX_HASH_SIZE = 32
SGX_CONFIGID_SIZE = 64

T = TypeVar("T", bound="IdentityValue")


def constant_time_eq(a: bytes, b: bytes) -> bool:
    """
    Compare two byte strings without short-circuiting on the first mismatch.

    Delegates to ``hmac.compare_digest``, which accumulates the XOR of every byte
    pair and only tests the aggregate at the end.
    """
    return hmac.compare_digest(a, b)


class IdentityValue:
    """
    Immutable, fixed-length opaque byte identity.

    Subclasses set ``SIZE``. Constructing without arguments yields the all-zero value.
    """

    SIZE: ClassVar[int] = 0

    __slots__ = ("_raw",)

    def __init__(self, raw: Optional[bytes] = None) -> None:
        if raw is None:
            raw = bytes(self.SIZE)
        if isinstance(raw, int):
            raise TypeError(f"{type(self).__name__} must be built from bytes, not int")
        raw = bytes(raw)
        if len(raw) != self.SIZE:
            raise ValueError(f"{type(self).__name__} requires exactly {self.SIZE} bytes, got {len(raw)}")
        object.__setattr__(self, "_raw", raw)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> Tuple[Type["IdentityValue"], Tuple[bytes]]:
        return (type(self), (self._raw,))

    @classmethod
    def from_hex(cls: Type[T], value: str) -> T:
        """Build a value from hex text; ``_`` separators as produced by ``str()`` are accepted."""
        if not isinstance(value, str):
            raise TypeError(f"{cls.__name__}.from_hex expects str, got {type(value).__name__}")
        try:
            raw = bytes.fromhex(value.replace("_", ""))
        except ValueError as e:
            raise ValueError(f"Invalid hex for {cls.__name__}: {value!r}") from e
        return cls(raw)

    def __bytes__(self) -> bytes:
        return self._raw

    def __len__(self) -> int:
        return self.SIZE

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return constant_time_eq(self._raw, other._raw)  # type: ignore[attr-defined]

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._raw))

    def __str__(self) -> str:
        # 2-byte groups, uppercase, "_" separated: 0505_0505_...
        return "_".join(self._raw[i : i + 2].hex().upper() for i in range(0, len(self._raw), 2))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"


class MrEnclave(IdentityValue):
    """
    MRENCLAVE: chained hash of the signed enclave binary and its page initialisation.
    """

    SIZE = SGX_HASH_SIZE


class MrSigner(IdentityValue):
    """
    MRSIGNER: hash of the public key the enclave was signed with.
    """

    SIZE = SGX_HASH_SIZE


class ConfigId(IdentityValue):
    """Enclave configuration identifier."""

    SIZE = SGX_CONFIGID_SIZE
