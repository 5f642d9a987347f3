# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_attestation

from typing import Type
from unittest.mock import MagicMock, patch

import copy
import pickle

import pytest

from coreason_attestation.identity import (
    SGX_CONFIGID_SIZE,
    SGX_HASH_SIZE,
    ConfigId,
    IdentityValue,
    MrEnclave,
    MrSigner,
    constant_time_eq,
)

IDENTITY_TYPES = [MrEnclave, MrSigner, ConfigId]


class TestConstruction:
    def test_sizes(self) -> None:
        assert MrEnclave.SIZE == SGX_HASH_SIZE == 32
        assert MrSigner.SIZE == SGX_HASH_SIZE
        assert ConfigId.SIZE == SGX_CONFIGID_SIZE == 64

    @pytest.mark.parametrize("identity_type", IDENTITY_TYPES)
    def test_default_is_all_zero(self, identity_type: Type[IdentityValue]) -> None:
        assert bytes(identity_type()) == bytes(identity_type.SIZE)

    def test_from_raw_mr_enclave(self) -> None:
        mr_enclave = MrEnclave(bytes([5] * 32))
        assert bytes(mr_enclave) == bytes([5] * 32)

    def test_from_raw_mr_signer(self) -> None:
        mr_signer = MrSigner(bytes([9] * 32))
        assert bytes(mr_signer) == bytes([9] * 32)

    @pytest.mark.parametrize("identity_type", IDENTITY_TYPES)
    def test_round_trip(self, identity_type: Type[IdentityValue]) -> None:
        raw = bytes(range(identity_type.SIZE))
        assert bytes(identity_type(raw)) == raw

    def test_accepts_bytearray(self) -> None:
        raw = bytearray(range(32))
        assert bytes(MrEnclave(raw)) == bytes(raw)

    @pytest.mark.parametrize("length", [0, 31, 33, 64])
    def test_wrong_length_rejected(self, length: int) -> None:
        with pytest.raises(ValueError) as excinfo:
            MrEnclave(bytes(length))
        assert "requires exactly 32 bytes" in str(excinfo.value)

    def test_int_rejected(self) -> None:
        with pytest.raises(TypeError):
            MrEnclave(32)  # type: ignore[arg-type]

    def test_immutable(self) -> None:
        value = MrSigner()
        with pytest.raises(AttributeError):
            value._raw = bytes(32)  # type: ignore[misc]

    def test_len(self) -> None:
        assert len(ConfigId()) == 64

    @pytest.mark.parametrize("identity_type", IDENTITY_TYPES)
    def test_copy(self, identity_type: Type[IdentityValue]) -> None:
        value = identity_type(bytes(range(identity_type.SIZE)))
        duplicate = copy.copy(value)
        assert type(duplicate) is identity_type
        assert duplicate == value

    @pytest.mark.parametrize("identity_type", IDENTITY_TYPES)
    def test_deepcopy(self, identity_type: Type[IdentityValue]) -> None:
        value = identity_type(bytes(range(identity_type.SIZE)))
        assert copy.deepcopy(value) == value

    @pytest.mark.parametrize("identity_type", IDENTITY_TYPES)
    def test_pickle_round_trip(self, identity_type: Type[IdentityValue]) -> None:
        value = identity_type(bytes(range(identity_type.SIZE)))
        restored = pickle.loads(pickle.dumps(value))
        assert type(restored) is identity_type
        assert bytes(restored) == bytes(value)


class TestDisplay:
    def test_hex_grouped_uppercase(self) -> None:
        value = MrEnclave(bytes([0xAB, 0xCD]) + bytes([0x0F] * 30))
        text = str(value)
        groups = text.split("_")
        assert len(groups) == 16
        assert groups[0] == "ABCD"
        assert all(group == "0F0F" for group in groups[1:])

    def test_default_display(self) -> None:
        assert str(MrSigner()) == "_".join(["0000"] * 16)

    def test_repr_names_type(self) -> None:
        assert repr(ConfigId()).startswith("ConfigId(0000_")

    def test_from_hex_round_trips_display(self) -> None:
        value = MrEnclave(bytes(range(32)))
        assert MrEnclave.from_hex(str(value)) == value

    def test_from_hex_plain(self) -> None:
        assert bytes(MrSigner.from_hex("ff" * 32)) == b"\xff" * 32

    def test_from_hex_invalid(self) -> None:
        with pytest.raises(ValueError) as excinfo:
            MrSigner.from_hex("zz" * 32)
        assert "Invalid hex" in str(excinfo.value)

    def test_from_hex_rejects_bytes(self) -> None:
        with pytest.raises(TypeError) as excinfo:
            MrSigner.from_hex(b"ff" * 32)  # type: ignore[arg-type]
        assert "expects str, got bytes" in str(excinfo.value)


class TestEquality:
    @pytest.mark.parametrize("identity_type", IDENTITY_TYPES)
    def test_reflexive(self, identity_type: Type[IdentityValue]) -> None:
        value = identity_type(bytes([7]) * identity_type.SIZE)
        assert value == value
        assert value == identity_type(bytes(value))

    @pytest.mark.parametrize("index", [0, 1, 15, 31])
    def test_single_byte_difference(self, index: int) -> None:
        raw = bytearray(32)
        other = bytearray(32)
        other[index] = 1
        assert MrEnclave(bytes(raw)) != MrEnclave(bytes(other))
        assert not (MrEnclave(bytes(raw)) == MrEnclave(bytes(other)))

    def test_different_kinds_never_equal(self) -> None:
        raw = bytes([3] * 32)
        assert MrEnclave(raw) != MrSigner(raw)

    def test_not_equal_to_raw_bytes(self) -> None:
        raw = bytes(32)
        assert MrEnclave(raw) != raw

    def test_hashable(self) -> None:
        raw = bytes([1] * 32)
        assert len({MrEnclave(raw), MrEnclave(raw), MrSigner(raw)}) == 2

    def test_equality_uses_constant_time_primitive(self) -> None:
        """
        Every comparison must go through hmac.compare_digest with the full byte strings.

        Timing is not measured here; the no-early-exit guarantee comes from compare_digest itself.
        """
        a = MrEnclave(bytes([1] * 32))
        b = MrEnclave(bytes([2] * 32))
        with patch("coreason_attestation.identity.hmac.compare_digest", return_value=False) as mock_cmp:
            assert (a == b) is False
        mock_cmp.assert_called_once_with(bytes(a), bytes(b))


class TestConstantTimeEq:
    def test_equal(self) -> None:
        assert constant_time_eq(b"\x00" * 64, b"\x00" * 64)

    def test_first_and_last_byte_mismatch(self) -> None:
        base = bytes(64)
        assert not constant_time_eq(base, b"\x01" + base[1:])
        assert not constant_time_eq(base, base[:-1] + b"\x01")

    def test_length_mismatch(self) -> None:
        assert not constant_time_eq(bytes(32), bytes(64))

    def test_delegates_to_compare_digest(self) -> None:
        with patch("coreason_attestation.identity.hmac.compare_digest") as mock_cmp:
            mock_cmp.return_value = True
            assert constant_time_eq(b"a", b"b") is True
        assert isinstance(mock_cmp, MagicMock)
        mock_cmp.assert_called_once_with(b"a", b"b")
