"""
외부 회로 입력 신호 테스트

회로가 선언한 입력 이름과 배열 길이, 10진 문자열 직렬화를 확인한다.
"""

import random

import pytest

from zkutxo.chunks import array_to_bigint
from zkutxo.circuit_inputs import (
    register_input,
    pow_mod_input,
    ex_transfer_input,
    spend_input,
    in_transfer_input,
    rabin_miller_input,
    serialize_chunks,
    serialize_int,
    serialize_proof,
)
from zkutxo.errors import PreconditionViolation
from zkutxo.field import FR
from zkutxo.params import CHUNK_SIZE, CHUNK_NUM, CHUNK_NUM_1024, MT_DEPTH
from zkutxo.rsa import RSA65537


def _to_int(limbs, chunk_size=CHUNK_SIZE):
    return array_to_bigint(chunk_size, [int(x) for x in limbs])


# ─────────────────────────────────────────────────────────────────────
# Serialization
# ─────────────────────────────────────────────────────────────────────

class TestSerialization:

    def test_serialize_fr(self):
        assert serialize_int(FR(42)) == "42"

    def test_serialize_proof(self, small_mt):
        _, proof = small_mt.insert(3)
        elements, indices = serialize_proof(proof)
        assert elements == [str(int(e)) for e in proof.path_elements]
        assert indices == ["0", "0", "0", "0"]

    def test_serialize_chunks(self):
        assert serialize_chunks(64, 2, (1 << 64) + 5) == ["5", "1"]

    def test_serialize_chunks_rejects_truncation(self):
        with pytest.raises(PreconditionViolation):
            serialize_chunks(64, 2, 1 << 130)


# ─────────────────────────────────────────────────────────────────────
# Circuit inputs
# ─────────────────────────────────────────────────────────────────────

class TestRegisterInput:

    def test_factors(self, alice):
        data = register_input(alice)
        assert set(data) == {"p", "q"}
        assert len(data["p"]) == CHUNK_NUM
        assert _to_int(data["p"]) * _to_int(data["q"]) == alice.rsa.N


class TestPowModInput:

    def test_1024_modulus(self):
        rsa = RSA65537.initialize(512)
        data = pow_mod_input(12345, rsa, CHUNK_SIZE, CHUNK_NUM_1024)
        assert set(data) == {"base", "exp", "modulus"}
        assert len(data["modulus"]) == CHUNK_NUM_1024
        assert data["exp"] == "65537"
        assert _to_int(data["modulus"]) == rsa.N
        assert _to_int(data["base"]) == 12345


class TestTransferInputs:

    def test_ex_transfer(self, alice, bob, mt):
        utxo = alice.mint_utxo(bob, mt)
        data = ex_transfer_input(utxo)
        assert set(data) == {"target_N", "secret", "exp"}
        assert _to_int(data["target_N"]) == bob.rsa.N
        assert _to_int(data["secret"]) == utxo.secret

    def test_spend(self, alice, bob, mt):
        utxo = alice.mint_utxo(bob, mt)
        nullifier = bob.spend_utxo(utxo, mt)
        data = spend_input(utxo, bob, nullifier)
        assert set(data) == {
            "message", "messageHash", "inv", "nullifierHash", "root",
            "pathElements", "pathIndices", "receipt", "relayer", "fee", "refund",
        }
        assert _to_int(data["message"]) == utxo.secret
        assert _to_int(data["inv"]) == bob.rsa.inv
        assert data["messageHash"] == str(int(utxo.commitment))
        assert data["nullifierHash"] == str(int(nullifier))
        assert data["root"] == str(int(utxo.root))
        assert len(data["pathElements"]) == MT_DEPTH
        assert len(data["pathIndices"]) == MT_DEPTH
        assert data["fee"] == "0"

    def test_in_transfer(self, alice, bob, charles, mt):
        ex_utxo = alice.mint_utxo(bob, mt)
        nullifier = bob.spend_utxo(ex_utxo, mt)
        in_utxo = bob.mint_utxo(charles, mt)
        data = in_transfer_input(ex_utxo, nullifier, in_utxo, bob)
        assert _to_int(data["mint_message"]) == in_utxo.secret
        assert _to_int(data["mint_N"]) == charles.rsa.N
        assert data["mint_exp"] == "65537"
        assert _to_int(data["spend_message"]) == ex_utxo.secret
        assert data["spend_nullifierHash"] == str(int(nullifier))
        assert data["root"] == str(int(ex_utxo.root))
        assert data["relayer"] == "0"


# ─────────────────────────────────────────────────────────────────────
# Rabin-Miller
# ─────────────────────────────────────────────────────────────────────

class TestRabinMillerInput:

    def test_decomposition(self):
        data = rabin_miller_input(97, 5, rng=random.Random(1))
        # 96 = 3 · 2^5
        assert data["d"] == "3"
        assert data["r"] == "5"
        assert data["n"] == "97"
        assert len(data["a"]) == 5
        assert all(2 <= int(a) <= 95 for a in data["a"])

    def test_values_are_decimal_strings(self):
        data = rabin_miller_input(97, 3, rng=random.Random(3))
        assert all(isinstance(v, str) for v in (data["n"], data["d"], data["r"]))
        assert all(isinstance(a, str) for a in data["a"])

    def test_small_n_uses_base_two(self):
        assert rabin_miller_input(3, 3)["a"] == ["2", "2", "2"]

    def test_large_n_base_range(self):
        n = (1 << 64) - 59
        data = rabin_miller_input(n, 10, rng=random.Random(2))
        assert all(2 <= int(a) <= 2 ** 16 for a in data["a"])
        assert int(data["d"]) * 2 ** int(data["r"]) == n - 1
        assert int(data["d"]) % 2 == 1

    def test_rejects_small(self):
        with pytest.raises(ValueError):
            rabin_miller_input(1, 1)
