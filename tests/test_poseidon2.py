"""
Poseidon2 (bn254, t=3) 테스트

Covers:
- 알려진 출력값 (known answer)
- 결정론성, 입력 민감도
- 라운드 상수 테이블 형태 (partial round 는 [c, 0, 0])
- 지원하지 않는 파라미터 거부
"""

import pytest

from zkutxo.field import FR, CURVE_ORDER
from zkutxo.params import POSEIDON2_ROUNDS_F, POSEIDON2_ROUNDS_P
from zkutxo.poseidon2 import (
    Poseidon2,
    Poseidon2Params,
    MAT_DIAG3_M_1,
    MAT_INTERNAL3,
    round_constants,
    permute,
    hash3,
)


# ─────────────────────────────────────────────────────────────────────
# Round constants
# ─────────────────────────────────────────────────────────────────────

class TestRoundConstants:
    """Grain LFSR 로 생성한 라운드 상수 테이블."""

    def test_table_length(self):
        assert len(round_constants()) == POSEIDON2_ROUNDS_F + POSEIDON2_ROUNDS_P

    def test_full_rounds_have_three_constants(self):
        rc = round_constants()
        half = POSEIDON2_ROUNDS_F // 2
        for r in list(range(half)) + list(range(half + POSEIDON2_ROUNDS_P, len(rc))):
            assert len(rc[r]) == 3
            assert all(c != FR(0) for c in rc[r])

    def test_partial_rounds_are_padded_with_zero(self):
        rc = round_constants()
        half = POSEIDON2_ROUNDS_F // 2
        for r in range(half, half + POSEIDON2_ROUNDS_P):
            assert rc[r][1] == FR(0)
            assert rc[r][2] == FR(0)

    def test_constants_are_cached(self):
        assert round_constants() is round_constants()

    def test_constants_below_modulus(self):
        for row in round_constants():
            for c in row:
                assert 0 <= int(c) < CURVE_ORDER


class TestMatrices:

    def test_internal_matrix_matches_diagonal(self):
        """M_I = 1 + diag(MAT_DIAG3_M_1)."""
        for i in range(3):
            for j in range(3):
                expected = FR(1) + (MAT_DIAG3_M_1[i] if i == j else FR(0))
                assert MAT_INTERNAL3[i][j] == expected

    def test_matmul_internal_equals_full_matrix(self):
        p = Poseidon2(Poseidon2Params.bn254())
        state = [FR(3), FR(5), FR(7)]
        out = p.matmul_internal(state)
        for i in range(3):
            assert out[i] == sum((MAT_INTERNAL3[i][j] * state[j] for j in range(3)), FR(0))

    def test_matmul_external_is_circulant(self):
        p = Poseidon2(Poseidon2Params.bn254())
        out = p.matmul_external([FR(1), FR(2), FR(3)])
        # circ(2,1,1) · [1,2,3] = [7, 8, 9]
        assert out == [FR(7), FR(8), FR(9)]


# ─────────────────────────────────────────────────────────────────────
# Permutation
# ─────────────────────────────────────────────────────────────────────

class TestPermutation:

    def test_known_answer(self):
        """참조 구현의 테스트 벡터: permute([0, 1, 2])[0]."""
        out = permute([0, 1, 2])
        assert int(out[0]) == 0x0bb61d24daca55eebcb1929a82650f328134334da98ea4f847f760054f4a3033

    def test_output_width(self):
        assert len(permute([1, 1, 1])) == 3

    def test_deterministic(self):
        assert permute([1, 1, 1]) == permute([1, 1, 1])

    def test_accepts_int_and_fr(self):
        assert permute([FR(4), FR(5), FR(6)]) == permute([4, 5, 6])

    def test_input_sensitivity(self):
        assert hash3(1, 1, 1) != hash3(2, 1, 1)
        assert hash3(1, 2, 1) != hash3(2, 1, 1)

    def test_hash3_is_first_element(self):
        assert hash3(7, 8, 9) == permute([7, 8, 9])[0]

    def test_inputs_reduced_mod_field(self):
        assert hash3(CURVE_ORDER + 5, 1, 1) == hash3(5, 1, 1)

    def test_wrong_input_length(self):
        with pytest.raises(ValueError):
            permute([1, 2])


class TestParams:

    def test_unsupported_width(self):
        with pytest.raises(ValueError):
            Poseidon2Params(4, 5, 8, 56, MAT_DIAG3_M_1, round_constants())

    def test_odd_full_rounds(self):
        with pytest.raises(ValueError):
            Poseidon2Params(3, 5, 7, 56, MAT_DIAG3_M_1, round_constants())

    def test_round_count_mismatch(self):
        with pytest.raises(ValueError):
            Poseidon2Params(3, 5, 8, 57, MAT_DIAG3_M_1, round_constants())

    def test_bn254_instance(self):
        params = Poseidon2Params.bn254()
        assert params.t == 3
        assert params.d == 5
        assert params.rounds_f_beginning == 4
        assert params.rounds_f_end == 4
        assert params.rounds_p == 56
        assert params.rounds == 64
