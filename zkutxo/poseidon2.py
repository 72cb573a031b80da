"""
Poseidon2 순열 해시 (bn254, t=3)
=================================

커밋먼트, 널리파이어, 머클 노드에 쓰이는 유일한 암호 프리미티브이다.
외부 회로가 같은 순열을 다시 계산하므로 출력이 비트 단위로 일치해야 한다.

**순열 구조** (Horizen Labs Poseidon2):

  ┌──────────────────────────────────────────────┐
  │  외부 선형층 M_E                               │
  ├──────────────────────────────────────────────┤
  │  Full round × 4:  상수 덧셈 → x^5 (전체) → M_E │
  ├──────────────────────────────────────────────┤
  │  Partial round × 56: s0 += c → s0^5 → M_I      │
  ├──────────────────────────────────────────────┤
  │  Full round × 4:  상수 덧셈 → x^5 (전체) → M_E │
  └──────────────────────────────────────────────┘

  M_E = circ(2, 1, 1)
  M_I = [[2,1,1],[1,2,1],[1,1,3]] = 1 + diag(1, 1, 2)

**라운드 상수**:
  참조 구현의 sage 스크립트와 같은 Grain LFSR 절차로 결정론적으로 생성한다.
  (field=1, sbox=0, n=254, t=3, R_F=8, R_P=56)
  Full round 는 t개, partial round 는 1개의 상수를 쓰며,
  partial round 상수는 [c, 0, 0] 형태로 저장한다.

사용 예시:
    >>> from zkutxo.poseidon2 import hash3, permute
    >>> permute([0, 1, 2])[0]
    >>> hash3(513, 1, 1)
"""

from zkutxo.field import FR, CURVE_ORDER, FIELD_BITS
from zkutxo.params import (
    POSEIDON2_T,
    POSEIDON2_D,
    POSEIDON2_ROUNDS_F,
    POSEIDON2_ROUNDS_P,
)


# ─────────────────────────────────────────────────────────────────────
# Grain LFSR 기반 라운드 상수 생성
# ─────────────────────────────────────────────────────────────────────

def _to_bits(value, width):
    """정수를 MSB 우선 width 비트 리스트로 변환한다."""
    return [int(b) for b in bin(value)[2:].zfill(width)]


def grain_bits(field, sbox, n, t, rounds_f, rounds_p):
    """Grain LFSR 비트 스트림 생성기.

    80비트 초기 상태 = field(2) | sbox(4) | n(12) | t(12) | R_F(10) | R_P(10) | 1×30.
    160비트를 버린 뒤, 자기축소(self-shrinking) 방식으로 비트 쌍 (b1, b2) 중
    b1 = 1 인 경우의 b2 만 출력한다.
    """
    state = (
        _to_bits(field, 2)
        + _to_bits(sbox, 4)
        + _to_bits(n, 12)
        + _to_bits(t, 12)
        + _to_bits(rounds_f, 10)
        + _to_bits(rounds_p, 10)
        + [1] * 30
    )

    def step():
        bit = state[62] ^ state[51] ^ state[38] ^ state[23] ^ state[13] ^ state[0]
        state.pop(0)
        state.append(bit)
        return bit

    for _ in range(160):
        step()

    while True:
        control = step()
        while control == 0:
            step()
            control = step()
        yield step()


def generate_round_constants(t=POSEIDON2_T, rounds_f=POSEIDON2_ROUNDS_F,
                             rounds_p=POSEIDON2_ROUNDS_P,
                             modulus=CURVE_ORDER, n=FIELD_BITS):
    """라운드별 상수 테이블 [[c0, c1, c2], ...] 을 생성한다.

    Poseidon2 는 R_F·t + R_P 개의 필드 원소만 뽑는다.
    n 비트를 모아 modulus 미만이 될 때까지 거절 샘플링한다.

    Returns:
        list[list[FR]]: 길이 R_F + R_P, 각 원소 길이 t
    """
    bits = grain_bits(1, 0, n, t, rounds_f, rounds_p)

    def next_element():
        while True:
            value = 0
            for _ in range(n):
                value = (value << 1) | next(bits)
            if value < modulus:
                return FR(value)

    half = rounds_f // 2
    table = []
    for r in range(rounds_f + rounds_p):
        if half <= r < half + rounds_p:
            table.append([next_element()] + [FR(0)] * (t - 1))
        else:
            table.append([next_element() for _ in range(t)])
    return table


# ─────────────────────────────────────────────────────────────────────
# 파라미터 / 순열
# ─────────────────────────────────────────────────────────────────────

# M_I - 1 의 대각 성분
MAT_DIAG3_M_1 = [FR(1), FR(1), FR(2)]

# 전체 내부 행렬 (문서화 및 테스트용)
MAT_INTERNAL3 = [
    [FR(2), FR(1), FR(1)],
    [FR(1), FR(2), FR(1)],
    [FR(1), FR(1), FR(3)],
]

_RC3 = None


def round_constants():
    """모듈 수준에서 한 번만 생성해 캐시한 bn254 t=3 라운드 상수."""
    global _RC3
    if _RC3 is None:
        _RC3 = generate_round_constants()
    return _RC3


class Poseidon2Params:
    """Poseidon2 인스턴스 파라미터.

    속성:
        t: 상태 너비
        d: S-box 지수
        rounds_f_beginning, rounds_f_end: 앞/뒤 full round 수 (R_F / 2)
        rounds_p: partial round 수
        rounds: 전체 라운드 수
        mat_internal_diag_m_1: 내부 행렬 대각 - 1
        round_constants: 라운드 상수 테이블
    """

    def __init__(self, t, d, rounds_f, rounds_p, mat_internal_diag_m_1, round_constants):
        if t != 3:
            raise ValueError(f"지원하지 않는 상태 너비입니다: t={t}")
        if rounds_f % 2 != 0:
            raise ValueError(f"full round 수는 짝수여야 합니다: {rounds_f}")
        if len(round_constants) != rounds_f + rounds_p:
            raise ValueError(
                f"라운드 상수 개수 {len(round_constants)}가 "
                f"라운드 수 {rounds_f + rounds_p}와 다릅니다"
            )
        if len(mat_internal_diag_m_1) != t:
            raise ValueError("내부 행렬 대각 길이가 t와 다릅니다")

        r = rounds_f // 2
        self.t = t
        self.d = d
        self.rounds_f_beginning = r
        self.rounds_p = rounds_p
        self.rounds_f_end = r
        self.rounds = rounds_f + rounds_p
        self.mat_internal_diag_m_1 = mat_internal_diag_m_1
        self.round_constants = round_constants

    @classmethod
    def bn254(cls):
        """회로가 사용하는 bn254 t=3 인스턴스."""
        return cls(
            POSEIDON2_T,
            POSEIDON2_D,
            POSEIDON2_ROUNDS_F,
            POSEIDON2_ROUNDS_P,
            MAT_DIAG3_M_1,
            round_constants(),
        )


class Poseidon2:
    """Poseidon2 순열.

    예시:
        >>> p = Poseidon2(Poseidon2Params.bn254())
        >>> p.permute([FR(1), FR(1), FR(1)])
    """

    def __init__(self, params):
        self.params = params

    def sbox(self, x):
        return x ** self.params.d

    def matmul_external(self, state):
        # circ(2, 1, 1): s_i + (s0 + s1 + s2)
        total = state[0] + state[1] + state[2]
        return [s + total for s in state]

    def matmul_internal(self, state):
        total = state[0] + state[1] + state[2]
        return [
            s * diag + total
            for s, diag in zip(state, self.params.mat_internal_diag_m_1)
        ]

    def add_rc(self, state, rc):
        return [s + c for s, c in zip(state, rc)]

    def permute(self, inputs):
        """입력 t개를 받아 순열 결과 t개를 반환한다.

        Args:
            inputs: 정수 또는 FR 의 시퀀스 (길이 t)

        Returns:
            list[FR]: 순열 출력
        """
        p = self.params
        if len(inputs) != p.t:
            raise ValueError(f"입력 길이 {len(inputs)}가 상태 너비 {p.t}와 다릅니다")

        state = [FR(int(x)) for x in inputs]
        rc = p.round_constants

        state = self.matmul_external(state)

        for r in range(p.rounds_f_beginning):
            state = self.add_rc(state, rc[r])
            state = [self.sbox(s) for s in state]
            state = self.matmul_external(state)

        p_end = p.rounds_f_beginning + p.rounds_p
        for r in range(p.rounds_f_beginning, p_end):
            state[0] = self.sbox(state[0] + rc[r][0])
            state = self.matmul_internal(state)

        for r in range(p_end, p.rounds):
            state = self.add_rc(state, rc[r])
            state = [self.sbox(s) for s in state]
            state = self.matmul_external(state)

        return state


# ─────────────────────────────────────────────────────────────────────
# 모듈 수준 헬퍼
# ─────────────────────────────────────────────────────────────────────

_DEFAULT = None


def _default():
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = Poseidon2(Poseidon2Params.bn254())
    return _DEFAULT


def permute(inputs):
    """bn254 t=3 Poseidon2 순열 (Digest 전체)."""
    return _default().permute(inputs)


def hash3(a, b, c):
    """표준 단일 출력 해시: permute([a, b, c])[0]."""
    return permute([a, b, c])[0]
