"""
유한체(Finite Field) FR
========================

bn128(BN254) 타원곡선의 스칼라 필드. 외부 회로 시스템(circom)이
연산하는 필드와 같으므로, 커밋먼트/널리파이어/머클 노드는 모두
이 필드의 원소여야 한다.

  - 위수(order) r ≈ 2^254, 소수체(prime field)
  - 비트 길이 254 → Poseidon2 상수 생성(Grain LFSR)의 n 파라미터

사용 예시:
    >>> from zkutxo.field import FR
    >>> FR(3) * FR(7)     # FR(21)
    >>> int(FR(-1)) == CURVE_ORDER - 1
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (필드 크기)
CURVE_ORDER = bn128.curve_order

# 필드 원소 하나를 표현하는 데 필요한 비트 수
FIELD_BITS = CURVE_ORDER.bit_length()


def to_fr(value):
    """정수/FR/gmpy2 정수를 FR 로 변환한다.

    py_ecc 의 FQ 는 파이썬 int 만 받으므로 mpz 는 먼저 int 로 바꾼다.
    """
    if isinstance(value, FR):
        return value
    return FR(int(value))
