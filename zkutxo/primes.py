"""
소수 / 모듈러 산술 공급자
==========================

RSA 키 재료와 노트 비밀값 샘플링에 필요한 정수론 연산을 GMP(gmpy2)에 위임한다.
결과는 항상 파이썬 int 로 돌려준다 (py_ecc FR 은 mpz 를 받지 않는다).

gmpy2 에서 발생한 예외는 가공하지 않고 그대로 전파한다.
"""

import secrets

import gmpy2

from zkutxo.errors import PreconditionViolation


# Miller-Rabin 반복 횟수
PRIMALITY_REPS = 25


def random_prime(bits):
    """정확히 bits 비트인 임의의 소수를 반환한다.

    최상위 비트를 세운 난수에서 시작해 다음 소수를 찾고,
    비트 길이를 넘어가면 다시 샘플링한다.
    """
    if bits < 2:
        raise PreconditionViolation(f"소수 비트 길이는 2 이상이어야 합니다: {bits}")

    while True:
        candidate = gmpy2.mpz(secrets.randbits(bits) | (1 << (bits - 1)))
        if not gmpy2.is_prime(candidate, PRIMALITY_REPS):
            candidate = gmpy2.next_prime(candidate)
        if candidate.bit_length() == bits:
            return int(candidate)


def is_probably_prime(n, reps=PRIMALITY_REPS):
    return bool(gmpy2.is_prime(gmpy2.mpz(n), reps))


def mod_pow(base, exp, modulus):
    """base^exp mod modulus."""
    return int(gmpy2.powmod(gmpy2.mpz(base), gmpy2.mpz(exp), gmpy2.mpz(modulus)))


def gcd(a, b):
    return int(gmpy2.gcd(gmpy2.mpz(a), gmpy2.mpz(b)))


def mod_inverse(a, modulus):
    """a⁻¹ mod modulus. 역원이 없으면 gmpy2 가 ZeroDivisionError 를 던진다."""
    return int(gmpy2.invert(gmpy2.mpz(a), gmpy2.mpz(modulus)))
