"""
RSA 트랩도어 키쌍
==================

노트 비밀값을 수신자 공개키로 암호화하는 트랩도어 순열.

  N    = p · q
  φ(N) = (p - 1)(q - 1)
  d    = e⁻¹ mod φ(N)       (e·d ≡ 1 mod φ(N))

  encrypt(m) = m^e mod N
  decrypt(c) = c^d mod N

패딩은 적용하지 않는다. 노트마다 새로 뽑는 고엔트로피 소수 비밀값이
보안의 근거이다.

**두 가지 변형**:
  - RSA65537:     고정 공개 지수 e = 65537
  - RSAArbitrary: exp_bit 비트의 임의 소수 e

사용 예시:
    >>> rsa = RSA65537.initialize(1024)
    >>> rsa.decrypt(rsa.encrypt(42)) == 42
    True
"""

import logging

from zkutxo.errors import PreconditionViolation
from zkutxo.params import RSA_EXP, MAX_KEYGEN_ATTEMPTS
from zkutxo.primes import random_prime, mod_pow, mod_inverse, gcd

logger = logging.getLogger(__name__)


class RSAKeypair:
    """RSA 키쌍 공통 구현.

    속성:
        bit_length: 보안 길이 (p, q 의 비트 수)
        p, q: 서로 다른 소인수
        exp: 공개 지수 e
        N: 모듈러스
        phi_n: 오일러 피 함수 값
        inv: 개인 지수 d
    """

    def __init__(self, p, q, bit_length, exp):
        if p == q:
            raise PreconditionViolation("p 와 q 는 서로 달라야 합니다")
        self.bit_length = bit_length
        self.p = p
        self.q = q
        self.exp = exp
        self.N = p * q
        self.phi_n = (p - 1) * (q - 1)
        if gcd(self.exp, self.phi_n) != 1:
            raise PreconditionViolation(
                f"공개 지수 {self.exp} 가 φ(N) 과 서로소가 아닙니다"
            )
        self.inv = mod_inverse(self.exp, self.phi_n)

    def encrypt(self, m):
        """평문 m 의 암호문 m^e mod N."""
        return mod_pow(m, self.exp, self.N)

    def decrypt(self, c):
        """암호문 c 의 평문 c^d mod N."""
        return mod_pow(c, self.inv, self.N)

    def public_key(self):
        return self.N, self.exp

    @staticmethod
    def _sample_factors(bit_length):
        p = random_prime(bit_length)
        q = random_prime(bit_length)
        while q == p:
            q = random_prime(bit_length)
        return p, q

    def __repr__(self):
        return f"{type(self).__name__}(bit_length={self.bit_length}, exp={self.exp})"


class RSA65537(RSAKeypair):
    """공개 지수 e = 65537 로 고정된 RSA 키쌍."""

    def __init__(self, p, q, bit_length):
        super().__init__(p, q, bit_length, RSA_EXP)

    @classmethod
    def initialize(cls, bit_length):
        """임의의 p, q 로 키쌍을 생성한다.

        gcd(65537, φ(N)) != 1 이면 p, q 를 다시 뽑는다.
        MAX_KEYGEN_ATTEMPTS 회를 넘기면 마지막 예외를 그대로 던진다.
        """
        for attempt in range(1, MAX_KEYGEN_ATTEMPTS + 1):
            p, q = cls._sample_factors(bit_length)
            try:
                return cls(p, q, bit_length)
            except PreconditionViolation:
                if attempt == MAX_KEYGEN_ATTEMPTS:
                    raise
                logger.debug("RSA65537 키 생성 재시도 (%d회차)", attempt)


class RSAArbitrary(RSAKeypair):
    """공개 지수 e 를 exp_bit 비트 임의 소수로 뽑는 RSA 키쌍."""

    @classmethod
    def initialize(cls, bit_length, exp_bit):
        for attempt in range(1, MAX_KEYGEN_ATTEMPTS + 1):
            p, q = cls._sample_factors(bit_length)
            exp = random_prime(exp_bit)
            try:
                return cls(p, q, bit_length, exp)
            except PreconditionViolation:
                if attempt == MAX_KEYGEN_ATTEMPTS:
                    raise
                logger.debug("RSAArbitrary 키 생성 재시도 (%d회차)", attempt)
