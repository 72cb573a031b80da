"""
사용자 (노트 보유자)
=====================

RSA65537 키쌍 하나와 청크 설정을 가진 참여자.
발행/검사/소비를 zkutxo.utxo 의 함수에 위임하는 얇은 오케스트레이터이다.

사용 예시:
    >>> mt = MerkleTree.build(MT_ZERO, MT_DEPTH)
    >>> alice = User.register(1024, 64, 32)
    >>> bob = User.register(1024, 64, 32)
    >>> utxo = alice.mint_utxo(bob, mt)
    >>> bob.check_utxo(utxo, mt)   # True
    >>> bob.spend_utxo(utxo, mt)   # 널리파이어
"""

from zkutxo.primes import random_prime
from zkutxo.rsa import RSA65537
from zkutxo.utxo import UTXO, check, spend


class User:
    """노트 보유자.

    속성:
        rsa: 소유한 RSA65537 키쌍
        chunk_size, chunk_num: 회로와 공유하는 청크 설정
    """

    def __init__(self, rsa, chunk_size, chunk_num):
        self.rsa = rsa
        self.chunk_size = chunk_size
        self.chunk_num = chunk_num

    @classmethod
    def register(cls, bit_length, chunk_size, chunk_num):
        """보안 길이 bit_length 의 새 키쌍으로 계정을 만든다."""
        return cls(RSA65537.initialize(bit_length), chunk_size, chunk_num)

    def check_utxo(self, utxo, mt):
        return check(utxo, mt, self.rsa, self.chunk_size, self.chunk_num)

    def mint_utxo(self, user, mt):
        """user 앞으로 노트를 발행한다. 비밀값은 자신의 보안 길이로 뽑는다."""
        return UTXO.mint(
            user.rsa, mt, user.chunk_size, user.chunk_num,
            secret_bits=self.rsa.bit_length,
        )

    def spend_utxo(self, utxo, mt):
        """널리파이어 또는 SPEND_DENIED."""
        return spend(utxo, mt, self.rsa, self.chunk_size, self.chunk_num)

    def get_random_message(self):
        """N 과 같은 비트 폭의 임의 소수 평문 (m < N 이므로 암복호화 왕복이 보존된다)."""
        modulus, _ = self.rsa.public_key()
        while True:
            m = random_prime(modulus.bit_length())
            if m < modulus:
                return m
