"""
노트(UTXO) 생명주기: 발행 / 검사 / 소비
=========================================

**발행 (mint)**:
  1. 비밀값 s ← 발신자 보안 길이의 새 임의 소수
  2. s 를 청크로 분해, 커밋먼트 cm = H(s[0], 1, 1)
  3. cm 을 머클 누적자에 삽입 → (root, proof)
  4. 수신자 공개키로 암호문 c = s^e mod N

**검사 (check)**:
  보유자 개인 지수 d 로 c 를 복호화해 얻은 s' 의 커밋먼트가 cm 과 같고,
  (cm, root, proof) 가 누적자 멤버십을 통과해야 한다.

**소비 (spend)**:
  검사를 통과하면 널리파이어 nf = H(d[0], s'[0], 1) 을 반환한다.
  실패하면 예외 대신 SPEND_DENIED 를 반환한다.
  이미 본 널리파이어인지 확인하는 것은 호출자(원장)의 몫이다.

주의:
  커밋먼트와 널리파이어는 청크의 최하위 limb 만 해시한다.
  회로가 같은 값을 다시 계산하므로 이 잘림은 그대로 유지해야 한다.

사용 예시:
    >>> utxo = UTXO.mint(bob.rsa, mt, 64, 32, secret_bits=1024)
    >>> check(utxo, mt, bob.rsa, 64, 32)   # True
    >>> spend(utxo, mt, bob.rsa, 64, 32)   # FR(nullifier)
"""

import logging

from zkutxo.chunks import ChunkedInteger
from zkutxo.errors import PreconditionViolation
from zkutxo.poseidon2 import hash3
from zkutxo.primes import random_prime

logger = logging.getLogger(__name__)


class SpendDenied:
    """검증 실패로 소비가 거부되었음을 나타내는 값 (거짓으로 평가된다)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "SPEND_DENIED"


SPEND_DENIED = SpendDenied()


def secret_commitment(secret, chunk_size, chunk_num):
    """비밀값의 커밋먼트 H(chunks(secret)[0], 1, 1)."""
    secret_chunks = ChunkedInteger.from_int(secret, chunk_size, chunk_num)
    return hash3(secret_chunks[0], 1, 1)


def nullifier_hash(inv, secret, chunk_size, chunk_num):
    """널리파이어 H(chunks(d)[0], chunks(secret)[0], 1)."""
    inv_chunks = ChunkedInteger.from_int(inv, chunk_size, chunk_num)
    secret_chunks = ChunkedInteger.from_int(secret, chunk_size, chunk_num)
    return hash3(inv_chunks[0], secret_chunks[0], 1)


class UTXO:
    """발행된 노트. 생성 후 변경하지 않는다.

    속성:
        rsa: 수신자 키쌍 (공개키로 암호화에 사용)
        secret: 비밀값 (발행자와, 복호화 후의 수신자만 안다)
        commitment: 커밋먼트 (누적자의 잎)
        ciphertext: 수신자 공개키로 암호화한 비밀값
        root: 삽입 직후의 루트
        merkle_proof: 삽입 당시의 MerkleProof
        chunk_size, chunk_num: 청크 설정
    """

    def __init__(self, rsa, secret, root, merkle_proof, chunk_size, chunk_num, commitment):
        self.rsa = rsa
        self.secret = secret
        self.root = root
        self.merkle_proof = merkle_proof
        self.chunk_size = chunk_size
        self.chunk_num = chunk_num
        self.commitment = commitment
        self.ciphertext = rsa.encrypt(secret)

    @classmethod
    def mint(cls, rsa, mt, chunk_size, chunk_num, secret_bits=None):
        """수신자 키쌍 rsa 앞으로 노트를 발행하고 누적자 mt 에 커밋먼트를 넣는다.

        Args:
            rsa: 수신자 키쌍
            mt: MerkleTree
            chunk_size, chunk_num: 청크 설정
            secret_bits: 비밀 소수의 비트 길이 (발신자 보안 길이).
                         None 이면 수신자의 bit_length 를 쓴다.

        Raises:
            PreconditionViolation: 비밀값이 수신자 모듈러스 N 이상일 때.
                                   이 경우 누적자에는 아무것도 삽입하지 않는다.
        """
        if secret_bits is None:
            secret_bits = rsa.bit_length
        secret = random_prime(secret_bits)
        modulus, _ = rsa.public_key()
        if secret >= modulus:
            raise PreconditionViolation(
                f"비밀값({secret_bits} 비트)이 수신자 모듈러스 N 이상이라 복호화할 수 없습니다"
            )
        commitment = secret_commitment(secret, chunk_size, chunk_num)
        root, merkle_proof = mt.insert(commitment)
        return cls(rsa, secret, root, merkle_proof, chunk_size, chunk_num, commitment)

    def __repr__(self):
        return f"UTXO(commitment={int(self.commitment)}, root={int(self.root)})"


def check(utxo, mt, holder_rsa, chunk_size, chunk_num):
    """holder_rsa 의 개인키로 노트가 유효하고 자기 소유인지 확인한다."""
    m = holder_rsa.decrypt(utxo.ciphertext)
    if secret_commitment(m, chunk_size, chunk_num) != utxo.commitment:
        logger.debug("commitment mismatch for %r", utxo)
        return False

    if not mt.check_membership(utxo.commitment, utxo.root, utxo.merkle_proof):
        logger.info("does not exist in MT: %r", utxo)
        return False
    return True


def spend(utxo, mt, holder_rsa, chunk_size, chunk_num):
    """검사를 통과하면 널리파이어(FR)를, 아니면 SPEND_DENIED 를 반환한다."""
    if not check(utxo, mt, holder_rsa, chunk_size, chunk_num):
        return SPEND_DENIED
    secret = holder_rsa.decrypt(utxo.ciphertext)
    return nullifier_hash(holder_rsa.inv, secret, chunk_size, chunk_num)
