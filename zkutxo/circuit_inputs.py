"""
외부 회로 입력 신호 생성
=========================

노트/누적자/키쌍 값을 외부 회로가 선언한 입력 이름에 맞춰 변환한다.
증인(witness) 계산 엔진은 큰 정수를 10진 문자열로 읽으므로
모든 값은 str(int) 로 직렬화한다. 파일로 쓰는 일은 호출자의 몫이다.

  회로                    입력 신호
  ───────────────────     ─────────────────────────────────────────────
  register_*              p, q
  pow_mod_*               base, exp, modulus
  ex_transfer_*           target_N, secret, exp
  spend_*                 message, messageHash, inv, nullifierHash,
                          root, pathElements, pathIndices, (relayer 필드)
  in_transfer_*           mint_*, spend_*, root, path*, (relayer 필드)
  primality_*             n, a, d, r  (Rabin-Miller)
"""

import secrets

from zkutxo.chunks import bigint_to_array, fits
from zkutxo.errors import PreconditionViolation
from zkutxo.params import RELAYER_DEFAULTS


# ─── 직렬화 헬퍼 ───

def serialize_int(val):
    """int / FR → str(int)"""
    return str(int(val))


def serialize_chunks(chunk_size, chunk_num, x):
    """큰 정수 → 10진 문자열 limb 리스트.

    회로 입력에서 상위 비트가 잘리면 증인이 틀어지므로 잘림을 허용하지 않는다.
    """
    if not fits(chunk_size, chunk_num, x):
        raise PreconditionViolation(
            f"{int(x).bit_length()} 비트 정수는 {chunk_size} 비트 × {chunk_num} 개에 들어가지 않습니다"
        )
    return [str(limb) for limb in bigint_to_array(chunk_size, chunk_num, x)]


def serialize_proof(proof):
    """MerkleProof → (pathElements, pathIndices)"""
    path_elements, path_indices = proof
    return (
        [serialize_int(e) for e in path_elements],
        [serialize_int(i) for i in path_indices],
    )


# ─── 회로별 입력 ───

def register_input(user):
    """소인수 p, q 로 N 을 재구성하는 등록 회로 입력."""
    n, k = user.chunk_size, user.chunk_num
    return {
        "p": serialize_chunks(n, k, user.rsa.p),
        "q": serialize_chunks(n, k, user.rsa.q),
    }


def pow_mod_input(base, rsa, chunk_size, chunk_num):
    """base^exp mod N 회로 입력."""
    return {
        "base": serialize_chunks(chunk_size, chunk_num, base),
        "exp": serialize_int(rsa.exp),
        "modulus": serialize_chunks(chunk_size, chunk_num, rsa.N),
    }


def ex_transfer_input(utxo):
    """외부 전송(발행) 회로 입력: 수신자 N 과 비밀값으로 암호문/커밋먼트를 재계산한다."""
    n, k = utxo.chunk_size, utxo.chunk_num
    return {
        "target_N": serialize_chunks(n, k, utxo.rsa.N),
        "secret": serialize_chunks(n, k, utxo.secret),
        "exp": serialize_int(utxo.rsa.exp),
    }


def spend_input(utxo, spender, nullifier):
    """소비 회로 입력.

    Args:
        utxo: 소비할 노트
        spender: 노트를 받은 User (개인 지수 d 제공)
        nullifier: spender.spend_utxo 가 반환한 널리파이어
    """
    n, k = spender.chunk_size, spender.chunk_num
    secret = spender.rsa.decrypt(utxo.ciphertext)
    path_elements, path_indices = serialize_proof(utxo.merkle_proof)
    data = {
        "message": serialize_chunks(n, k, secret),
        "messageHash": serialize_int(utxo.commitment),
        "inv": serialize_chunks(n, k, spender.rsa.inv),
        "nullifierHash": serialize_int(nullifier),
        "root": serialize_int(utxo.root),
        "pathElements": path_elements,
        "pathIndices": path_indices,
    }
    data.update({key: serialize_int(v) for key, v in RELAYER_DEFAULTS.items()})
    return data


def in_transfer_input(spent, nullifier, minted, spender):
    """내부 전송 회로 입력: spent 를 소비하면서 minted 를 발행한다."""
    n, k = spender.chunk_size, spender.chunk_num
    spend_data = spend_input(spent, spender, nullifier)
    data = {
        "mint_message": serialize_chunks(n, k, minted.secret),
        "mint_N": serialize_chunks(n, k, minted.rsa.N),
        "mint_exp": serialize_int(minted.rsa.exp),
        "spend_message": spend_data["message"],
        "spend_messageHash": spend_data["messageHash"],
        "spend_inv": spend_data["inv"],
        "spend_nullifierHash": spend_data["nullifierHash"],
        "root": spend_data["root"],
        "pathElements": spend_data["pathElements"],
        "pathIndices": spend_data["pathIndices"],
    }
    data.update({key: serialize_int(v) for key, v in RELAYER_DEFAULTS.items()})
    return data


# ─── Rabin-Miller ───

def rabin_miller_input(n, k, rng=None):
    """소수성 회로용 Rabin-Miller 입력 {n, a, d, r} 을 만든다.

    n - 1 = d · 2^r (d 홀수) 로 분해하고 밑 a 를 k 개 뽑는다.
      n ≤ 4      → a = 2
      n > 2^16   → 2 ≤ a ≤ 2^16
      그 외      → 2 ≤ a ≤ n - 2

    Raises:
        ValueError: n < 2
    """
    if n < 2:
        raise ValueError("n must be greater than or equal to 2")
    if rng is None:
        rng = secrets.SystemRandom()

    d = n - 1
    r = 0
    while d % 2 == 0:
        d //= 2
        r += 1

    a = []
    for _ in range(k):
        if n <= 4:
            a.append(2)
        elif n > 2 ** 16:
            a.append(rng.randint(2, 2 ** 16))
        else:
            a.append(rng.randint(2, n - 2))

    return {
        "n": serialize_int(n),
        "a": [serialize_int(x) for x in a],
        "d": serialize_int(d),
        "r": serialize_int(r),
    }
