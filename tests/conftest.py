import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from zkutxo.merkle import MerkleTree
from zkutxo.params import CHUNK_SIZE, CHUNK_NUM, SECURITY_BIT, MT_ZERO, MT_DEPTH
from zkutxo.user import User


# ── 테스트 상수 ──
SMALL_DEPTH = 4


@pytest.fixture(scope="session")
def alice():
    return User.register(SECURITY_BIT, CHUNK_SIZE, CHUNK_NUM)


@pytest.fixture(scope="session")
def bob():
    return User.register(SECURITY_BIT, CHUNK_SIZE, CHUNK_NUM)


@pytest.fixture(scope="session")
def charles():
    return User.register(SECURITY_BIT, CHUNK_SIZE, CHUNK_NUM)


@pytest.fixture
def mt():
    """회로와 같은 설정의 빈 누적자 (zero=513, depth=20)."""
    return MerkleTree.build(MT_ZERO, MT_DEPTH)


@pytest.fixture
def small_mt():
    return MerkleTree.build(MT_ZERO, SMALL_DEPTH)
