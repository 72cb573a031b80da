"""
사용자(User) 오케스트레이션 테스트
"""

from zkutxo.params import CHUNK_SIZE, CHUNK_NUM, SECURITY_BIT
from zkutxo.rsa import RSA65537
from zkutxo.user import User


class TestRegister:

    def test_register_owns_fixed_exponent_key(self, alice):
        assert isinstance(alice.rsa, RSA65537)
        assert alice.rsa.exp == 65537
        assert alice.rsa.bit_length == SECURITY_BIT
        assert alice.chunk_size == CHUNK_SIZE
        assert alice.chunk_num == CHUNK_NUM

    def test_users_have_distinct_keys(self, alice, bob):
        assert alice.rsa.N != bob.rsa.N

    def test_small_user_round_trip(self, small_mt):
        sender = User.register(256, 64, 8)
        receiver = User.register(256, 64, 8)
        utxo = sender.mint_utxo(receiver, small_mt)
        assert receiver.check_utxo(utxo, small_mt)
        assert not sender.check_utxo(utxo, small_mt)


class TestRandomMessage:

    def test_below_modulus(self, alice):
        m = alice.get_random_message()
        assert m < alice.rsa.N
        assert m.bit_length() == alice.rsa.N.bit_length()

    def test_round_trip(self):
        user = User.register(128, 64, 16)
        for _ in range(20):
            m = user.get_random_message()
            assert m < user.rsa.N
            assert user.rsa.decrypt(user.rsa.encrypt(m)) == m
