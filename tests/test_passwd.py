import pytest

from lobbybbs.passwd import (
    SALT_CHARSET,
    CryptoMech,
    check_password,
    crypt_password,
    make_salt,
)


@pytest.mark.parametrize(
    "mechanism, prefix, size",
    [(CryptoMech.MD5, "$1$", 8), (CryptoMech.SHA256, "$5$", 16), (CryptoMech.SHA512, "$6$", 16)],
)
def test_modular_salt_shape(mechanism, prefix, size):
    salt = make_salt(mechanism)
    assert salt.startswith(prefix)
    assert salt.endswith("$")
    body = salt[len(prefix):-1]
    assert len(body) == size
    assert set(body) <= set(SALT_CHARSET)


def test_des_salt_is_two_chars():
    salt = make_salt(CryptoMech.DES)
    assert len(salt) == 2
    assert set(salt) <= set(SALT_CHARSET)


def test_default_mechanism_is_sha256():
    assert make_salt().startswith("$5$")
    assert crypt_password("abcdef").startswith("$5$")


@pytest.mark.parametrize("mechanism", list(CryptoMech))
def test_round_trip(mechanism):
    password = "password"
    crypted = crypt_password(password, mechanism)
    assert check_password(password, crypted) is True
    assert check_password("secret", crypted) is False


def test_sha256_has_no_rounds_field():
    crypted = crypt_password("abcdef", CryptoMech.SHA256)
    assert "rounds=" not in crypted
    assert len(crypted.split("$")) == 4


def test_salts_differ():
    password = "password"
    hashes = [crypt_password(password) for _ in range(5)]
    assert len(set(hashes)) == 5
    assert all(check_password(password, h) for h in hashes)


@pytest.mark.parametrize("crypted", ["", "$5$abcdefgh$", "$9$salt$digest", "$"])
def test_malformed_hashes_fail(crypted):
    assert check_password("abcdef", crypted) is False