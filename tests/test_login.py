import pytest

from lobbybbs.login import (
    LoginError,
    check_new_password,
    online_summary,
    validate_new_name,
    welcome_back,
)
from lobbybbs.online import WhoListEntry
from lobbybbs.user import NameList, User, UserFlag


def _nobody(name):
    return False


def test_valid_name_is_returned():
    assert validate_new_name("Alice", _nobody) == "Alice"


@pytest.mark.parametrize("name", ["New", "Sysop", "Guest"])
def test_reserved_names_refused(name):
    with pytest.raises(LoginError, match=name):
        validate_new_name(name, _nobody)


def test_short_and_taken_names_refused():
    with pytest.raises(LoginError, match="too short"):
        validate_new_name("A", _nobody)
    with pytest.raises(LoginError, match="already is in use"):
        validate_new_name("Bob", lambda n: True)


def test_password_checks():
    password = "password"
    assert check_new_password("Alice", password, password) == password
    with pytest.raises(LoginError, match="too short"):
        check_new_password("Alice", "abc", "abc")
    with pytest.raises(LoginError, match="not good enough"):
        check_new_password("Alicia", "ALICIA", "ALICIA")
    with pytest.raises(LoginError, match="didn't match"):
        check_new_password("Alice", password, "secret")


def test_alone_online():
    usr = User(name="Alice")
    msg = online_summary(usr, [WhoListEntry("Alice")])
    assert msg == "<green>You are the one and only user online right now ...\n"


def test_one_other_user():
    usr = User(name="Alice")
    msg = online_summary(usr, [WhoListEntry("Alice"), WhoListEntry("Bob")])
    assert msg == "<green>There is one other user online\n"


def test_one_friend_online():
    usr = User(name="Alice", friends=NameList(["Bob"]))
    msg = online_summary(usr, [WhoListEntry("Alice"), WhoListEntry("Bob")])
    assert msg == "<green>There is one friend online\n"


def test_hidden_enemy_not_counted():
    usr = User(name="Alice", enemies=NameList(["Bob"]), flags=UserFlag.HIDE_ENEMIES)
    msg = online_summary(usr, [WhoListEntry("Alice"), WhoListEntry("Bob")])
    assert msg == "<green>You are the one and only user online right now ...\n"


def test_empty_who_list():
    assert online_summary(User(name="Alice"), []) == ""


def test_welcome_messages():
    usr = User(name="Alice", logins=1)
    assert welcome_back(usr) == "\n<green>Hello, Alice!\n"
    usr.logins = 2
    msg = welcome_back(usr)
    assert "Welcome back, Alice!" in msg
    assert "<yellow>2nd<green>" in msg