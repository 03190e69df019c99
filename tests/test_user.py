import pytest

from lobbybbs.user import NameList, RuntimeFlag, User, UserFlag


def test_namelist_round_trip():
    names = NameList.from_string("alice,bob,carol")
    assert list(names) == ["alice", "bob", "carol"]
    assert names.to_string() == "alice,bob,carol"
    assert NameList.from_string(names.to_string()) == names


def test_namelist_from_empty_string():
    names = NameList.from_string("")
    assert len(names) == 0
    assert names.to_string() == ""


def test_namelist_add_rejects_duplicates():
    names = NameList()
    assert names.add("alice") is True
    assert names.add("alice") is False
    assert len(names) == 1


def test_namelist_add_rejects_bad_names():
    names = NameList()
    with pytest.raises(ValueError):
        names.add("")
    with pytest.raises(ValueError):
        names.add("a,b")


def test_namelist_remove():
    names = NameList(["alice", "bob"])
    assert names.remove("alice") is True
    assert "alice" not in names
    assert names.remove("alice") is False
    assert names.to_string() == "bob"


def test_namelist_clear():
    names = NameList(["alice", "bob"])
    names.clear()
    assert len(names) == 0


def test_namelist_keeps_insertion_order():
    names = NameList()
    for n in ["zed", "amy", "kim"]:
        names.add(n)
    assert names.to_string().split(",") == ["zed", "amy", "kim"]


def test_users_do_not_share_lists():
    a, b = User(name="a"), User(name="b")
    a.friends.add("b")
    a.recv_xmsgs.append("msg")
    assert "b" not in b.friends
    assert b.recv_xmsgs == []


def test_user_flags_toggle():
    usr = User()
    assert usr.flags == UserFlag(0)
    usr.flags ^= UserFlag.X_DISABLED
    assert usr.flags == UserFlag.X_DISABLED
    usr.flags ^= UserFlag.X_DISABLED
    assert usr.flags == UserFlag(0)


def test_runtime_flags_combine():
    usr = User(runtime_flags=RuntimeFlag.BUSY | RuntimeFlag.SYSOP)
    usr.runtime_flags &= ~RuntimeFlag.BUSY
    assert usr.runtime_flags == RuntimeFlag.SYSOP


def test_user_lock_is_reentrant():
    usr = User()
    with usr.lock:
        with usr.lock:
            usr.logins += 1
    assert usr.logins == 1


def test_users_compare_by_identity():
    a = User(name="x")
    b = User(name="x")
    assert (a == b) is False
    assert (a == a) is True
    assert len({a, b}) == 2