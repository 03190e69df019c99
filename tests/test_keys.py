import pytest

from lobbybbs.keys import Key, key_ctrl, keyboard_cook


def test_key_ctrl_letter():
    assert key_ctrl("C") == 3
    assert key_ctrl("A") == 1


def test_key_ctrl_accepts_code():
    assert key_ctrl(ord("D")) == key_ctrl("D")


@pytest.mark.parametrize(
    "seq, key",
    [
        (b"[2~", Key.INSERT),
        (b"[3~", Key.DELETE),
        (b"[5~", Key.PAGEUP),
        (b"[6~", Key.PAGEDOWN),
        (b"[7~", Key.HOME),
        (b"[8~", Key.END),
    ],
)
def test_tilde_sequences(seq, key):
    buf = bytearray(seq)
    assert keyboard_cook(buf, Key.ESC) == key
    assert buf == bytearray()


@pytest.mark.parametrize(
    "seq, key",
    [(b"[A", Key.UP), (b"[B", Key.DOWN), (b"[C", Key.RIGHT), (b"[D", Key.LEFT)],
)
def test_arrow_sequences(seq, key):
    buf = bytearray(seq)
    assert keyboard_cook(buf, Key.ESC) == key
    assert len(buf) == 0


def test_tilde_sequence_leaves_rest_of_buffer():
    buf = bytearray(b"[5~xyz")
    assert keyboard_cook(buf, Key.ESC) == Key.PAGEUP
    assert buf == bytearray(b"xyz")


def test_unknown_sequence_returns_escape_untouched():
    buf = bytearray(b"[9~")
    assert keyboard_cook(buf, Key.ESC) == Key.ESC
    assert buf == bytearray(b"[9~")


def test_non_escape_passes_through():
    buf = bytearray(b"[A")
    assert keyboard_cook(buf, ord("x")) == ord("x")
    assert buf == bytearray(b"[A")


def test_short_buffer_returns_escape():
    buf = bytearray(b"[")
    assert keyboard_cook(buf, Key.ESC) == Key.ESC
    assert buf == bytearray(b"[")