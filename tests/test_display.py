from lobbybbs.display import (
    Display,
    DisplayFlag,
    beep,
    clear_screen,
    erase,
    erase_line,
    hline,
    home_cursor,
    reset_colors,
    restore_cursor,
    save_cursor,
    scroll_down,
    scroll_up,
)


def ansi():
    return Display(flags=DisplayFlag.ANSI)


def test_reset_and_save_sequences():
    assert reset_colors() == "\x1b[0m"
    assert save_cursor() == "\x1b[s"


def test_beep_only_when_enabled():
    assert beep(Display(flags=DisplayFlag.BEEP)) == "\a"
    assert beep(Display()) == ""


def test_erase_ansi_moves_cursor():
    d = ansi()
    d.cursor = 10
    assert erase(d, 3) == "\x1b[3D\x1b[K"
    assert d.cursor == 7


def test_erase_plain_uses_backspaces_and_clamps_cursor():
    d = Display(cursor=1)
    assert erase(d, 2) == "\b \b" * 2
    assert d.cursor == 0


def test_erase_nothing():
    d = ansi()
    d.cursor = 4
    assert erase(d, 0) == ""
    assert d.cursor == 4


def test_erase_line():
    d = ansi()
    d.cursor = 5
    assert erase_line(d) == "\r\x1b[K"
    assert d.cursor == 0
    plain = Display(term_width=10, cursor=3)
    out = erase_line(plain)
    assert out == "\r" + " " * 9 + "\r"
    assert plain.cursor == 0


def test_clear_screen():
    assert clear_screen(ansi()) == "\x1b[1;1H\x1b[2J"
    plain = Display(term_height=4)
    assert clear_screen(plain) == "\r" + "\n" * 4


def test_home_and_restore():
    d = ansi()
    d.cursor = 9
    assert home_cursor(d) == "\x1b[1;1H"
    assert d.cursor == 0
    assert restore_cursor(d) == "\x1b[u"
    assert restore_cursor(Display()) == ""
    assert home_cursor(Display()) == "\r"


def test_scrolling():
    assert scroll_up(ansi(), 1) == "\x1b[S"
    assert scroll_up(ansi(), 4) == "\x1b[4S"
    assert scroll_up(Display(), 4) == ""
    assert scroll_down(ansi(), 1) == "\x1b[T"
    assert scroll_down(ansi(), 3) == "\x1b[3T"
    assert scroll_down(Display(), 3) == "\r\n\n\n"


def test_hline_spans_terminal():
    d = Display(term_width=20)
    line = hline(d, "-")
    assert len(line) == 21
    assert line.endswith("\r\n")
    assert set(line[:-2]) == {"-"}


def test_hline_is_capped():
    line = hline(Display(term_width=2000), "*")
    assert len(line) == 511
    assert line.endswith("\r\n")