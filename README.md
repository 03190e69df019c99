# lobbybbs

Building blocks for a small multi-user bulletin board system reached
over telnet: the table of online users, eXpress messages, friend, enemy
and override lists, who lists, a `--More--` pager, crypt-style password
hashing, a staged reboot/shutdown countdown and a TCP listener.

## Installation

```
pip install .
```

Passwords are hashed with `passlib`.

## The `lobbybbs` command

```
lobbybbs [--host HOST] [--port PORT]
```

Starts `BBSServer` on `--host` (default `0.0.0.0`) and `--port`
(default `1234`). It logs to standard output. `SIGINT` or `SIGTERM`
stops the accept loop.

By itself the command only greets each client. It sends the telnet
option negotiation from `telnet_greeting()` (WILL SGA, WILL ECHO,
DO NAWS, DO NEW-ENVIRON) and then closes the connection. To run a real
session, give `BBSServer` your own handler:

```python
import threading
from lobbybbs.server import BBSServer

def session(conn, ipaddr):
    with conn:
        conn.setblocking(True)
        conn.sendall(b"Welcome!\r\n")

server = BBSServer("127.0.0.1", 0, handler=session)
thread = threading.Thread(target=server.serve_forever)
thread.start()
server.ready.wait()
print(server.address)   # the address the server is bound to
server.stop()
thread.join()
```

Each accepted connection runs `handler(conn, ipaddr)` in its own daemon
thread. The socket it receives is non-blocking.

## Modules

- `lobbybbs.keys`: the `Key` codes, `key_ctrl('C')` and
  `keyboard_cook(buffer, c)`. `keyboard_cook` turns `ESC[A` and similar
  sequences into arrow keys, and `ESC[5~` and similar into
  Insert/Delete/PageUp/PageDown/Home/End.
- `lobbybbs.log`: `log_msg`, `log_info`, `log_warn`, `log_err` and
  `log_debug` write to standard output. `log_auth` writes to standard
  error. Every line has the form `Mon dd hh:mm:ss L message`.
- `lobbybbs.display`: `Display` (terminal size, `DisplayFlag` options,
  cursor column) and functions that return control sequences:
  `erase_line`, `clear_screen`, `scroll_down`, `hline` and others.
  Each has a variant for terminals without ANSI support.
- `lobbybbs.util`: formatting helpers, `flags_to_str`/`str_to_flags`
  and `yesno(read_key, write, prompt, default_answer)`.
- `lobbybbs.user`: `User`, with `UserFlag` and `RuntimeFlag`, and
  `NameList`, an ordered list of distinct names stored as `a,b,c`.
- `lobbybbs.passwd`: `crypt_password(password, mechanism)` and
  `check_password(password, crypted)`. The mechanisms are DES, MD5,
  SHA-256 (the default) and SHA-512.
- `lobbybbs.inet`: `inet_listen` and `inet_accept`, for IPv4 and IPv6.
  If an address is in use, binding is retried. Failures raise
  `NetworkError`.
- `lobbybbs.xmsg`: `XMsg`, `recv_xmsg`, `sent_xmsg_stats`,
  `unseen_xmsgs`, `format_xmsg` and `split_recipients`.
- `lobbybbs.online`: `OnlineList`, the thread-safe table of online
  users, with `notify_friends`, `broadcast`, `lock_user` and
  `get_online_list`.
- `lobbybbs.friends`: `add_friend`, `add_enemy`, `add_override` and
  the matching `remove_*` functions, `format_namelist` and `next_menu`.
  A refused change raises `ListError`.
- `lobbybbs.pager`: `Pager`, a `--More--` pager driven key by key.
- `lobbybbs.login`: `validate_new_name`, `check_new_password`,
  `online_summary` and `welcome_back`. A refusal raises `LoginError`.
- `lobbybbs.who`: `sort_who`, `filter_enemies`, `short_who_list`,
  `wholist_status`, `online_among`, `calendar` and `ping_status`.
- `lobbybbs.sysop`: `CountdownScheduler` and `countdown_stages`.
- `lobbybbs.server`: `BBSServer`, `telnet_greeting`, `version_info`
  and `main`.

## Examples

```python
from lobbybbs.util import sprint_total_time, sprint_number_commas, numberth

sprint_total_time(3725)        # '1 hour, 2 minutes and 5 seconds'
sprint_number_commas(1234567)  # '1,234,567'
numberth(22)                   # 'nd'
```

```python
from lobbybbs.passwd import crypt_password, check_password

hashed = crypt_password("password")          # '$5$...'
check_password("password", hashed)           # True
```

```python
from lobbybbs.online import OnlineList
from lobbybbs.user import User
from lobbybbs.xmsg import unseen_xmsgs, format_xmsg

online = OnlineList()
alice, bob = User(name="Alice"), User(name="Bob")
bob.friends.add("Alice")
online.add(alice)
online.add(bob)

online.notify_friends("Alice", "is formed from some golden stardust")  # 1
for x in unseen_xmsgs(bob):
    print(format_xmsg(x))
```

The pager splits text into lines. It returns the output to send and
sets `done` once the user has left or the text has run out:

```python
from lobbybbs.pager import page_text

pager = page_text("\n".join(f"line {i}" for i in range(100)), term_height=24)
out = pager.first_page()     # 23 lines and a --More-- prompt
out = pager.handle_key(" ")  # next page
out = pager.handle_key("q")  # leave; pager.done is now True
```

`CountdownScheduler(action, announce, what="rebooting")` runs `action`
after `schedule(seconds)`. The countdown is announced at the start and
again at one minute, 30 seconds and 10 seconds, when that much time is
left. `cancel()` stops a countdown and `pending()` tells whether one is
running.

## Friends, enemies and overrides

- Adding a friend who is on the enemy list moves them off it.
- Adding an enemy takes them off the friend, override and talked-to
  lists.
- A name on the enemy list can not be added as an override.
- Each list holds at most 25 names.

## What this package does not do

- There is no interactive session. Nothing logs users in, shows the
  Lobby prompt, runs menus or line editors, or reads commands over the
  connection. `BBSServer` only accepts connections and passes them to a
  handler.
- There is no user storage. Accounts, profiles, stored password hashes
  and statistics are not kept anywhere. Checks that need to know
  whether a user exists take a `user_exists` callable from you.
- Colour markup such as `<yellow>` in the text that functions return is
  not turned into terminal colours.
- Reboot and shutdown are not carried out. `CountdownScheduler` calls
  whatever `action` you give it.

## Development

```
pip install -e ".[test]"
pytest
```