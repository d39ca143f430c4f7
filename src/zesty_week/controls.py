"""Keyboard input mapped to page commands."""
from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

import click

from zesty_week.navigator import PageCommand

log = logging.getLogger("zesty_week.controls")

LEFT_KEYS = {"\x1b[D", "\x1bOD", "\xe0K", "\x00K", "h"}
RIGHT_KEYS = {"\x1b[C", "\x1bOC", "\xe0M", "\x00M", "l"}
QUIT_KEYS = {"q", "Q", "\x1b"}

KEY_BINDINGS = {key: PageCommand.PREV for key in LEFT_KEYS}
KEY_BINDINGS.update({key: PageCommand.NEXT for key in RIGHT_KEYS})

# longest first, so "\x1b[C" wins over a bare "\x1b"
KNOWN_KEYS = sorted(set(KEY_BINDINGS) | QUIT_KEYS, key=len, reverse=True)


def split_keys(chunk: str) -> Iterator[Optional[str]]:
    """Split one terminal read into keys; unknown characters come out as None.

    A held arrow key can deliver several escape sequences in a single read.
    """
    pos = 0
    while pos < len(chunk):
        for key in KNOWN_KEYS:
            if chunk.startswith(key, pos):
                yield key
                pos += len(key)
                break
        else:
            log.debug("Unbound key %r", chunk[pos])
            yield None
            pos += 1


def read_commands(getchar: Callable[[], str] = click.getchar) -> Iterator[PageCommand]:
    """Yield page commands from keypresses until a quit key (or Ctrl-C/Ctrl-D)."""
    while True:
        try:
            chunk = getchar()
        except (KeyboardInterrupt, EOFError):
            return
        for key in split_keys(chunk):
            if key in QUIT_KEYS:
                return
            command = KEY_BINDINGS.get(key)
            if command is not None:
                yield command
