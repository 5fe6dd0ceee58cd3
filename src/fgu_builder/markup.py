"""
Streaming builder for nested, tab-indented XML documents.

The builder only ever appends to its buffer. Elements are opened and closed
in scopes, so every start tag is matched by an end tag even when the code
populating the element raises::

    builder = MarkupBuilder()
    with builder.scope("root", [("version", "4.1")]):
        builder.text("name", [STRING], "Test Book")
    xml = builder.finish()

produces::

    <root version="4.1">
    \t<name type="string">Test Book</name>
    </root>
"""

from __future__ import annotations

import re
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Sequence, Union
from xml.sax.saxutils import escape

from .errors import MarkupError

Attribute = tuple[str, Union[str, int]]

STRING: Attribute = ("type", "string")
NUMBER: Attribute = ("type", "number")
FORMATTED_TEXT: Attribute = ("type", "formattedtext")

# Letters of any script or "_" first, then letters, digits, "_", "." or "-".
# Colons are left out, so names never look namespaced.
_NAME_RE = re.compile(r"^[^\W\d][\w.\-]*$", re.UNICODE)
# Characters XML 1.0 cannot carry, even escaped.
_INVALID_CHARS_RE = re.compile("[\\x00-\\x08\\x0b\\x0c\\x0e-\\x1f\\ufffe\\uffff]")


def type_attr(value: str) -> Attribute:
    """``type="<value>"``, the attribute FGU uses to tag every field."""
    return ("type", value)


def flag(value: bool) -> int:
    """FGU stores booleans as 0/1 numbers."""
    return 1 if value else 0


def _check_name(name: str) -> str:
    if not isinstance(name, str) or not _NAME_RE.match(name):
        raise MarkupError(f"Invalid element or attribute name: {name!r}")
    return name


def _escape_text(value: str) -> str:
    return escape(_INVALID_CHARS_RE.sub("", value))


def _escape_attr(value: str) -> str:
    return escape(
        _INVALID_CHARS_RE.sub("", value),
        {'"': "&quot;", "\n": "&#10;", "\r": "&#13;", "\t": "&#9;"},
    )


def _render_value(value: Union[str, int]) -> str:
    # bool is an int subclass; FGU wants 0/1, so callers must use flag().
    if isinstance(value, bool):
        raise TypeError("Boolean values must be converted with flag() first")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"Unsupported markup value type: {type(value).__name__}")


def _start_tag(name: str, attributes: Sequence[Attribute], *, empty: bool = False) -> str:
    parts = [_check_name(name)]
    for key, value in attributes:
        parts.append(f'{_check_name(key)}="{_escape_attr(_render_value(value))}"')
    close = "/>" if empty else ">"
    return "<" + " ".join(parts) + close


class MarkupBuilder:
    """Append-only XML writer with explicit scope discipline.

    A thread that opens a scope holds the builder until that scope closes, so
    records emitted from several threads come out whole, one after another,
    never interleaved.
    """

    def __init__(self, indent: str = "\t") -> None:
        self._indent = indent
        self._parts: list[str] = []
        self._stack: list[str] = []
        self._finished = False
        self._lock = threading.RLock()

    def _ensure_writable(self) -> None:
        if self._finished:
            raise MarkupError("Cannot write to a finished markup document")

    def _line(self, text: str) -> None:
        if self._parts:
            self._parts.append("\n" + self._indent * len(self._stack))
        self._parts.append(text)

    @contextmanager
    def scope(self, name: str, attributes: Sequence[Attribute] = ()) -> Iterator[MarkupBuilder]:
        """Open ``name``, yield the builder, and always close ``name``.

        The builder lock is held from the start tag to the end tag.
        """
        with self._lock:
            self._ensure_writable()
            self._line(_start_tag(name, attributes))
            self._stack.append(name)
            try:
                yield self
            finally:
                closing = self._stack.pop()
                self._line(f"</{closing}>")

    def open_scoped(
        self,
        name: str,
        attributes: Sequence[Attribute],
        body: Callable[[MarkupBuilder], None],
    ) -> None:
        """Write ``name`` with ``body(builder)`` as its content.

        The end tag is written even if ``body`` raises; the exception then
        propagates to the caller.
        """
        with self.scope(name, attributes) as builder:
            body(builder)

    def empty(self, name: str, attributes: Sequence[Attribute] = ()) -> None:
        """Write a self-closing element."""
        with self._lock:
            self._ensure_writable()
            self._line(_start_tag(name, attributes, empty=True))

    def text(self, name: str, attributes: Sequence[Attribute], value: Union[str, int]) -> None:
        """Write an element whose content is ``value``, escaped."""
        content = _escape_text(_render_value(value))
        with self._lock:
            self._ensure_writable()
            self._line(f"{_start_tag(name, attributes)}{content}</{name}>")

    def raw(self, name: str, attributes: Sequence[Attribute], block: str) -> None:
        """Write an element whose body is already-rendered markup.

        ``block`` is not escaped; it is placed between single newlines.
        """
        with self._lock:
            self._ensure_writable()
            self._line(_start_tag(name, attributes))
            self._parts.append("\n" + block + "\n")
            self._parts.append(self._indent * len(self._stack) + f"</{name}>")

    def finish(self) -> str:
        """Return the finished document. The builder accepts no more writes."""
        with self._lock:
            self._ensure_writable()
            if self._stack:
                raise MarkupError(f"Unclosed elements: {'/'.join(self._stack)}")
            self._finished = True
            return "".join(self._parts)
