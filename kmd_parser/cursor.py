"""Character cursor over an in-memory document."""

from __future__ import annotations

from collections.abc import Callable, Iterator


class Cursor:
    """Position-tracked view over an immutable text buffer.

    The position starts unset; the first call to `advance` moves it to index 0.
    Clones share the buffer and copy the position, so a caller can advance a
    clone speculatively and either adopt its index or drop it.

    Examples:
        cursor = Cursor("ab")
        cursor.advance()  # "a"
        cursor.peek()  # "b"
    """

    __slots__ = ("_text", "_index")

    def __init__(self, text: str, index: int | None = None):
        self._text = text
        self._index = index

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        character = self.advance()
        if character is None:
            raise StopIteration
        return character

    def __repr__(self) -> str:
        return f"Cursor(index={self._index!r}, length={len(self._text)})"

    @property
    def text(self) -> str:
        return self._text

    @property
    def index(self) -> int | None:
        """Current position, or None before the first `advance`."""
        return self._index

    def set_index(self, index: int | None) -> None:
        """Move the cursor to `index`, typically one read from a clone."""
        self._index = index

    def _next_index(self) -> int:
        return 0 if self._index is None else self._index + 1

    def advance(self) -> str | None:
        """Move to the next position and return the character there.

        Returns:
            str | None: The character, or None once the input is exhausted.
        """
        index = self._next_index()
        # Clamp so repeated calls at end of input stay at len(text).
        self._index = min(index, len(self._text))
        if index >= len(self._text):
            return None
        return self._text[index]

    def peek(self) -> str | None:
        """Return the character after the current one without moving."""
        index = self._next_index()
        if index >= len(self._text):
            return None
        return self._text[index]

    def current(self) -> str | None:
        if self._index is None or self._index >= len(self._text):
            return None
        return self._text[self._index]

    def clone(self) -> Cursor:
        return Cursor(self._text, self._index)

    def at_end(self) -> bool:
        return self.peek() is None

    def next_is(self, character: str) -> bool:
        return self.peek() == character

    def collect_until(self, predicate: Callable[[str], bool]) -> str:
        """Consume characters until `predicate` matches the lookahead.

        The matching character is left unconsumed.

        Examples:
            cursor = Cursor("title\\nrest")
            cursor.collect_until(lambda ch: ch == "\\n")  # "title"
        """
        collected = []
        while (character := self.peek()) is not None:
            if predicate(character):
                break
            collected.append(character)
            self.advance()
        return "".join(collected)

    def skip_while(self, predicate: Callable[[str], bool]) -> int:
        """Consume characters while `predicate` holds for the lookahead.

        Returns:
            int: Number of characters skipped.
        """
        skipped = 0
        while (character := self.peek()) is not None and predicate(character):
            self.advance()
            skipped += 1
        return skipped
