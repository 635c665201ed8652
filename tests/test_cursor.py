from kmd_parser.cursor import Cursor


def test_advance_starts_at_first_character():
    cursor = Cursor("Some contents")

    assert cursor.index is None
    assert cursor.advance() == "S"
    assert cursor.index == 0
    assert cursor.advance() == "o"
    assert cursor.current() == "o"


def test_peek_does_not_move():
    cursor = Cursor("Some contents")

    assert cursor.advance() == "S"
    assert cursor.peek() == "o"
    assert cursor.peek() == "o"
    assert cursor.advance() == "o"
    assert cursor.peek() == "m"


def test_end_of_input_is_none():
    cursor = Cursor("a")

    assert cursor.advance() == "a"
    assert cursor.peek() is None
    assert cursor.at_end() is True
    assert cursor.advance() is None
    assert cursor.advance() is None
    assert cursor.current() is None
    assert cursor.index == 1


def test_empty_input():
    cursor = Cursor("")

    assert cursor.peek() is None
    assert cursor.current() is None
    assert cursor.advance() is None


def test_clone_is_independent():
    cursor = Cursor("abc")
    cursor.advance()
    clone = cursor.clone()

    assert clone.advance() == "b"
    assert clone.advance() == "c"
    assert cursor.current() == "a"
    assert cursor.peek() == "b"

    cursor.set_index(clone.index)
    assert cursor.current() == "c"
    assert cursor.at_end() is True


def test_collect_until_leaves_terminator():
    cursor = Cursor("title\nrest")

    assert cursor.collect_until(lambda ch: ch == "\n") == "title"
    assert cursor.peek() == "\n"


def test_collect_until_runs_to_end():
    cursor = Cursor("no newline")

    assert cursor.collect_until(lambda ch: ch == "\n") == "no newline"
    assert cursor.advance() is None


def test_skip_while_counts_skipped():
    cursor = Cursor("x\n\n\ny")
    cursor.advance()

    assert cursor.skip_while(lambda ch: ch == "\n") == 3
    assert cursor.advance() == "y"


def test_iteration_yields_remaining_characters():
    cursor = Cursor("abc")
    cursor.advance()

    assert list(cursor) == ["b", "c"]
