###########EXTERNAL IMPORTS############

#######################################

#############LOCAL IMPORTS#############

from model.cursor import Entry
from model.struct.sliding_window import EntryWindow

#######################################


def keys(window: EntryWindow) -> list:
    return [entry.key for entry in window]


def test_extend_both_ends_keeps_order():
    window = EntryWindow()
    window.extend_back([Entry(5, "e"), Entry(6, "f")])
    window.extend_front([Entry(3, "c"), Entry(4, "d")])
    window.extend_back([Entry(7, "g")])
    assert keys(window) == [3, 4, 5, 6, 7]
    assert window.peek_front() == Entry(3, "c")
    assert window.peek_back() == Entry(7, "g")


def test_drop_updates_key_index():
    window = EntryWindow()
    window.extend_back([Entry(i, str(i)) for i in range(6)])
    window.drop_front(2)
    window.drop_back(1)
    assert keys(window) == [2, 3, 4]
    assert 1 not in window
    assert 5 not in window
    assert window.get(3) == Entry(3, "3")
    assert window.get(0) is None


def test_drop_more_than_length_empties_window():
    window = EntryWindow()
    window.extend_back([Entry(1, "a")])
    window.drop_front(5)
    assert len(window) == 0
    assert window.peek_front() is None
    assert window.peek_back() is None


def test_get_list_is_a_copy():
    window = EntryWindow()
    window.replace([Entry(1, "a"), Entry(2, "b")])
    items = window.get_list()
    items.clear()
    assert len(window) == 2
