from babybook.core.lightbox import Lightbox, LightboxItem


def make_box(n):
    return Lightbox([LightboxItem(src=f"/p{i}.jpg", caption=f"Photo {i}") for i in range(n)])


def test_open_and_wrap_around():
    box = make_box(3)
    box.open_at(0)
    box.prev()
    assert box.index == 2
    box.next()
    assert box.index == 0
    assert box.current.src == "/p0.jpg"


def test_open_clamps_index():
    box = make_box(3)
    box.open_at(10)
    assert box.index == 2
    box.open_at(-4)
    assert box.index == 0


def test_navigation_hidden_for_single_item():
    box = make_box(1)
    box.open_at(0)
    assert not box.show_navigation
    box.next()
    assert box.index == 0


def test_open_on_empty_box_does_nothing():
    box = make_box(0)
    box.open_at(0)
    assert not box.is_open
    assert box.current is None


def test_keys_ignored_while_closed():
    box = make_box(3)
    box.handle_key("ArrowRight")
    assert box.index == 0
    assert not box.is_open


def test_keyboard_navigation():
    box = make_box(3)
    box.open_at(1)
    box.handle_key("ArrowRight")
    assert box.index == 2
    box.handle_key("ArrowLeft")
    assert box.index == 1
    box.handle_key("Enter")
    assert box.index == 1
    box.handle_key("Escape")
    assert not box.is_open


def test_set_items_keeps_index_in_range():
    box = make_box(5)
    box.open_at(4)
    box.set_items([LightboxItem(src="/a.jpg"), LightboxItem(src="/b.jpg")])
    assert box.index == 1
    box.set_items([])
    assert not box.is_open


def test_append_items_extends():
    box = make_box(2)
    box.append_items([LightboxItem(src="/extra.jpg")])
    assert len(box.items) == 3
    assert box.items[-1].src == "/extra.jpg"
