"""Test buffer loading and the buffer store lifecycle."""

import pytest
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from peek import (
    DEFAULT_CONFIG, KIND_FILE, KIND_PROCESS, LANG_MAN, LANG_NONE, LANG_PYTHON,
    Buffer, BufferLimitReached, BufferStore, CloseRejected, LoadFailure, Source,
    ViewerState, close_buffer, load_buffer, open_command, open_file, tabbar_text,
)


def make_buffer(label, n=10):
    return Buffer(label, ["%s line %d" % (label, i) for i in range(n)])


class TestBuffer:

    def test_scroll_is_clamped(self):
        buf = make_buffer("a", 5)
        buf.set_scroll(10)
        assert buf.scroll_offset == 4
        buf.set_scroll(-3)
        assert buf.scroll_offset == 0

    def test_empty_buffer_scroll(self):
        buf = Buffer("empty", [])
        buf.set_scroll(7)
        assert buf.scroll_offset == 0

    def test_name_is_basename(self):
        assert make_buffer("/tmp/dir/file.c").name == "file.c"
        assert make_buffer("[man ls /usr/bin]").name == "[man ls /usr/bin]"
        assert make_buffer("<stdin>").name == "<stdin>"

    def test_release(self):
        buf = make_buffer("a")
        buf.release()
        assert buf.lines == []
        assert not buf.is_active


class TestLoadBuffer:

    def test_open_file_classifies(self, canned_sources):
        canned_sources[KIND_FILE].data["app.py"] = [b"import os\r\n", b"x = 1   \n"]
        buf = open_file(canned_sources, "app.py")
        assert buf.lines == ["import os", "x = 1"]
        assert buf.lang == LANG_PYTHON
        assert buf.kind == KIND_FILE
        assert buf.source == Source(KIND_FILE, "app.py")
        assert not buf.truncated

    def test_open_command_is_man(self, canned_sources):
        canned_sources[KIND_PROCESS].data["man ls"] = [b"N\bNA\bAM\bME\bE", b"  ls - list"]
        buf = open_command(canned_sources, "man ls")
        assert buf.label == "[man ls]"
        assert buf.lang == LANG_MAN
        assert buf.kind == KIND_PROCESS
        assert buf.lines[0] == "NAME"

    def test_missing_source_fails(self, canned_sources):
        with pytest.raises(LoadFailure):
            open_file(canned_sources, "missing.txt")

    def test_zero_lines_fails(self, canned_sources):
        canned_sources[KIND_FILE].data["empty.txt"] = []
        with pytest.raises(LoadFailure):
            open_file(canned_sources, "empty.txt")

    def test_truncation_flag(self, canned_sources):
        canned_sources[KIND_FILE].data["big.txt"] = ["x"] * 20
        config = dict(DEFAULT_CONFIG, max_lines=5)
        buf = load_buffer(canned_sources, Source(KIND_FILE, "big.txt"), "big.txt",
                          LANG_NONE, config)
        assert buf.line_count == 5
        assert buf.truncated


class TestBufferStore:
    """Add, close, switch and reload."""

    def setup_method(self):
        self.store = BufferStore(max_buffers=3)

    def fill(self, *labels):
        for label in labels:
            self.store.add(make_buffer(label))

    def test_add_makes_current(self):
        self.fill("a", "b")
        assert self.store.buffer_count == 2
        assert self.store.current_index == 1
        assert self.store.current.label == "b"

    def test_add_at_limit_rejected(self):
        self.fill("a", "b", "c")
        self.store.current_index = 0
        before = list(self.store.buffers)
        with pytest.raises(BufferLimitReached):
            self.store.add(make_buffer("d"))
        assert self.store.buffers == before
        assert self.store.current_index == 0

    def test_close_sole_buffer_rejected(self):
        self.fill("a")
        with pytest.raises(CloseRejected):
            self.store.close()
        assert self.store.buffer_count == 1
        assert self.store.current.is_active

    def test_close_middle_compacts(self):
        self.fill("a", "b", "c")
        self.store.current_index = 1
        closed = self.store.close()
        assert closed.label == "b"
        assert closed.lines == []
        assert [b.label for b in self.store.buffers] == ["a", "c"]
        assert self.store.current_index == 1
        assert self.store.current.label == "c"

    def test_close_last_selects_new_last(self):
        self.fill("a", "b", "c")
        self.store.close()
        assert self.store.current_index == 1
        assert self.store.current.label == "b"

    def test_switch_wraps(self):
        self.fill("a", "b", "c")
        self.store.switch(1)
        assert self.store.current_index == 0
        self.store.switch(-1)
        assert self.store.current_index == 2
        self.store.switch(-1)
        assert self.store.current_index == 1

    def test_switch_empty_store(self):
        self.store.switch(1)
        assert self.store.current is None

    def test_reload_in_place(self, canned_sources):
        canned_sources[KIND_FILE].data["log.txt"] = ["one", "two", "three"]
        self.store.add(make_buffer("a"))
        self.store.add(open_file(canned_sources, "log.txt"))
        self.store.add(make_buffer("c"))
        target = self.store.buffers[1]
        target.set_scroll(2)

        canned_sources[KIND_FILE].data["log.txt"] = ["only"]
        reloaded = self.store.reload(canned_sources, index=1)

        assert reloaded is target
        assert self.store.buffers[1] is target
        assert target.lines == ["only"]
        assert target.scroll_offset == 0
        assert self.store.current_index == 2

    def test_reload_failure_keeps_lines(self, canned_sources):
        canned_sources[KIND_FILE].data["log.txt"] = ["one"]
        self.store.add(open_file(canned_sources, "log.txt"))
        canned_sources[KIND_FILE].data["log.txt"] = []
        with pytest.raises(LoadFailure):
            self.store.reload(canned_sources)
        assert self.store.current.lines == ["one"]

    def test_reload_without_descriptor(self, canned_sources):
        self.fill("a")
        with pytest.raises(LoadFailure):
            self.store.reload(canned_sources)


class TestTabBar:

    def test_closed_buffer_leaves_tab_bar(self):
        state = ViewerState()
        for label in ("/src/a.c", "/src/b.c", "/src/c.c"):
            state.store.add(make_buffer(label))
        state.store.current_index = 1
        close_buffer(state)
        text, start, end = tabbar_text(state)
        assert text == "  a.c | c.c |"
        assert text[start:end] == " c.c "
