#!/usr/bin/env python3
"""\
Usages:
    peek FILE...                 view one or more files
    peek -                       view stdin
    cmd | peek                   view stdin
    cmd | peek - FILE            view stdin and FILE
    peek "man grep" FILE         man commands are detected automatically
    peek -m "man sed" FILE       explicit command buffer

Options:
    -m COMMAND      load the output of COMMAND as a buffer
    --no-wrap       start with line wrapping disabled
    -h, --help      print short, long help
    -v, --version   print version
    --debug         write a debug log to the temp directory

Key Binding:
    Quit             : q
    Scroll down      : j         DOWN
    Scroll up        : k         UP
    Scroll left      : h         LEFT      (wrap off)
    Scroll right     : l         RIGHT     (wrap off)
    Line start/end   : 0         $         (wrap off)
    Top / bottom     : g         G
    Half page        : d         u
    Search           : /
    Next Occurrence  : n
    Prev Occurrence  : N
    Copy mode        : v
    Copy selection   : y
    Cancel           : ESC
    Line numbers     : L
    Toggle wrap      : T         t
    Next buffer      : TAB
    Prev buffer      : SHIFT-TAB
    Close buffer     : x
    Reload buffer    : r
    Open file (fzf)  : o
    Open URL         : w
    SQL query        : S
"""


__version__ = "1.0.0"
__build_time__ = "2026-10-16 20:30:00"
__license__ = "MIT"
__author__ = "peek contributors"


import curses
import sys
import re
import os
import json
import shlex
import shutil
import logging
import tempfile
import subprocess
from collections import namedtuple
from functools import lru_cache
from urllib.parse import urlsplit

from pygments.lexers import get_lexer_by_name
from pygments.token import Token
from pygments.util import ClassNotFound


# key bindings
SCROLL_DOWN = {ord("j"), curses.KEY_DOWN}
SCROLL_UP = {ord("k"), curses.KEY_UP}
SCROLL_LEFT = {ord("h"), curses.KEY_LEFT}
SCROLL_RIGHT = {ord("l"), curses.KEY_RIGHT}
LINE_START = {ord("0")}
LINE_END = {ord("$")}
TOP = {ord("g"), curses.KEY_HOME}
BOTTOM = {ord("G"), curses.KEY_END}
HALF_DOWN = {ord("d"), 4, curses.KEY_NPAGE}
HALF_UP = {ord("u"), 21, curses.KEY_PPAGE}
SEARCH = {ord("/")}
NEXT_MATCH = {ord("n")}
PREV_MATCH = {ord("N")}
COPY_MODE = {ord("v")}
COPY_COMMIT = {ord("y")}
CANCEL = {27}
LINE_NUMBERS = {ord("L")}
WRAP = {ord("T"), ord("t")}
NEXT_BUFFER = {9}
PREV_BUFFER = {curses.KEY_BTAB}
CLOSE_BUFFER = {ord("x")}
RELOAD = {ord("r")}
OPEN_FILE = {ord("o"), ord("O")}
OPEN_URL = {ord("w")}
OPEN_SQL = {ord("S")}
QUIT = {ord("q"), ord("Q"), 3}

HELP_LINE = ("j/k:scroll  g/G:top/bottom  /:search  n/N:next/prev  v:copy  "
             "T:wrap  L:numbers  o:fzf-open  Tab:next-buf  x:close  q:quit")


# capacity policy
MAX_BUFFERS = 50
MAX_LINES = 10000
MAX_LINE_LEN = 2048

HORIZ_SCROLL_STEP = 8
LINE_NUMBER_WIDTH = 6  # "{:>5} "
CHROME_ROWS = 3  # tab bar, status bar, help line
MIN_COLS, MIN_ROWS = 20, 5

DEFAULT_CONFIG = {
    "wrap": True,
    "line_numbers": True,
    "horiz_scroll_step": HORIZ_SCROLL_STEP,
    "max_lines": MAX_LINES,
    "max_line_length": MAX_LINE_LEN,
    "max_buffers": MAX_BUFFERS,
}

DEBUG_LOG = os.path.join(tempfile.gettempdir(), "peek_debug.log")

log = logging.getLogger("peek")
log.addHandler(logging.NullHandler())


# buffer kinds
KIND_FILE = "file"
KIND_STDIN = "stdin"
KIND_PROCESS = "process-output"
KIND_NETWORK = "network-response"
KIND_SQL = "sql-result"

# language tags double as pygments lexer aliases
LANG_NONE = "none"
LANG_C = "c"
LANG_CPP = "cpp"
LANG_PYTHON = "python"
LANG_JAVA = "java"
LANG_JS = "javascript"
LANG_TS = "typescript"
LANG_HTML = "html"
LANG_CSS = "css"
LANG_SHELL = "bash"
LANG_MARKDOWN = "markdown"
LANG_MAN = "man"
LANG_RUST = "rust"
LANG_GO = "go"
LANG_RUBY = "ruby"
LANG_PHP = "php"
LANG_SQL = "sql"
LANG_JSON = "json"
LANG_XML = "xml"
LANG_YAML = "yaml"

EXTENSIONS = {
    ".c": LANG_C, ".h": LANG_C,
    ".cpp": LANG_CPP, ".cc": LANG_CPP, ".cxx": LANG_CPP, ".hpp": LANG_CPP, ".hh": LANG_CPP,
    ".py": LANG_PYTHON, ".pyw": LANG_PYTHON,
    ".java": LANG_JAVA,
    ".js": LANG_JS, ".mjs": LANG_JS, ".cjs": LANG_JS, ".jsx": LANG_JS,
    ".ts": LANG_TS, ".tsx": LANG_TS,
    ".html": LANG_HTML, ".htm": LANG_HTML,
    ".css": LANG_CSS,
    ".sh": LANG_SHELL, ".bash": LANG_SHELL, ".zsh": LANG_SHELL,
    ".md": LANG_MARKDOWN, ".markdown": LANG_MARKDOWN,
    ".rs": LANG_RUST,
    ".go": LANG_GO,
    ".rb": LANG_RUBY,
    ".php": LANG_PHP,
    ".sql": LANG_SQL,
    ".json": LANG_JSON,
    ".xml": LANG_XML,
    ".yaml": LANG_YAML, ".yml": LANG_YAML,
}


# style classes are pygments token types
STYLE_NORMAL = Token.Text
STYLE_KEYWORD = Token.Keyword
STYLE_STRING = Token.Literal.String
STYLE_COMMENT = Token.Comment
STYLE_NUMBER = Token.Literal.Number
STYLE_TYPE = Token.Keyword.Type
STYLE_FUNCTION = Token.Name.Function

# curses foreground per token family, -1 is the terminal default
STYLE_COLORS = {
    Token.Text: -1,
    Token.Keyword: curses.COLOR_MAGENTA,
    Token.Keyword.Type: curses.COLOR_BLUE,
    Token.Literal.String: curses.COLOR_GREEN,
    Token.Comment: curses.COLOR_CYAN,
    Token.Literal.Number: curses.COLOR_YELLOW,
    Token.Name.Function: curses.COLOR_YELLOW,
}

# (fg, bg) for the non-text parts of the screen
CHROME_COLORS = {
    "tabbar": (curses.COLOR_BLACK, curses.COLOR_CYAN),
    "status": (curses.COLOR_BLACK, curses.COLOR_CYAN),
    "linenr": (curses.COLOR_YELLOW, -1),
    "select": (curses.COLOR_BLACK, curses.COLOR_WHITE),
}


Span = namedtuple("Span", "start end style bold")
Row = namedtuple("Row", "line_index prefix text spans selected")
Source = namedtuple("Source", "kind target")


# =============================================================================
# ERRORS
# =============================================================================

class PeekError(Exception):
    """Base class for errors that end up on the status line."""


class LoadFailure(PeekError):
    """A source could not be read or produced no lines."""


class BufferLimitReached(PeekError):
    """The buffer store is full."""


class CloseRejected(PeekError):
    """The last remaining buffer cannot be closed."""


class ExportFailure(PeekError):
    """A selection could not be handed to the clipboard."""


class TerminalInitFailure(PeekError):
    """No usable controlling terminal. Fatal."""


# =============================================================================
# CONFIGURATION AND LOGGING
# =============================================================================

def config_path():
    if os.getenv("PEEK_CONFIG"):
        return os.getenv("PEEK_CONFIG")
    if os.getenv("HOME") is not None:
        return os.path.join(os.getenv("HOME"), ".config", "peek", "config.json")
    elif os.getenv("USERPROFILE") is not None:
        return os.path.join(os.getenv("USERPROFILE"), ".peek.json")
    return None


def load_config(path=None):
    """Read the optional JSON config on top of DEFAULT_CONFIG.

    Nothing is ever written back. A missing file is normal; an unreadable or
    malformed one is logged and ignored, as are individual bad values.
    """
    config = dict(DEFAULT_CONFIG)
    path = path or config_path()
    if not path or not os.path.isfile(path):
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        log.warning("ignoring config %s: %s", path, e)
        return config

    if not isinstance(data, dict):
        log.warning("ignoring config %s: top level is not an object", path)
        return config

    for key, default in DEFAULT_CONFIG.items():
        if key not in data:
            continue
        value = data[key]
        if isinstance(default, bool):
            if isinstance(value, bool):
                config[key] = value
                continue
        elif isinstance(value, int) and not isinstance(value, bool) and value > 0:
            config[key] = value
            continue
        log.warning("ignoring invalid config value %s=%r", key, value)
    return config


def setup_logging(debug=False):
    if not debug:
        return
    handler = logging.FileHandler(DEBUG_LOG, encoding="utf-8")
    handler.setFormatter(logging.Formatter(
        "[%(asctime)s] %(levelname)s %(message)s", "%Y-%m-%d %H:%M:%S"))
    log.addHandler(handler)
    log.setLevel(logging.DEBUG)
    log.debug("peek %s (built %s) starting", __version__, __build_time__)


# =============================================================================
# TEXT NORMALIZATION
# =============================================================================

ESC = "\x1b"
BEL = "\x07"
BS = "\b"

# escape scanner states
ANSI_NORMAL = "normal"
ANSI_ESC = "esc"
ANSI_CSI = "csi"
ANSI_OSC = "osc"


def ansi_step(state, ch):
    """Advance the escape scanner by one character.

    Returns ``(next_state, keep)`` where ``keep`` says whether ``ch`` is
    visible text.
    """
    if state == ANSI_NORMAL:
        if ch == ESC:
            return ANSI_ESC, False
        return ANSI_NORMAL, True
    if state == ANSI_ESC:
        if ch == "[":
            return ANSI_CSI, False
        if ch == "]":
            return ANSI_OSC, False
        # two-byte escape, e.g. ESC ( or ESC =
        return ANSI_NORMAL, False
    if state == ANSI_CSI:
        if "@" <= ch <= "~":
            return ANSI_NORMAL, False
        return ANSI_CSI, False
    if state == ANSI_OSC:
        if ch == BEL:
            return ANSI_NORMAL, False
        return ANSI_OSC, False
    raise ValueError("unknown escape scanner state: %r" % (state,))


def strip_ansi(text):
    out = []
    state = ANSI_NORMAL
    for ch in text:
        state, keep = ansi_step(state, ch)
        if keep:
            out.append(ch)
    # an unterminated sequence at the end is simply dropped
    return "".join(out)


def collapse_overstrike(text):
    """Resolve ``x<BS>x`` (bold) and ``_<BS>x`` (underline) to the last glyph."""
    if BS not in text:
        return text
    out = []
    for ch in text:
        if ch == BS:
            if out:
                out.pop()
        else:
            out.append(ch)
    return "".join(out)


def normalize(raw):
    """Clean one raw line for ingestion.

    Overstrikes are collapsed before escapes are stripped since captured
    terminal output can put ESC bytes right next to backspaces.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    line = raw.rstrip("\r\n")
    line = collapse_overstrike(line)
    line = strip_ansi(line)
    return line.rstrip(" \t")


def ingest(raw_lines, max_lines=MAX_LINES, max_line_len=MAX_LINE_LEN):
    """Normalize raw lines under the capacity policy.

    Returns ``(lines, truncated)``. Lines past ``max_lines`` are never read
    and characters past ``max_line_len`` are dropped.
    """
    lines = []
    truncated = False
    for raw in raw_lines:
        if len(lines) >= max_lines:
            truncated = True
            break
        line = normalize(raw)
        if len(line) > max_line_len:
            line = line[:max_line_len]
            truncated = True
        lines.append(line)
    return lines, truncated


# =============================================================================
# WRAPPING AND LANGUAGE DETECTION
# =============================================================================

def wrap(line, width):
    if width <= 0:
        raise ValueError("wrap width must be positive, got %d" % width)
    if not line:
        return [""]
    return [line[i:i + width] for i in range(0, len(line), width)]


def classify(path):
    """Language tag for a path, from its extension, else man-page markers."""
    ext = os.path.splitext(os.path.basename(path))[1]
    if ext in EXTENSIONS:
        return EXTENSIONS[ext]
    if "/man/" in path or ".man" in path:
        return LANG_MAN
    return LANG_NONE


@lru_cache(maxsize=None)
def language_name(lang):
    if lang == LANG_NONE:
        return "Plain"
    if lang == LANG_MAN:
        return "Man"
    try:
        return get_lexer_by_name(lang).name
    except ClassNotFound:
        return lang


def is_man_command(arg):
    """True for ``man grep`` and env-prefixed forms like ``MANWIDTH=200 man grep``."""
    if not arg:
        return False
    if arg.startswith("man "):
        return True
    if " man " in arg:
        p = arg.find("man ")
        return p + 4 < len(arg)
    return False


# =============================================================================
# HIGHLIGHTING
# =============================================================================

C_KEYWORDS = frozenset("""
    auto break case char const continue default do double else enum extern
    float for goto if inline int long register restrict return short signed
    sizeof static struct switch typedef union unsigned void volatile while
""".split())

CPP_KEYWORDS = C_KEYWORDS | frozenset("""
    bool catch class constexpr const_cast delete dynamic_cast explicit false
    friend mutable namespace new noexcept nullptr operator override private
    protected public reinterpret_cast static_assert static_cast template this
    throw true try typeid typename using virtual
""".split())

JAVA_KEYWORDS = frozenset("""
    abstract assert boolean break byte case catch char class const continue
    default do double else enum extends false final finally float for goto if
    implements import instanceof int interface long native new null package
    private protected public record return short static strictfp super switch
    synchronized this throw throws transient true try var void volatile while
""".split())

JS_KEYWORDS = frozenset("""
    async await break case catch class const continue debugger default delete
    do else export extends false finally for function if import in instanceof
    let new null of return super switch this throw true try typeof undefined
    var void while with yield
""".split())

TS_KEYWORDS = JS_KEYWORDS | frozenset("""
    abstract any as boolean declare enum implements interface is keyof module
    namespace never number private protected public readonly string type
    unknown
""".split())

PYTHON_KEYWORDS = frozenset("""
    False None True and as assert async await break class continue def del
    elif else except finally for from global if import in is lambda nonlocal
    not or pass raise return try while with yield
""".split())

SHELL_KEYWORDS = frozenset("""
    break case continue declare do done elif else esac exit export fi for
    function if in local readonly return select shift source then time unset
    until while
""".split())

RUST_KEYWORDS = frozenset("""
    Self as async await break const continue crate dyn else enum extern false
    fn for if impl in let loop match mod move mut pub ref return self static
    struct super trait true type unsafe use where while
""".split())

GO_KEYWORDS = frozenset("""
    break case chan const continue default defer else fallthrough false for
    func go goto if import interface iota map nil package range return select
    struct switch true type var
""".split())

RUBY_KEYWORDS = frozenset("""
    BEGIN END alias and begin break case class def do else elsif end ensure
    false for if in module next nil not or redo rescue retry return self super
    then true undef unless until when while yield
""".split())

PHP_KEYWORDS = frozenset("""
    abstract and array as break callable case catch class clone const continue
    declare default do echo else elseif empty enddeclare endfor endforeach
    endif endswitch endwhile extends false final finally fn for foreach
    function global goto if implements include include_once instanceof
    insteadof interface isset list match namespace new null or print private
    protected public readonly require require_once return static switch throw
    trait true try unset use var while xor yield
""".split())

# stored lowercase, matched case-insensitively
SQL_KEYWORDS = frozenset("""
    add all alter and as asc avg begin between by case check commit count
    create default delete desc distinct drop else end exists foreign from full
    group having in index inner insert into is join key left like limit max
    min not null offset on or order outer primary references right rollback
    select set sum table then transaction union unique update values view
    when where with
""".split())

JSON_KEYWORDS = frozenset(["true", "false", "null"])
YAML_KEYWORDS = frozenset(["true", "false", "null", "yes", "no", "on", "off",
                           "True", "False", "Null", "Yes", "No"])

DIGITS = "0123456789"
NUMBER_CHARS = frozenset(DIGITS + ".")
HEX_NUMBER_CHARS = frozenset(DIGITS + ".abcdefABCDEFxX")
QUOTES = "\"'"


def _push(spans, start, end, style, bold=False):
    """Append a span, merging it into the previous one when they touch."""
    if start >= end:
        return
    if spans:
        last = spans[-1]
        if last.end == start and last.style == style and last.bold == bold:
            spans[-1] = Span(last.start, end, style, bold)
            return
    spans.append(Span(start, end, style, bold))


def string_end(line, i):
    """Index just past the string literal opened by the quote at ``i``."""
    quote = line[i]
    j = i + 1
    while j < len(line):
        # a quote right after a backslash is escaped; "\\" is not special-cased
        if line[j] == quote and line[j - 1] != "\\":
            return j + 1
        j += 1
    return len(line)


class Highlighter:
    """Plain text: the whole line is one Normal span."""

    def tokenize(self, line):
        spans = []
        _push(spans, 0, len(line), STYLE_NORMAL)
        return spans


class CodeHighlighter(Highlighter):
    """Line-local lexer for a programming language family.

    Recognises one-line comments, quoted strings, numbers and reserved words.
    Nothing carries over to the next line, so block comments and multi-line
    strings are only coloured on the lines where they start with a marker.
    """

    def __init__(self, keywords=(), comments=(), hex_numbers=True, ignore_case=False):
        self.keywords = frozenset(keywords)
        self.comments = tuple(comments)
        self.number_chars = HEX_NUMBER_CHARS if hex_numbers else NUMBER_CHARS
        self.ignore_case = ignore_case

    def is_keyword(self, word):
        if self.ignore_case:
            word = word.lower()
        return word in self.keywords

    def tokenize(self, line):
        spans = []
        n = len(line)
        i = 0
        while i < n:
            ch = line[i]

            if self.comments and line.startswith(self.comments, i):
                _push(spans, i, n, STYLE_COMMENT)
                break

            if ch in QUOTES:
                j = string_end(line, i)
                _push(spans, i, j, STYLE_STRING)
                i = j
                continue

            if ch in DIGITS:
                j = i + 1
                while j < n and line[j] in self.number_chars:
                    j += 1
                _push(spans, i, j, STYLE_NUMBER)
                i = j
                continue

            if ch.isalpha() or ch == "_":
                j = i + 1
                while j < n and (line[j].isalnum() or line[j] == "_"):
                    j += 1
                if self.is_keyword(line[i:j]):
                    _push(spans, i, j, STYLE_KEYWORD, True)
                else:
                    _push(spans, i, j, STYLE_NORMAL)
                i = j
                continue

            _push(spans, i, i + 1, STYLE_NORMAL)
            i += 1
        return spans


def is_man_section_header(text):
    # NAME, SYNOPSIS, SEE ALSO ...
    letters = 0
    for ch in text.lstrip(" "):
        if ch == " ":
            continue
        if not ch.isalpha() or not ch.isupper():
            return False
        letters += 1
    return letters >= 3


def xref_end(line, j):
    """End of a ``(<digits>)`` suffix starting at ``j``, or None."""
    if j >= len(line) or line[j] != "(":
        return None
    k = j + 1
    while k < len(line) and line[k] in DIGITS:
        k += 1
    if k == j + 1 or k >= len(line) or line[k] != ")":
        return None
    return k + 1


class ManHighlighter(Highlighter):
    """Rendered man pages: section headings, option flags, ``name(1)`` refs."""

    def tokenize(self, line):
        if is_man_section_header(line):
            return [Span(0, len(line), STYLE_KEYWORD, True)] if line else []

        spans = []
        n = len(line)
        i = 0
        while i < n:
            ch = line[i]
            if ch.isspace():
                _push(spans, i, i + 1, STYLE_NORMAL)
                i += 1
                continue

            if ch == "-":
                j = i
                while j < n and not line[j].isspace():
                    j += 1
                _push(spans, i, j, STYLE_NUMBER, True)
                i = j
                continue

            if ch.isalnum() or ch == "_":
                j = i
                while j < n and (line[j].isalnum() or line[j] in "_-"):
                    j += 1
                k = xref_end(line, j)
                if k is None:
                    _push(spans, i, j, STYLE_NORMAL)
                    i = j
                else:
                    _push(spans, i, j, STYLE_FUNCTION, True)
                    _push(spans, j, k, STYLE_TYPE)
                    i = k
                continue

            _push(spans, i, i + 1, STYLE_NORMAL)
            i += 1
        return spans


PLAIN = Highlighter()

HIGHLIGHTERS = {
    LANG_C: CodeHighlighter(C_KEYWORDS, ["//"]),
    LANG_CPP: CodeHighlighter(CPP_KEYWORDS, ["//"]),
    LANG_JAVA: CodeHighlighter(JAVA_KEYWORDS, ["//"]),
    LANG_JS: CodeHighlighter(JS_KEYWORDS, ["//"]),
    LANG_TS: CodeHighlighter(TS_KEYWORDS, ["//"]),
    LANG_CSS: CodeHighlighter((), ["//"]),
    LANG_RUST: CodeHighlighter(RUST_KEYWORDS, ["//"]),
    LANG_GO: CodeHighlighter(GO_KEYWORDS, ["//"]),
    LANG_PHP: CodeHighlighter(PHP_KEYWORDS, ["//", "#"]),
    LANG_PYTHON: CodeHighlighter(PYTHON_KEYWORDS, ["#"]),
    LANG_SHELL: CodeHighlighter(SHELL_KEYWORDS, ["#"]),
    LANG_RUBY: CodeHighlighter(RUBY_KEYWORDS, ["#"]),
    LANG_YAML: CodeHighlighter(YAML_KEYWORDS, ["#"], hex_numbers=False),
    LANG_SQL: CodeHighlighter(SQL_KEYWORDS, ["--"], hex_numbers=False, ignore_case=True),
    LANG_JSON: CodeHighlighter(JSON_KEYWORDS),
    LANG_HTML: CodeHighlighter(),
    LANG_XML: CodeHighlighter(),
    LANG_MARKDOWN: CodeHighlighter(hex_numbers=False),
    LANG_MAN: ManHighlighter(),
}


def tokenize(line, lang):
    return HIGHLIGHTERS.get(lang, PLAIN).tokenize(line)


def clip_spans(spans, lo, hi):
    """Spans restricted to columns ``[lo, hi)`` and shifted to start at 0."""
    out = []
    for s in spans:
        start, end = max(s.start, lo), min(s.end, hi)
        if start < end:
            out.append(Span(start - lo, end - lo, s.style, s.bold))
    return out


def _token_lookup(table, token, default):
    while token is not None:
        if token in table:
            return table[token]
        token = token.parent
    return default


def style_color(token):
    """Foreground colour for a token, falling back through its parents."""
    return _token_lookup(STYLE_COLORS, token, STYLE_COLORS[Token.Text])


# =============================================================================
# SOURCES AND SINKS
# =============================================================================

def split_lines(data):
    lines = data.split(b"\n")
    if lines and lines[-1] == b"":
        lines.pop()
    return lines


class TextSource:
    """Produces raw lines for a buffer's reload target."""

    def fetch(self, target):
        raise NotImplementedError


class FileSource(TextSource):

    def fetch(self, path):
        try:
            with open(path, "rb") as f:
                return split_lines(f.read())
        except OSError as e:
            raise LoadFailure("Failed to load %s: %s" % (path, e.strerror or e)) from e


class StdinSource(TextSource):
    """Reads the stream once; reloading returns the captured lines again."""

    def __init__(self, stream=None):
        self.stream = stream
        self._lines = None

    def fetch(self, target=None):
        if self._lines is None:
            stream = self.stream if self.stream is not None else sys.stdin.buffer
            try:
                self._lines = split_lines(stream.read())
            except OSError as e:
                raise LoadFailure("Failed to read stdin: %s" % e) from e
        return list(self._lines)


class CommandSource(TextSource):
    """Captures stdout of a shell command. The exit status is ignored."""

    shell = True

    def command(self, target):
        return target

    def fetch(self, target):
        cmd = self.command(target)
        log.debug("running %r", cmd)
        try:
            proc = subprocess.run(cmd, shell=self.shell, stdin=subprocess.DEVNULL,
                                  stdout=subprocess.PIPE, stderr=subprocess.DEVNULL)
        except OSError as e:
            raise LoadFailure("Failed to run %s: %s" % (cmd, e.strerror or e)) from e
        return split_lines(proc.stdout)


class HttpSource(CommandSource):
    shell = False

    def command(self, url):
        return ["curl", "-sL", url]


class SqlSource(CommandSource):
    shell = False

    def command(self, target):
        database, query = target
        return ["sqlite3", "-header", "-column", database, query]


def default_sources(stdin=None):
    return {
        KIND_FILE: FileSource(),
        KIND_STDIN: StdinSource(stdin),
        KIND_PROCESS: CommandSource(),
        KIND_NETWORK: HttpSource(),
        KIND_SQL: SqlSource(),
    }


class TextSink:
    """Receives exported text."""

    def send(self, text):
        raise NotImplementedError


CLIPBOARD_COMMANDS = (
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["pbcopy"],
)


class ClipboardSink(TextSink):

    def __init__(self, commands=CLIPBOARD_COMMANDS):
        self.commands = commands

    def send(self, text):
        for argv in self.commands:
            if shutil.which(argv[0]) is None:
                continue
            try:
                subprocess.run(argv, input=text.encode("utf-8"), check=True,
                               stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
            except (OSError, subprocess.CalledProcessError) as e:
                log.debug("clipboard tool %s failed: %s", argv[0], e)
                continue
            return argv[0]
        raise ExportFailure("No clipboard tool available")


# =============================================================================
# BUFFERS
# =============================================================================

class Buffer:
    """One loaded document and its own view state."""

    def __init__(self, label, lines, lang=LANG_NONE, kind=KIND_FILE, source=None,
                 truncated=False):
        self.label = label
        self.lines = lines
        self.lang = lang
        self.kind = kind
        self.source = source  # reload descriptor
        self.truncated = truncated
        self.scroll_offset = 0
        self.is_active = True

    @property
    def line_count(self):
        return len(self.lines)

    @property
    def name(self):
        if self.label.startswith("["):
            return self.label
        return os.path.basename(self.label.rstrip("/")) or self.label

    def set_scroll(self, offset):
        self.scroll_offset = min(max(offset, 0), max(1, self.line_count) - 1)

    def replace_lines(self, lines, truncated=False):
        self.lines = lines
        self.truncated = truncated
        self.set_scroll(self.scroll_offset)

    def release(self):
        self.lines = []
        self.scroll_offset = 0
        self.is_active = False


def load_buffer(sources, source, label, lang, config=None):
    """Fetch, normalize and wrap up a new Buffer. Raises LoadFailure."""
    config = config or DEFAULT_CONFIG
    raw = sources[source.kind].fetch(source.target)
    lines, truncated = ingest(raw, config["max_lines"], config["max_line_length"])
    if not lines:
        raise LoadFailure("No data from %s" % label)
    if truncated:
        log.warning("%s truncated to %d lines of at most %d characters",
                    label, config["max_lines"], config["max_line_length"])
    log.info("loaded %s: %d lines, %s, %s", label, len(lines), source.kind, lang)
    return Buffer(label, lines, lang, source.kind, source, truncated)


def open_file(sources, path, config=None):
    return load_buffer(sources, Source(KIND_FILE, path), path, classify(path), config)


def open_stdin(sources, config=None):
    return load_buffer(sources, Source(KIND_STDIN, None), "<stdin>", LANG_NONE, config)


def open_command(sources, command, config=None):
    # command buffers are shown as man pages
    return load_buffer(sources, Source(KIND_PROCESS, command), "[%s]" % command,
                       LANG_MAN, config)


def open_url(sources, url, config=None):
    return load_buffer(sources, Source(KIND_NETWORK, url), url,
                       classify(urlsplit(url).path), config)


def open_sql(sources, database, query, config=None):
    return load_buffer(sources, Source(KIND_SQL, (database, query)),
                       "[sql: %s]" % query, LANG_NONE, config)


class BufferStore:
    """Bounded, ordered set of buffers with a current index."""

    def __init__(self, max_buffers=MAX_BUFFERS):
        self.buffers = []
        self.current_index = 0
        self.max_buffers = max_buffers

    def __len__(self):
        return len(self.buffers)

    @property
    def buffer_count(self):
        return len(self.buffers)

    @property
    def current(self):
        if not self.buffers:
            return None
        return self.buffers[self.current_index]

    def add(self, buffer):
        if len(self.buffers) >= self.max_buffers:
            raise BufferLimitReached("Buffer limit reached (%d)" % self.max_buffers)
        self.buffers.append(buffer)
        self.current_index = len(self.buffers) - 1
        return self.current_index

    def close(self):
        if len(self.buffers) <= 1:
            raise CloseRejected("Cannot close the last buffer")
        buffer = self.buffers.pop(self.current_index)
        buffer.release()
        if self.current_index >= len(self.buffers):
            self.current_index = len(self.buffers) - 1
        return buffer

    def switch(self, step):
        if self.buffers:
            self.current_index = (self.current_index + step) % len(self.buffers)

    def reload(self, sources, index=None, config=None):
        """Re-fetch a buffer in place; it keeps its position in the store."""
        config = config or DEFAULT_CONFIG
        if index is None:
            index = self.current_index
        buffer = self.buffers[index]
        if buffer.source is None:
            raise LoadFailure("%s cannot be reloaded" % buffer.name)
        raw = sources[buffer.source.kind].fetch(buffer.source.target)
        lines, truncated = ingest(raw, config["max_lines"], config["max_line_length"])
        if not lines:
            raise LoadFailure("No data from %s" % buffer.label)
        buffer.replace_lines(lines, truncated)
        log.info("reloaded %s: %d lines", buffer.label, len(lines))
        return buffer


# =============================================================================
# VIEWER STATE
# =============================================================================

class SelectionModel:
    """Copy-mode line range. Bounds are unordered until read."""

    def __init__(self):
        self.start_line = 0
        self.end_line = 0
        self.active = False

    def begin(self, line):
        self.start_line = self.end_line = line
        self.active = True

    def extend(self, line):
        if self.active:
            self.end_line = line

    def finish(self):
        self.active = False

    def bounds(self):
        return min(self.start_line, self.end_line), max(self.start_line, self.end_line)

    def contains(self, line):
        if not self.active:
            return False
        lo, hi = self.bounds()
        return lo <= line <= hi

    def selected_lines(self, buffer):
        lo, hi = self.bounds()
        return buffer.lines[lo:hi + 1]


class ViewerState:
    """Everything the run loop mutates. One per run, passed around explicitly."""

    def __init__(self, store=None, config=None):
        self.config = dict(DEFAULT_CONFIG)
        self.config.update(config or {})
        self.store = store if store is not None else BufferStore(self.config["max_buffers"])
        self.search_term = ""
        self.search_match_count = 0
        self.current_match = 0
        self.show_line_numbers = self.config["line_numbers"]
        self.wrap_enabled = self.config["wrap"]
        self.horiz_scroll_offset = 0
        self.horiz_scroll_step = self.config["horiz_scroll_step"]
        self.selection = SelectionModel()
        self.status = ""

    @property
    def buffer(self):
        return self.store.current

    @property
    def copy_mode(self):
        return self.selection.active


# =============================================================================
# VIEWPORT
# =============================================================================

def text_area(state, rows, cols):
    """(visible rows, gutter width, text width) for a terminal size."""
    height = max(1, rows - CHROME_ROWS)
    gutter = LINE_NUMBER_WIDTH if state.show_line_numbers else 0
    return height, gutter, max(1, cols - gutter)


def line_down(pos, tot):
    return min(pos + 1, max(tot - 1, 0))


def line_up(pos):
    return max(pos - 1, 0)


def half_down(pos, tot, winhi):
    # clamps to the last full page, which can be above pos
    return max(min(pos + winhi // 2, tot - winhi), 0)


def half_up(pos, winhi):
    return max(pos - winhi // 2, 0)


def pgend(tot, winhi):
    if tot - winhi >= 0:
        return tot - winhi
    else:
        return 0


def scroll_to(state, offset):
    """Move the current buffer; copy mode drags the selection end along."""
    buf = state.buffer
    buf.set_scroll(offset)
    state.selection.extend(buf.scroll_offset)


def scroll_left(state):
    state.horiz_scroll_offset = max(0, state.horiz_scroll_offset - state.horiz_scroll_step)


def scroll_right(state):
    state.horiz_scroll_offset += state.horiz_scroll_step


def line_end_offset(lines, text_width):
    longest = max((len(line) for line in lines), default=0)
    return max(0, longest - text_width)


def visible_lines(state, rows):
    height = text_area(state, rows, 1)[0]
    buf = state.buffer
    return buf.lines[buf.scroll_offset:buf.scroll_offset + height]


def set_wrap(state, enabled):
    state.wrap_enabled = enabled
    if enabled:
        state.horiz_scroll_offset = 0


def render_plan(state, rows, cols):
    """Rows to paint for the current buffer.

    Each logical line is highlighted once; with wrap on its spans are split
    across the display rows, and output stops when the row budget runs out.
    """
    buf = state.buffer
    height, gutter, width = text_area(state, rows, cols)
    plan = []
    index = buf.scroll_offset
    while len(plan) < height and index < buf.line_count:
        line = buf.lines[index]
        spans = tokenize(line, buf.lang)
        selected = state.selection.contains(index)
        number = "{:>5} ".format(index + 1) if gutter else ""
        if state.wrap_enabled:
            start = 0
            for k, segment in enumerate(wrap(line, width)):
                if len(plan) >= height:
                    break
                prefix = number if k == 0 else " " * len(number)
                end = start + len(segment)
                plan.append(Row(index, prefix, segment, clip_spans(spans, start, end), selected))
                start = end
        else:
            lo = state.horiz_scroll_offset
            plan.append(Row(index, number, line[lo:lo + width],
                            clip_spans(spans, lo, lo + width), selected))
        index += 1
    return plan


# =============================================================================
# SEARCH
# =============================================================================

def find_match(buffer, term, start_line, direction):
    if not term:
        return None
    count = buffer.line_count
    line = start_line
    for _ in range(count):
        if line < 0:
            line = count - 1
        elif line >= count:
            line = 0
        if term in buffer.lines[line]:
            return line
        line += direction
    return None


def count_matches(buffer, term):
    if not term:
        return 0
    return sum(1 for line in buffer.lines if term in line)


def match_rank(buffer, term, match_line):
    return sum(1 for line in buffer.lines[:match_line] if term in line)


def refresh_search(state):
    """Recount matches after the term or the current buffer changed."""
    buf = state.buffer
    if not state.search_term or buf is None:
        state.search_match_count = 0
        state.current_match = 0
        return
    state.search_match_count = count_matches(buf, state.search_term)
    state.current_match = match_rank(buf, state.search_term, buf.scroll_offset)


def _goto_match(state, match):
    if match is None:
        state.status = "Pattern not found: %s" % state.search_term
        return
    scroll_to(state, match)
    state.current_match = match_rank(state.buffer, state.search_term, match)


def start_search(state, term):
    term = term.rstrip()
    if not term:
        return
    state.search_term = term
    state.search_match_count = count_matches(state.buffer, term)
    _goto_match(state, find_match(state.buffer, term, 0, 1))


def step_match(state, direction):
    if not state.search_term:
        return
    buf = state.buffer
    _goto_match(state, find_match(buf, state.search_term, buf.scroll_offset + direction, direction))


# =============================================================================
# COPY MODE AND BUFFER ACTIONS
# =============================================================================

def enter_copy_mode(state):
    state.selection.begin(state.buffer.scroll_offset)


def cancel_copy(state):
    state.selection.finish()


def commit_copy(state, sink):
    lines = state.selection.selected_lines(state.buffer)
    state.selection.finish()
    sink.send("\n".join(lines) + "\n")
    state.status = "Copied %d line%s" % (len(lines), "" if len(lines) == 1 else "s")


def add_buffer(state, buffer):
    state.store.add(buffer)
    refresh_search(state)


def close_buffer(state):
    closed = state.store.close()
    log.info("closed %s", closed.label)
    refresh_search(state)


def switch_buffer(state, step):
    if state.copy_mode:
        return
    state.store.switch(step)
    refresh_search(state)


def reload_buffer(state, sources):
    buf = state.store.reload(sources, config=state.config)
    refresh_search(state)
    state.status = "Reloaded %s" % buf.name


class Services:
    """Collaborators the key handlers hand work off to."""

    def __init__(self, sources=None, sink=None, prompt=None, pick_file=None):
        self.sources = sources if sources is not None else default_sources()
        self.sink = sink if sink is not None else ClipboardSink()
        self.prompt = prompt or (lambda label: None)
        self.pick_file = pick_file or (lambda: None)


def open_from_key(state, key, services):
    """Ask the collaborators for a new buffer and make it current."""
    if key in OPEN_FILE:
        path = services.pick_file()
        if path:
            add_buffer(state, open_file(services.sources, path, state.config))
    elif key in OPEN_URL:
        url = services.prompt("URL: ")
        if url and url.strip():
            add_buffer(state, open_url(services.sources, url.strip(), state.config))
    elif key in OPEN_SQL:
        text = services.prompt("SQL (database query): ")
        if text and text.strip():
            database, _, query = text.strip().partition(" ")
            if not query.strip():
                state.status = "Usage: <database> <query>"
            else:
                add_buffer(state, open_sql(services.sources, database, query.strip(),
                                           state.config))


def handle_key(state, key, rows, cols, services):
    """Apply one key to the state. Returns False when the viewer should quit."""
    buf = state.buffer
    height, gutter, width = text_area(state, rows, cols)
    state.status = ""
    try:
        if key in QUIT:
            return False

        elif key in SCROLL_DOWN:
            scroll_to(state, line_down(buf.scroll_offset, buf.line_count))
        elif key in SCROLL_UP:
            scroll_to(state, line_up(buf.scroll_offset))
        elif key in TOP:
            scroll_to(state, 0)
        elif key in BOTTOM:
            scroll_to(state, pgend(buf.line_count, height))
        elif key in HALF_DOWN:
            scroll_to(state, half_down(buf.scroll_offset, buf.line_count, height))
        elif key in HALF_UP:
            scroll_to(state, half_up(buf.scroll_offset, height))

        elif key in SCROLL_LEFT:
            if not state.wrap_enabled:
                scroll_left(state)
        elif key in SCROLL_RIGHT:
            if not state.wrap_enabled:
                scroll_right(state)
        elif key in LINE_START:
            if not state.wrap_enabled:
                state.horiz_scroll_offset = 0
        elif key in LINE_END:
            if not state.wrap_enabled:
                state.horiz_scroll_offset = line_end_offset(visible_lines(state, rows), width)

        elif key in SEARCH:
            term = services.prompt("Search: ")
            if term:
                start_search(state, term)
        elif key in NEXT_MATCH:
            step_match(state, 1)
        elif key in PREV_MATCH:
            step_match(state, -1)

        elif key in COPY_MODE:
            enter_copy_mode(state)
        elif key in COPY_COMMIT:
            if state.copy_mode:
                commit_copy(state, services.sink)
        elif key in CANCEL:
            cancel_copy(state)

        elif key in LINE_NUMBERS:
            state.show_line_numbers = not state.show_line_numbers
        elif key in WRAP:
            set_wrap(state, not state.wrap_enabled)

        elif key in NEXT_BUFFER:
            switch_buffer(state, 1)
        elif key in PREV_BUFFER:
            switch_buffer(state, -1)
        elif key in CLOSE_BUFFER:
            if not state.copy_mode:
                close_buffer(state)
        elif key in RELOAD:
            if not state.copy_mode:
                reload_buffer(state, services.sources)

        elif key in OPEN_FILE | OPEN_URL | OPEN_SQL:
            # a new buffer would take over the selection of the current one
            if not state.copy_mode:
                open_from_key(state, key, services)
    except PeekError as e:
        log.info("%s", e)
        state.status = str(e)
    return True


# =============================================================================
# SCREEN
# =============================================================================

def tabbar_text(state):
    """(text, start, end) of the tab bar; start/end mark the current tab."""
    text = " "
    start = end = 0
    for i, buf in enumerate(state.store.buffers):
        if i == state.store.current_index:
            start = len(text)
        text += " %s " % buf.name
        if i == state.store.current_index:
            end = len(text)
        text += "|"
    return text, start, end


def status_text(state):
    """(left, right) halves of the status bar."""
    buf = state.buffer
    percent = buf.scroll_offset * 100 // buf.line_count if buf.line_count else 0
    left = " %s | %s | %d%% | %d/%d lines | %s" % (
        "COPY" if state.copy_mode else "NORMAL",
        buf.name, percent, buf.scroll_offset + 1, buf.line_count,
        language_name(buf.lang))
    if buf.truncated:
        left += " (truncated)"
    if state.copy_mode:
        lo, hi = state.selection.bounds()
        left += " | sel %d-%d" % (lo + 1, hi + 1)
    right = ""
    if state.search_term:
        right = 'Search: "%s" [%d/%d] ' % (
            state.search_term, state.current_match + 1, state.search_match_count)
    return left, right


def _addstr(win, y, x, text, attr=0):
    """addstr clipped to the window; curses.error at the edges is expected."""
    rows, cols = win.getmaxyx()
    if y < 0 or y >= rows or x >= cols or not text:
        return
    try:
        win.addstr(y, x, text[:cols - x], attr)
    except curses.error:
        pass


def _cursor(visible):
    try:
        curses.curs_set(visible)
    except curses.error:
        pass


def init_colors():
    """Create colour pairs; returns token/chrome name -> attribute."""
    colors = {}
    try:
        curses.start_color()
        curses.use_default_colors()
        pair = 1
        for token, fg in STYLE_COLORS.items():
            curses.init_pair(pair, fg, -1)
            colors[token] = curses.color_pair(pair)
            pair += 1
        for name, (fg, bg) in CHROME_COLORS.items():
            curses.init_pair(pair, fg, bg)
            colors[name] = curses.color_pair(pair)
            pair += 1
    except curses.error:
        log.debug("no colour support")
        return {}
    return colors


def draw_row(win, y, row, colors):
    x = 0
    if row.prefix:
        _addstr(win, y, 0, row.prefix, colors.get("linenr", curses.A_DIM))
        x = len(row.prefix)
    select = colors.get("select", curses.A_REVERSE) if row.selected else 0
    if row.selected:
        _addstr(win, y, x, row.text or " ", select)
    for span in row.spans:
        attr = select or _token_lookup(colors, span.style, 0)
        if span.bold:
            attr |= curses.A_BOLD
        _addstr(win, y, x + span.start, row.text[span.start:span.end], attr)


def draw(stdscr, state, colors):
    rows, cols = stdscr.getmaxyx()
    stdscr.erase()

    tabbar = colors.get("tabbar", curses.A_REVERSE)
    status = colors.get("status", curses.A_REVERSE)

    text, start, end = tabbar_text(state)
    _addstr(stdscr, 0, 0, text.ljust(cols), tabbar)
    _addstr(stdscr, 0, start, text[start:end], tabbar | curses.A_REVERSE | curses.A_BOLD)
    counter = " [%d/%d] " % (state.store.current_index + 1, state.store.buffer_count)
    _addstr(stdscr, 0, max(0, cols - len(counter)), counter, tabbar)

    for y, row in enumerate(render_plan(state, rows, cols), 1):
        draw_row(stdscr, y, row, colors)

    left, right = status_text(state)
    _addstr(stdscr, rows - 2, 0, left.ljust(cols), status | curses.A_BOLD)
    if right:
        _addstr(stdscr, rows - 2, max(len(left) + 1, cols - len(right) - 1), right,
                status | curses.A_BOLD)

    if state.status:
        _addstr(stdscr, rows - 1, 1, state.status, curses.A_BOLD)
    else:
        _addstr(stdscr, rows - 1, 1, HELP_LINE)
    stdscr.refresh()


def prompt_line(stdscr, label):
    """Read a line on the bottom row. ESC or a resize cancels (None)."""
    rows, cols = stdscr.getmaxyx()
    win = curses.newwin(1, cols, rows - 1, 0)
    win.keypad(True)
    _cursor(1)
    text = ""
    try:
        while True:
            room = cols - len(label) - 1
            shown = text if len(text) < room else "..." + text[-max(room - 4, 1):]
            win.erase()
            _addstr(win, 0, 0, label, curses.A_REVERSE)
            _addstr(win, 0, len(label), shown)
            win.refresh()

            ipt = win.get_wch()
            code = ord(ipt) if isinstance(ipt, str) else ipt
            if code in {10, 13, curses.KEY_ENTER}:
                return text
            elif code == 27 or code == curses.KEY_RESIZE:
                return None
            elif code in {8, 127, curses.KEY_BACKSPACE}:
                text = text[:-1]
            elif isinstance(ipt, str) and ipt.isprintable():
                text += ipt
    finally:
        _cursor(0)


def fzf_pick(stdscr):
    """Let fzf pick a file under the working directory."""
    if shutil.which("fzf") is None:
        raise LoadFailure("fzf not found")
    cmd = ("find %s -type f 2>/dev/null | "
           "fzf --prompt='Open File> ' --height=40%% --reverse" % shlex.quote(os.getcwd()))
    curses.def_prog_mode()
    curses.endwin()
    try:
        proc = subprocess.run(cmd, shell=True, stdout=subprocess.PIPE)
    finally:
        curses.reset_prog_mode()
        stdscr.refresh()
    path = proc.stdout.decode("utf-8", errors="replace").strip()
    return path or None


def viewer(stdscr, state, sources):
    stdscr.keypad(True)
    _cursor(0)
    colors = init_colors()
    services = Services(
        sources=sources,
        sink=ClipboardSink(),
        prompt=lambda label: prompt_line(stdscr, label),
        pick_file=lambda: fzf_pick(stdscr),
    )
    running = True
    while running:
        draw(stdscr, state, colors)
        key = stdscr.getch()
        if key == curses.KEY_RESIZE:
            continue
        rows, cols = stdscr.getmaxyx()
        running = handle_key(state, key, rows, cols, services)


# =============================================================================
# COMMAND LINE
# =============================================================================

def load_arguments(state, sources, args):
    """Load every positional argument as a buffer.

    Failures are reported on stderr and skipped. Returns True if stdin was
    consumed.
    """
    stdin_used = False
    i = 0
    while i < len(args):
        arg = args[i]
        i += 1
        try:
            if arg == "-m":
                if i >= len(args):
                    print("peek: -m requires a command string", file=sys.stderr)
                    break
                command = args[i]
                i += 1
                add_buffer(state, open_command(sources, command, state.config))
            elif arg == "-":
                stdin_used = True
                add_buffer(state, open_stdin(sources, state.config))
            elif is_man_command(arg):
                add_buffer(state, open_command(sources, arg, state.config))
            else:
                add_buffer(state, open_file(sources, arg, state.config))
        except LoadFailure as e:
            log.warning("%s", e)
            print("peek: %s" % e, file=sys.stderr)
        except BufferLimitReached as e:
            log.warning("%s", e)
            print("peek: %s" % e, file=sys.stderr)
            break
    if state.store.buffer_count:
        state.store.current_index = 0
        refresh_search(state)
    return stdin_used


def attach_terminal(stdin_used):
    """Point fd 0 at the controlling terminal when stdin is not one."""
    if stdin_used or not sys.stdin.isatty():
        try:
            fd = os.open("/dev/tty", os.O_RDONLY)
        except OSError as e:
            raise TerminalInitFailure(
                "Failed to open /dev/tty for input: %s" % e.strerror) from e
        os.dup2(fd, 0)
        os.close(fd)
    if not sys.stdout.isatty():
        raise TerminalInitFailure("stdout is not a terminal")


def main():

    args = []
    if sys.argv[1:] != []:
        args += sys.argv[1:]

    if len({"-h", "--help"} & set(args)) != 0:
        hlp = __doc__.rstrip()
        if "-h" in args:
            hlp = re.search("(\n|.)*(?=\n\nKey)", hlp).group()
        print(hlp)
        sys.exit()

    if len({"-v", "--version", "-V"} & set(args)) != 0:
        print(__version__)
        print(__license__, "License")
        print("Copyright (c) 2026", __author__)
        sys.exit()

    debug = "--debug" in args
    no_wrap = "--no-wrap" in args
    args = [a for a in args if a not in {"--debug", "--no-wrap"}]

    setup_logging(debug)
    config = load_config()
    if no_wrap:
        config["wrap"] = False

    if args == []:
        if sys.stdin.isatty():
            print(re.search("(\n|.)*(?=\n\nOptions)", __doc__).group(), file=sys.stderr)
            sys.exit(1)
        args = ["-"]

    sources = default_sources()
    state = ViewerState(config=config)
    stdin_used = load_arguments(state, sources, args)

    if state.store.buffer_count == 0:
        sys.exit("peek: failed to load any files/stdin")

    termc, termr = shutil.get_terminal_size()
    if termc < MIN_COLS or termr < MIN_ROWS:
        sys.exit("ERR: Screen was too small (min %dcols x %drows)." % (MIN_COLS, MIN_ROWS))

    os.environ.setdefault("ESCDELAY", "25")
    try:
        attach_terminal(stdin_used)
        curses.wrapper(viewer, state, sources)
    except TerminalInitFailure as e:
        log.error("%s", e)
        sys.exit("peek: %s" % e)
    except curses.error as e:
        log.error("terminal initialization failed: %s", e)
        sys.exit("peek: terminal initialization failed: %s" % e)
    finally:
        for buf in state.store.buffers:
            buf.release()


if __name__ == "__main__":
    main()
