import re

OFFSET_BITS = 13
LEAF_BITS = 10
ROOT_BITS = 9

LEAF_MASK = (1 << LEAF_BITS) - 1              # 0x3FF
PAGE_MASK = (1 << (LEAF_BITS + ROOT_BITS)) - 1  # 0x7FFFF

COMMENT_MARKER = '=='

# kind, 8 hex digits, optional ",size" suffix from lackey traces
_LINE_RE = re.compile(r'^([ILSM])([0-9A-Fa-f]{8})(?:,\d+)?$')
_WHITESPACE_RE = re.compile(r'\s+')


class TraceFormatError(ValueError):
    def __init__(self, line_number, line):
        self.line_number = line_number
        self.line = line
        super().__init__(f"Malformed trace line {line_number}: {line.rstrip()!r}")


class TraceEvent:
    def __init__(self, kind, address):
        self.kind = kind
        self.address = address
        self.page_number = (address >> OFFSET_BITS) & PAGE_MASK
        self.root_index = address >> (OFFSET_BITS + LEAF_BITS)
        self.leaf_index = (address >> OFFSET_BITS) & LEAF_MASK

    def is_write(self):
        return self.kind in ('S', 'M')

    def __repr__(self):
        return f"TraceEvent({self.kind} {self.address:08x} page={self.page_number:#x})"


def is_event_line(line):
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith(COMMENT_MARKER)


def decode_line(line, line_number=0):
    """
    Decode one trace line such as "I 0000000C" or " S 7ff000a8,4".

    Returns None for comment and blank lines. Raises TraceFormatError when the
    line is not <kind><8 hex digits>.
    """
    if not is_event_line(line):
        return None

    compact = _WHITESPACE_RE.sub('', line)
    match = _LINE_RE.match(compact)
    if match is None:
        raise TraceFormatError(line_number, line)

    kind, hex_address = match.group(1), match.group(2)
    return TraceEvent(kind, int(hex_address, 16))


def read_trace(filename):
    # Yields decoded events in trace order; non-event lines are dropped
    # Undecodable bytes become U+FFFD so the line is rejected as malformed
    with open(filename, 'r', encoding='ascii', errors='replace') as f:
        for line_number, line in enumerate(f, 1):
            event = decode_line(line, line_number)
            if event is not None:
                yield event
