ROOT_ENTRIES = 512   # 9 root bits
LEAF_ENTRIES = 1024  # 10 leaf bits
PTE_SIZE = 4         # bytes, also used for root pointers


class PageTableEntry:
    def __init__(self):
        self.valid = False
        self.dirty = False
        self.referenced = False

    def __repr__(self):
        flags = ''.join(flag if on else '-' for flag, on in
                        (('V', self.valid), ('D', self.dirty), ('R', self.referenced)))
        return f"PageTableEntry({flags})"


class LeafPageTable:
    def __init__(self):
        self.entries = [PageTableEntry() for _ in range(LEAF_ENTRIES)]

    def get_entry(self, leaf_index):
        return self.entries[leaf_index]


class PageTable:
    """
    Two-level page table. The root holds ROOT_ENTRIES slots, each empty until
    the first access under that root index materializes a leaf table. Leaf
    tables are never freed.
    """

    def __init__(self):
        self.root = [None] * ROOT_ENTRIES

    def get_or_create_entry(self, root_index, leaf_index):
        leaf = self.root[root_index]
        if leaf is None:
            leaf = LeafPageTable()
            self.root[root_index] = leaf
        return leaf.get_entry(leaf_index)

    def leaf_count(self):
        # Leaf tables actually materialized so far
        return sum(1 for leaf in self.root if leaf is not None)


def table_size_bytes():
    # Reported as if every leaf were populated, not the sparse footprint
    root_size = PTE_SIZE * ROOT_ENTRIES
    leaf_size = PTE_SIZE * LEAF_ENTRIES
    return root_size + ROOT_ENTRIES * leaf_size
