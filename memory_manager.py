from page_table import ROOT_ENTRIES, table_size_bytes


class Frame:
    def __init__(self, index):
        self.index = index
        self.page_number = None
        self.entry = None
        self.free = True

    def __repr__(self):
        if self.free:
            return f"Frame({self.index}, free)"
        return f"Frame({self.index}, page={self.page_number:#x})"


class PhysicalMemory:
    def __init__(self, num_frames=32):
        if num_frames < 1:
            raise ValueError(f"Number of frames must be positive, got {num_frames}")
        self.num_frames = num_frames
        self.frames = [Frame(i) for i in range(num_frames)]
        # page_number -> occupied Frame
        self.resident = {}

    def find(self, page_number):
        return self.resident.get(page_number)

    def find_free_frame(self):
        for frame in self.frames:
            if frame.free:
                return frame
        return None

    def allocate(self, entry, page_number):
        frame = self.find_free_frame()
        if frame is None:
            return None
        if page_number in self.resident:
            raise ValueError(f"Page {page_number:#x} is already resident in frame "
                             f"{self.resident[page_number].index}")
        frame.page_number = page_number
        frame.entry = entry
        frame.free = False
        self.resident[page_number] = frame
        return frame

    def evict(self, frame):
        """
        Drop the page held by frame. Returns True when the page was dirty and
        has to be written back to disk.
        """
        entry = frame.entry
        was_dirty = entry.dirty

        entry.valid = False
        entry.dirty = False

        del self.resident[frame.page_number]
        frame.page_number = None
        frame.entry = None
        frame.free = True
        return was_dirty

    def occupied_count(self):
        return len(self.resident)

    def is_full(self):
        return self.find_free_frame() is None


class Statistics:
    def __init__(self):
        self.memory_accesses = 0
        self.page_faults = 0
        self.dirty_writes = 0
        self.clean_evictions = 0

    def record_access(self, kind):
        # A modify is a load followed by a store
        self.memory_accesses += 2 if kind == 'M' else 1

    def record_page_fault(self):
        self.page_faults += 1

    def record_eviction(self, is_dirty):
        if is_dirty:
            self.dirty_writes += 1
        else:
            self.clean_evictions += 1

    @property
    def evictions(self):
        return self.dirty_writes + self.clean_evictions

    @property
    def page_fault_rate(self):
        if self.memory_accesses == 0:
            return 0.0
        return self.page_faults / self.memory_accesses

    def report(self, algorithm, num_frames):
        return (f"Algorithm: {algorithm}\n"
                f"Number of frames: {num_frames}\n"
                f"Total memory accesses: {self.memory_accesses}\n"
                f"Total page faults: {self.page_faults}\n"
                f"Total writes to disk: {self.dirty_writes}\n"
                f"Number of page table leaves: {ROOT_ENTRIES}\n"
                f"Total size of page table: {table_size_bytes()} bytes")
