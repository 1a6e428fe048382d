from collections import OrderedDict, deque

ALGORITHMS = ('opt', 'clock', 'lru')


class ReplacementPolicy:
    name = None

    def __init__(self, memory):
        self.memory = memory

    def select_victim(self):
        raise NotImplementedError

    def record_load(self, frame):
        pass

    def record_hit(self, page_number):
        pass

    def record_access(self, page_number, position):
        pass


class LRUPolicy(ReplacementPolicy):
    name = 'lru'

    def __init__(self, memory):
        super().__init__(memory)
        # frame index -> Frame, least recently used first
        self.recency = OrderedDict()

    def _touch(self, frame):
        self.recency.pop(frame.index, None)
        self.recency[frame.index] = frame

    def select_victim(self):
        _, frame = self.recency.popitem(last=False)
        return frame

    def record_load(self, frame):
        self._touch(frame)

    def record_hit(self, page_number):
        self._touch(self.memory.find(page_number))


class ClockPolicy(ReplacementPolicy):
    name = 'clock'

    def __init__(self, memory):
        super().__init__(memory)
        self.clock_hand = 0

    def _advance(self):
        self.clock_hand = (self.clock_hand + 1) % self.memory.num_frames

    def select_victim(self):
        # Second chance: clear set reference bits until one is found clear
        while True:
            frame = self.memory.frames[self.clock_hand]
            self._advance()
            if frame.entry.referenced:
                frame.entry.referenced = False
            else:
                return frame


class AccessOracle:
    """
    Future knowledge for OPT: for every page number, the queue of trace
    positions at which it will be referenced. Positions are consumed as the
    simulation passes them.
    """

    def __init__(self, page_numbers=()):
        self.future_accesses = {}
        for position, page_number in enumerate(page_numbers):
            self.future_accesses.setdefault(page_number, deque()).append(position)

    def next_access(self, page_number):
        accesses = self.future_accesses.get(page_number)
        if not accesses:
            return None
        return accesses[0]

    def consume(self, page_number, position):
        accesses = self.future_accesses.get(page_number)
        if accesses and accesses[0] == position:
            accesses.popleft()
            return True
        return False

    def __len__(self):
        return sum(len(accesses) for accesses in self.future_accesses.values())


class OptimalPolicy(ReplacementPolicy):
    name = 'opt'

    def __init__(self, memory, oracle):
        super().__init__(memory)
        self.oracle = oracle

    def select_victim(self):
        victim = None
        farthest = -1
        for frame in self.memory.frames:
            next_use = self.oracle.next_access(frame.page_number)
            # Never referenced again, nothing can beat it
            if next_use is None:
                return frame
            if next_use > farthest:
                farthest = next_use
                victim = frame
        return victim

    def record_access(self, page_number, position):
        self.oracle.consume(page_number, position)


def make_policy(algorithm, memory, oracle=None):
    if algorithm == 'lru':
        return LRUPolicy(memory)
    elif algorithm == 'clock':
        return ClockPolicy(memory)
    elif algorithm == 'opt':
        if oracle is None:
            raise ValueError("OPT algorithm requires an access oracle")
        return OptimalPolicy(memory, oracle)
    else:
        raise ValueError(f"Unknown algorithm: {algorithm}")
