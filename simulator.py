import argparse
import sys

from memory_manager import PhysicalMemory, Statistics
from page_table import PageTable
from replacement import ALGORITHMS, AccessOracle, make_policy
from trace_reader import TraceFormatError, read_trace


class VirtualMemorySimulator:

    def __init__(self, algorithm='lru', num_frames=32, debug=False):
        if algorithm not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm: {algorithm}")
        self.algorithm = algorithm
        self.num_frames = num_frames
        self.debug = debug
        self.reset()

    def reset(self):
        self.page_table = PageTable()
        self.physical_memory = PhysicalMemory(num_frames=self.num_frames)
        self.stats = Statistics()
        self.policy = None
        self.position = 0

    def prepare(self, events=()):
        # Every run starts from empty memory; OPT also needs the whole trace up front
        self.reset()
        oracle = None
        if self.algorithm == 'opt':
            oracle = AccessOracle(event.page_number for event in events)
        self.policy = make_policy(self.algorithm, self.physical_memory, oracle)

    def handle_memory_reference(self, event):
        if self.policy is None:
            if self.algorithm == 'opt':
                raise ValueError("OPT algorithm requires the trace to be prepared first")
            self.prepare()

        position = self.position
        self.position += 1
        entry = self.page_table.get_or_create_entry(event.root_index, event.leaf_index)

        if entry.valid:
            self.policy.record_hit(event.page_number)
            self.trace_event(position, event, "HIT")
        else:
            self.handle_page_fault(position, event, entry)

        entry.valid = True
        entry.referenced = True
        self.policy.record_access(event.page_number, position)

        self.stats.record_access(event.kind)
        if event.is_write():
            entry.dirty = True

    def handle_page_fault(self, position, event, entry):
        self.stats.record_page_fault()

        frame = self.physical_memory.allocate(entry, event.page_number)
        if frame is None:
            victim = self.policy.select_victim()
            evicted_page = victim.page_number
            is_dirty = self.physical_memory.evict(victim)
            self.stats.record_eviction(is_dirty)
            self.trace_event(position, event,
                             f"FAULT (evict {'dirty' if is_dirty else 'clean'} {evicted_page:#07x})")
            frame = self.physical_memory.allocate(entry, event.page_number)
        else:
            self.trace_event(position, event, "FAULT (no eviction)")

        self.policy.record_load(frame)
        return frame

    def trace_event(self, position, event, outcome):
        if self.debug:
            print(f"{position:>8} {event.kind} {event.address:08x} page {event.page_number:#07x}: {outcome}")

    def run(self, events):
        events = list(events)
        self.prepare(events)
        for event in events:
            self.handle_memory_reference(event)
        return self.stats

    def run_simulation(self, filename):
        # For OPT this is a full pre-scan; the trace is then streamed a second time
        self.prepare(read_trace(filename))

        for event in read_trace(filename):
            self.handle_memory_reference(event)

        return self.stats

    def report(self):
        return self.stats.report(self.algorithm, self.num_frames)


def positive_int(value):
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid frame count: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"frame count must be positive, got {number}")
    return number


def build_parser():
    parser = argparse.ArgumentParser(
        prog='vmsim',
        description="Replay a memory trace against a two-level page table and report "
                    "page faults and disk writes.")
    parser.add_argument('-n', '--numframes', dest='num_frames', type=positive_int, required=True,
                        help="number of physical frames")
    parser.add_argument('-a', '--algorithm', choices=ALGORITHMS, required=True,
                        help="page replacement algorithm")
    parser.add_argument('-d', '--debug', action='store_true',
                        help="print the outcome of every memory reference")
    parser.add_argument('tracefile', help="trace file to replay")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    simulator = VirtualMemorySimulator(algorithm=args.algorithm, num_frames=args.num_frames,
                                       debug=args.debug)
    try:
        simulator.run_simulation(args.tracefile)
    except TraceFormatError as e:
        print(f"vmsim: error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"vmsim: error: cannot read trace file {args.tracefile}: {e.strerror}", file=sys.stderr)
        return 1

    print(simulator.report())
    return 0


if __name__ == '__main__':
    sys.exit(main())
