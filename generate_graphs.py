import argparse
from pathlib import Path

import matplotlib.pyplot as plt

from replacement import ALGORITHMS
from simulator import VirtualMemorySimulator

DEFAULT_FRAMES = [8, 16, 32, 64]
METRICS = ['page_faults', 'dirty_writes']
TITLES = ['Page Faults', 'Writes to Disk']


def collect_results(traces, frame_counts, algorithms=ALGORITHMS):
    rows = []
    for trace in traces:
        for algorithm in algorithms:
            for num_frames in frame_counts:
                simulator = VirtualMemorySimulator(algorithm=algorithm, num_frames=num_frames)
                stats = simulator.run_simulation(trace)
                rows.append({
                    'trace': Path(trace).name,
                    'algorithm': algorithm,
                    'frames': num_frames,
                    'memory_accesses': stats.memory_accesses,
                    'page_faults': stats.page_faults,
                    'dirty_writes': stats.dirty_writes,
                    'evictions': stats.evictions,
                    'fault_rate': stats.page_fault_rate,
                })
    return rows


def print_summary(rows):
    print(f"{'Trace':<16} {'Algorithm':<10} {'Frames':<8} {'Page Faults':<13} "
          f"{'Dirty Writes':<13} {'Evictions':<11} {'Fault Rate':<10}")
    print("-" * 84)
    for r in rows:
        print(f"{r['trace']:<16} {r['algorithm']:<10} {r['frames']:<8} "
              f"{r['page_faults']:<13} {r['dirty_writes']:<13} {r['evictions']:<11} {r['fault_rate']:<10.4f}")


def plot_results(rows, outdir):
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    written = []

    for trace in sorted({r['trace'] for r in rows}):
        data = [r for r in rows if r['trace'] == trace]
        fig, axes = plt.subplots(1, len(METRICS), figsize=(12, 5))
        fig.suptitle(f'Page Replacement Algorithm Comparison: {trace}', fontsize=14, fontweight='bold')

        for ax, metric, title in zip(axes, METRICS, TITLES):
            for algorithm in sorted({r['algorithm'] for r in data}):
                points = sorted((r['frames'], r[metric]) for r in data if r['algorithm'] == algorithm)
                xs = [p[0] for p in points]
                ys = [p[1] for p in points]
                ax.plot(xs, ys, marker='o', label=algorithm)
            ax.set_xscale('log', base=2)
            ax.set_xlabel('Frames')
            ax.set_title(title)
            ax.grid(True, which='both', linestyle='--', alpha=0.3)
            ax.legend()

        plt.tight_layout()
        path = outdir / f'{trace}_comparison.png'
        fig.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        written.append(path)
        print(f"Graph saved as '{path}'")

    return written


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compare page replacement algorithms over frame counts.")
    parser.add_argument('traces', nargs='+', help="trace files to replay")
    parser.add_argument('--frames', default=','.join(map(str, DEFAULT_FRAMES)),
                        help="comma-separated frame counts")
    parser.add_argument('--algos', default=','.join(ALGORITHMS),
                        help="comma-separated algorithms: opt,clock,lru")
    parser.add_argument('--outdir', default='results', help="directory for the PNG charts")
    args = parser.parse_args(argv)

    frame_counts = [int(x) for x in args.frames.split(',') if x.strip()]
    algorithms = [s.strip() for s in args.algos.split(',') if s.strip()]
    unknown = [a for a in algorithms if a not in ALGORITHMS]
    if unknown:
        parser.error(f"unknown algorithm(s): {', '.join(unknown)}")

    print("Running simulations...")
    rows = collect_results(args.traces, frame_counts, algorithms)
    print_summary(rows)
    plot_results(rows, args.outdir)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
