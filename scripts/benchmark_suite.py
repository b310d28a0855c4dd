import sys
import os
import time

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from perfect_maze.core.board import make_board
from perfect_maze.algo.dfs import RecursiveBacktracker
from perfect_maze.core.analysis import calculate_stats

def benchmark_size(width: int, height: int):
    print(f"\n--- Benchmarking {width}x{height} ({width*height/1e6:.2f}M cells) ---")

    start_time = time.time()
    board = make_board((width, height))
    mem_mb = (width * height) / (1024 * 1024) # 1 byte per cell
    print(f"Board Init: {time.time() - start_time:.4f}s")
    print(f"Memory (Wall Data): ~{mem_mb:.2f} MB")

    print("Generating...")
    algo = RecursiveBacktracker(board, seed=42)

    gen_start = time.time()
    algo.run_all()
    gen_time = time.time() - gen_start

    print(f"Generation Time: {gen_time:.4f}s")
    print(f"Speed: {(width*height)/gen_time:,.0f} cells/sec")

    stats = calculate_stats(board)
    print(f"Dead Ends: {stats['dead_ends']} ({stats['dead_end_percent']:.1f}%)")

def run_suite():
    sizes = [
        (100, 100),
        (500, 500),
        (1000, 1000),      # 1M
    ]

    for w, h in sizes:
        benchmark_size(w, h)

if __name__ == "__main__":
    run_suite()
