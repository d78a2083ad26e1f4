#!/usr/bin/env python3
"""
Quick performance check for the search tiers.
Shows how much alpha-beta pruning saves and how long each tier takes.
"""

import random
import time

from tictactoe.board import Board
from tictactoe.search import AlphaBetaStrategy, MinimaxStrategy, SearchEngine
from tictactoe.types import CellState, Difficulty


def benchmark_pruning():
    """Compare node counts of plain minimax and alpha-beta from one opening"""
    print("Benchmarking Alpha-Beta Pruning")
    print("-" * 40)

    board = Board.from_rows(["X..", "...", "..."])

    plain = MinimaxStrategy(prune=False)
    start_time = time.time()
    plain_move = plain.choose(board, CellState.O)
    plain_time = time.time() - start_time

    pruned = AlphaBetaStrategy()
    start_time = time.time()
    pruned_move = pruned.choose(board, CellState.O)
    pruned_time = time.time() - start_time

    print(f"Plain minimax: {plain.nodes} nodes in {plain_time:.3f}s -> {plain_move}")
    print(f"Alpha-beta:    {pruned.nodes} nodes in {pruned_time:.3f}s -> {pruned_move}")
    print(f"Node savings:  {plain.nodes / max(1, pruned.nodes):.1f}x fewer")


def benchmark_difficulties(num_moves=20):
    """Average move time per difficulty on the empty board"""
    print("\nBenchmarking Difficulty Tiers")
    print("-" * 40)

    for difficulty in Difficulty:
        engine = SearchEngine(difficulty, rng=random.Random(0))
        start_time = time.time()
        for _ in range(num_moves):
            engine.choose_move(Board(), CellState.X)
        elapsed = (time.time() - start_time) / num_moves
        print(f"{difficulty.value:<7} {elapsed * 1000:8.2f} ms/move ({engine.last_stats.strategy})")


if __name__ == "__main__":
    benchmark_pruning()
    benchmark_difficulties()
