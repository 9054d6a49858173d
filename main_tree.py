"""
Main entry point for growing a fractal tree.

Loads the configuration (defaults when the file is missing), grows the tree
until every attractor is reached or the iteration limit is hit, and prints a
short summary of the result.
"""

import argparse

from fractal_tree import FractalTree, load_config
from fractal_tree.profiling import profiler


def parse_args():
    parser = argparse.ArgumentParser(description='Grow a fractal tree with space colonization')
    parser.add_argument('--config', default='tree_config.json', help='Path to JSON config')
    parser.add_argument('--seed', type=int, default=None, help='Override the random seed')
    parser.add_argument('--attractors', type=int, default=None, help='Override the attractor count')
    return parser.parse_args()


def main():
    args = parse_args()
    config = load_config(args.config)
    if args.seed is not None:
        config.random_seed = args.seed
    if args.attractors is not None:
        config.num_attractors = args.attractors

    print("Growing fractal tree")
    print(f"  Attractors: {config.num_attractors} ({config.attractor_placement})")
    print(f"  rmin: {config.rmin}, rmax: {config.rmax}")
    print()

    tree = FractalTree.from_config(config)
    tree.grow_to_completion()

    tips = tree.tips
    max_depth = max(tree.depth(node) for node in tips)
    print(f"\nGenerated {len(tree.nodes)} nodes in {tree.iteration} iterations")
    print(f"  Tips: {len(tips)}")
    print(f"  Max depth: {max_depth}")
    print(f"  Completed: {tree.is_completed()}")

    if config.profile:
        profiler.print_stats()


if __name__ == '__main__':
    main()
