#!/usr/bin/env python3
"""
LINE Training Script.

This script trains LINE embeddings from an edge-list file and writes them
in the LINE embedding file format.

Usage:
    python scripts/train.py --train net.txt --output vec_2nd.txt
    python scripts/train.py --train net.txt --output vec_1st.txt --order 1 \
        --negative 5 --samples 100 --threads 8 --binary
"""

import argparse
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import apply_overrides, load_config
from line_embedding import LINEError, train_line
from line_embedding.data import read_edge_list


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Train LINE embeddings')

    parser.add_argument(
        '--train', type=str, required=True,
        help='Edge-list file, one "<u> <v> <w>" directed edge per line'
    )
    parser.add_argument(
        '--output', type=str, required=True,
        help='Output embedding file'
    )
    parser.add_argument(
        '--config', type=str, default=None,
        help='Path to configuration file (default: config/default.yaml)'
    )
    parser.add_argument(
        '--binary', action='store_true', default=None,
        help='Save embeddings in binary mode'
    )
    parser.add_argument(
        '--size', type=int, default=None,
        help='Embedding dimensionality (overrides config)'
    )
    parser.add_argument(
        '--order', type=int, default=None,
        help='Proximity order, 1 or 2 (overrides config)'
    )
    parser.add_argument(
        '--negative', type=int, default=None,
        help='Number of negative samples (overrides config)'
    )
    parser.add_argument(
        '--samples', type=float, default=None,
        help='Total number of training samples, in millions (overrides config)'
    )
    parser.add_argument(
        '--threads', type=int, default=None,
        help='Number of worker threads (overrides config)'
    )
    parser.add_argument(
        '--rho', type=float, default=None,
        help='Initial learning rate (overrides config)'
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Random seed (overrides config)'
    )
    parser.add_argument(
        '--log-dir', type=str, default=None,
        help='Directory for the training summary (overrides config)'
    )
    parser.add_argument(
        '--quiet', action='store_true',
        help='Do not print progress'
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main training function."""
    args = parse_args(argv)

    config = load_config(args.config)
    apply_overrides(config, {
        'model.dim': args.size,
        'model.order': args.order,
        'training.num_negative': args.negative,
        'training.total_samples': args.samples,
        'training.num_threads': args.threads,
        'training.learning_rate': args.rho,
        'training.seed': args.seed,
        'output.binary': args.binary,
        'paths.logs': args.log_dir,
    })

    verbose = not args.quiet
    if verbose:
        print("=" * 60)
        print("LINE Training")
        print("=" * 60)
        print(f"Input: {args.train}")

    start_time = time.time()
    try:
        embeddings = train_line(
            read_edge_list(args.train),
            config,
            verbose=verbose,
            log_dir=(config.get('paths') or {}).get('logs')
        )
    except LINEError as err:
        print(f"Error: {err}", file=sys.stderr)
        raise

    binary = bool((config.get('output') or {}).get('binary', False))
    embeddings.write(args.output, binary=binary)

    if verbose:
        print(f"\nVertices: {len(embeddings):,}  Dimension: {embeddings.dim}")
        print(f"Embeddings saved to: {args.output} ({'binary' if binary else 'text'})")
        print(f"Total time: {time.time() - start_time:.1f}s")


if __name__ == '__main__':
    main()
