#!/usr/bin/env python3
"""
Network Reconstruction Script.

Densifies a sparse network before second-order training: vertices with
few neighbours get their strongest 2-hop neighbours as extra edges.

Usage:
    python scripts/reconstruct.py --train net.txt --output net_dense.txt \
        --depth 2 --threshold 1000
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import load_config
from line_embedding.data import read_edge_list, reconstruct


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Reconstruct a sparse network')

    parser.add_argument('--train', type=str, required=True, help='Input edge-list file')
    parser.add_argument('--output', type=str, required=True, help='Output edge-list file')
    parser.add_argument(
        '--config', type=str, default=None,
        help='Path to configuration file (default: config/default.yaml)'
    )
    parser.add_argument(
        '--depth', type=int, default=None,
        help='Maximum BFS depth (overrides config)'
    )
    parser.add_argument(
        '--threshold', type=int, default=None,
        help='Neighbours kept per vertex (overrides config)'
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Reconstruct the network and write it as an edge list."""
    args = parse_args(argv)

    recon_config = load_config(args.config).get('reconstruct') or {}
    max_depth = args.depth if args.depth is not None else recon_config.get('max_depth', 2)
    max_k = args.threshold if args.threshold is not None else recon_config.get('max_k', 10)

    edges = reconstruct(read_edge_list(args.train), max_depth=max_depth, max_k=max_k)

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, 'w') as f:
        for source, target, weight in edges:
            f.write(f"{source}\t{target}\t{weight:.6f}\n")

    print(f"Number of edges in reconstructed network: {len(edges):,}")


if __name__ == '__main__':
    main()
