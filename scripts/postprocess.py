#!/usr/bin/env python3
"""
Embedding Post-processing Script.

Normalises embedding files and concatenates first- and second-order
embeddings.

Usage:
    python scripts/postprocess.py normalize --input vec_1st.txt --output vec_1st_norm.txt
    python scripts/postprocess.py concatenate --input1 vec_1st_norm.txt \
        --input2 vec_2nd_norm.txt --output vec_all.txt
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from line_embedding.utils import concatenate, normalize, read_embeddings, write_embeddings


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Post-process LINE embeddings')
    subparsers = parser.add_subparsers(dest='command', required=True)

    norm_parser = subparsers.add_parser('normalize', help='L2-normalise every vector')
    norm_parser.add_argument('--input', type=str, required=True, help='Input embedding file')
    norm_parser.add_argument('--output', type=str, required=True, help='Output embedding file')

    cat_parser = subparsers.add_parser('concatenate', help='Concatenate two embedding files')
    cat_parser.add_argument('--input1', type=str, required=True, help='First-order embeddings')
    cat_parser.add_argument('--input2', type=str, required=True, help='Second-order embeddings')
    cat_parser.add_argument('--output', type=str, required=True, help='Output embedding file')

    parser.add_argument('--binary', action='store_true', help='Files are in binary mode')

    return parser.parse_args(argv)


def main(argv=None):
    """Run the selected post-processing step."""
    args = parse_args(argv)

    if args.command == 'normalize':
        result = normalize(read_embeddings(args.input, binary=args.binary))
    else:
        result = concatenate(
            read_embeddings(args.input1, binary=args.binary),
            read_embeddings(args.input2, binary=args.binary)
        )

    write_embeddings(args.output, result, binary=args.binary)
    print(f"Wrote {len(result):,} vectors of dimension {result.dim} to {args.output}")


if __name__ == '__main__':
    main()
