"""
Embedding File I/O Module.

LINE embedding files start with a header line ``"<num_vertices> <dim>"``.
Each following record is the vertex name and a space, then the vector,
then a newline. In text mode the vector is ``dim`` values printed with six
decimals, each followed by a space. In binary mode it is ``dim`` raw
little-endian float32 values.
"""

from pathlib import Path
from typing import List, Union

import numpy as np

from ..exceptions import ConfigurationError
from .embeddings import Embeddings


def write_embeddings(
    path: Union[str, Path],
    embeddings: Embeddings,
    binary: bool = False
) -> None:
    """
    Write embeddings to a LINE embedding file.

    Args:
        path: Output path
        embeddings: Embeddings to write
        binary: Write raw float32 vectors instead of text
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    vectors = embeddings.vectors.numpy().astype('<f4', copy=False)

    with open(path, 'wb') as f:
        f.write(f"{len(embeddings)} {embeddings.dim}\n".encode('utf-8'))
        for name, row in zip(embeddings.names, vectors):
            f.write(f"{name} ".encode('utf-8'))
            if binary:
                f.write(row.tobytes())
            else:
                f.write("".join(f"{value:f} " for value in row.tolist()).encode('utf-8'))
            f.write(b"\n")


def read_embeddings(path: Union[str, Path], binary: bool = False) -> Embeddings:
    """
    Read a LINE embedding file.

    Args:
        path: Input path
        binary: Whether vectors are stored as raw float32

    Returns:
        Embeddings in file order

    Raises:
        ConfigurationError: If the file is truncated or malformed
    """
    path = Path(path)
    with open(path, 'rb') as f:
        header = f.readline().split()
        if len(header) != 2:
            raise ConfigurationError(f"{path}: invalid header, expected '<num_vertices> <dim>'")
        num_vertices, dim = int(header[0]), int(header[1])

        names: List[str] = []
        vectors = np.zeros((num_vertices, dim), dtype=np.float32)

        for i in range(num_vertices):
            if binary:
                name = _read_name(f, path)
                raw = f.read(4 * dim)
                if len(raw) != 4 * dim:
                    raise ConfigurationError(f"{path}: truncated vector for {name!r}")
                vectors[i] = np.frombuffer(raw, dtype='<f4')
                f.readline()
            else:
                parts = f.readline().decode('utf-8').split()
                if len(parts) != dim + 1:
                    raise ConfigurationError(
                        f"{path}: record {i + 1} has {len(parts) - 1} values, expected {dim}"
                    )
                name = parts[0]
                vectors[i] = [float(value) for value in parts[1:]]
            names.append(name)

    return Embeddings(names, vectors)


def _read_name(f, path: Path) -> str:
    """Read bytes up to the space that ends a vertex name."""
    buf = bytearray()
    while True:
        ch = f.read(1)
        if not ch:
            raise ConfigurationError(f"{path}: unexpected end of file")
        if ch == b' ':
            return buf.decode('utf-8')
        buf += ch
