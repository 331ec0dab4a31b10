"""Corpus output: file naming and writing rendered expressions."""
import os
import string
import numpy as np
from typing import Iterable, Optional

from .renderer import render_corpus
from .symbol_tree import Symbol

UUID_ALPHABET = string.digits + string.ascii_lowercase


def generate_uuid(length: int = 10, rng: Optional[np.random.Generator] = None) -> str:
    """Random identifier over 0-9a-z"""
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    if rng is None:
        rng = np.random.default_rng()
    indices = rng.integers(0, len(UUID_ALPHABET), size=length)
    return "".join(UUID_ALPHABET[i] for i in indices)


def generate_output_file_name(rng: Optional[np.random.Generator] = None) -> str:
    return f"output_{generate_uuid(10, rng)}.txt"


def write_corpus(symbols: Iterable[Symbol], path: Optional[str] = None,
                 directory: str = ".", rng: Optional[np.random.Generator] = None) -> str:
    """
    Render symbols one per line and write them to a file.

    Args:
        symbols: Trees to write
        path: Destination file; when None a fresh output_<id>.txt is created in directory
        directory: Directory for generated file names
        rng: Stream used for the generated file name

    Returns:
        Path of the written file
    """
    if path is None:
        os.makedirs(directory, exist_ok=True)
        path = os.path.join(directory, generate_output_file_name(rng))
    text = render_corpus(symbols)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)
    return path
