"""
Parallel batch generation.

A request for many trees is cut into chunks of at most ``chunk_size`` trees.
Every chunk draws from its own random stream spawned from a single
SeedSequence, so the corpus for a fixed seed and chunk size does not depend
on how many worker processes run the chunks, and no stream is ever shared
between processes.
"""
import math
import multiprocessing
import time
import numpy as np
from typing import List, Optional, Tuple

from tqdm import tqdm

from .generator import Catalogue, OperationGenerator, check_amount, check_depth
from .logging_system import get_logger
from .symbol_tree import Operation, Symbol

DEFAULT_CHUNK_SIZE = 500


def _generate_worker(config: tuple) -> Tuple[int, List[Symbol], float]:
    """
    Worker function for multiprocessing. Builds a private generator from the
    shared read-only catalogue and the chunk's own seed sequence.
    """
    catalogue, seed_sequence, depth, amount, operations_only, chunk_id = config

    generator = OperationGenerator.from_catalogue(catalogue, rng=np.random.default_rng(seed_sequence))

    start_time = time.time()
    if operations_only:
        symbols = generator.generate_operations(depth, amount)
    else:
        symbols = generator.generate_symbols(depth, amount)
    return chunk_id, symbols, time.time() - start_time


def split_amount(amount: int, n_chunks: int) -> List[int]:
    """Chunk sizes differing by at most one, larger chunks first"""
    base, extra = divmod(amount, n_chunks)
    return [base + 1 if i < extra else base for i in range(n_chunks)]


class BatchGenerator:
    """Generates large batches of trees across worker processes"""

    def __init__(self, catalogue: Optional[Catalogue] = None, n_workers: int = 1,
                 seed: Optional[int] = None, show_progress: bool = False,
                 chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Args:
            catalogue: Weighted catalogue shared read-only by all workers.
                       Defaults to Catalogue.default().
            n_workers: Number of worker processes. 1 runs in-process.
            seed: Root seed; None draws fresh OS entropy.
            show_progress: Show a tqdm bar counting generated trees.
            chunk_size: Largest number of trees generated from one stream.
        """
        if isinstance(n_workers, bool) or not isinstance(n_workers, int) or n_workers < 1:
            raise ValueError("n_workers must be a positive integer.")
        if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size < 1:
            raise ValueError("chunk_size must be a positive integer.")
        self.catalogue = catalogue if catalogue is not None else Catalogue.default()
        self.n_workers = n_workers
        self.seed = seed
        self.show_progress = show_progress
        self.chunk_size = chunk_size
        self._seed_sequence = np.random.SeedSequence(seed)

    def generate_operations(self, depth: int, amount: int) -> List[Operation]:
        return self._generate(depth, amount, operations_only=True)

    def generate_symbols(self, depth: int, amount: int) -> List[Symbol]:
        return self._generate(depth, amount, operations_only=False)

    def _generate(self, depth: int, amount: int, operations_only: bool) -> List[Symbol]:
        check_depth(depth)
        check_amount(amount)

        logger = get_logger()
        n_chunks = max(math.ceil(amount / self.chunk_size), 1)
        n_workers = min(self.n_workers, n_chunks)
        if n_workers < self.n_workers:
            logger.warning(f"Only {n_chunks} chunk(s) of up to {self.chunk_size} expressions; "
                           f"using {n_workers} of {self.n_workers} workers")
        # Fresh child streams per call; repeated calls continue the sequence
        child_sequences = self._seed_sequence.spawn(n_chunks)

        chunk_configs = [
            (self.catalogue, child_sequences[chunk_id], depth, chunk, operations_only, chunk_id)
            for chunk_id, chunk in enumerate(split_amount(amount, n_chunks))
        ]

        logger.progress(f"Generating {amount} expressions at depth {depth} "
                        f"in {n_chunks} chunk(s) on {n_workers} worker(s)", force=True)

        results: List[Optional[List[Symbol]]] = [None] * n_chunks
        with tqdm(total=amount, unit="expr", disable=not self.show_progress) as bar:
            if n_workers == 1:
                for chunk_id, symbols, elapsed in map(_generate_worker, chunk_configs):
                    results[chunk_id] = symbols
                    bar.update(len(symbols))
                    logger.batch_step(chunk_id, len(symbols), elapsed)
            else:
                with multiprocessing.Pool(processes=n_workers) as pool:
                    for chunk_id, symbols, elapsed in pool.imap_unordered(_generate_worker, chunk_configs):
                        results[chunk_id] = symbols
                        bar.update(len(symbols))
                        logger.batch_step(chunk_id, len(symbols), elapsed)

        # Chunk order, not completion order
        return [symbol for chunk in results for symbol in chunk]
