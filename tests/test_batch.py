"""Tests for parallel batch generation."""

import pytest

from symbolic_generation import batch as batch_module
from symbolic_generation.batch import BatchGenerator, split_amount
from symbolic_generation.errors import InvalidDepthError, InvalidDistributionError
from symbolic_generation.generator import Catalogue
from symbolic_generation.renderer import render_all, render_corpus
from symbolic_generation.symbol_tree import Operation, Variable, ADDITION


def test_split_amount():
    assert split_amount(10, 3) == [4, 3, 3]
    assert split_amount(2, 4) == [1, 1, 0, 0]
    assert split_amount(0, 1) == [0]
    assert sum(split_amount(10001, 7)) == 10001


def test_single_worker_amount_and_lines():
    batch = BatchGenerator(Catalogue.default(), n_workers=1, seed=3)
    operations = batch.generate_operations(5, 120)
    assert len(operations) == 120
    assert all(isinstance(op, Operation) for op in operations)
    assert len(render_corpus(operations).splitlines()) == 120
    assert all(op.depth() <= 6 for op in operations)


def test_single_worker_reproducible():
    first = render_all(BatchGenerator(seed=8).generate_operations(6, 40))
    second = render_all(BatchGenerator(seed=8).generate_operations(6, 40))
    assert first == second


def test_multiple_workers_reproducible():
    first = render_all(BatchGenerator(n_workers=2, seed=21, chunk_size=10).generate_operations(4, 30))
    second = render_all(BatchGenerator(n_workers=2, seed=21, chunk_size=10).generate_operations(4, 30))
    assert len(first) == 30
    assert first == second


def test_generate_symbols_depth_bound():
    batch = BatchGenerator(n_workers=2, seed=5, chunk_size=7)
    symbols = batch.generate_symbols(3, 25)
    assert len(symbols) == 25
    assert all(symbol.depth() <= 3 for symbol in symbols)


def test_more_workers_than_trees():
    batch = BatchGenerator(n_workers=3, seed=1)
    assert len(batch.generate_operations(2, 1)) == 1
    assert batch.generate_operations(2, 0) == []


def test_invalid_arguments():
    with pytest.raises(ValueError):
        BatchGenerator(n_workers=0)
    with pytest.raises(ValueError):
        BatchGenerator(chunk_size=0)
    batch = BatchGenerator(n_workers=2, seed=0)
    with pytest.raises(InvalidDepthError):
        batch.generate_operations(-1, 10)
    with pytest.raises(ValueError):
        batch.generate_operations(3, -5)


def test_worker_errors_propagate():
    catalogue = Catalogue([(Variable("x"), 1)], [(ADDITION, 0)], [], {"variable": 1, "operation": 1})
    with pytest.raises(InvalidDistributionError):
        BatchGenerator(catalogue, n_workers=1, seed=0).generate_operations(2, 3)


def test_worker_count_does_not_change_corpus():
    serial = BatchGenerator(n_workers=1, seed=13, chunk_size=6).generate_operations(5, 20)
    parallel = BatchGenerator(n_workers=3, seed=13, chunk_size=6).generate_operations(5, 20)
    assert render_all(serial) == render_all(parallel)


def test_progress_bar_counts_trees(monkeypatch):
    updates = []

    class RecordingBar:
        def __init__(self, total, **kwargs):
            self.total = total

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def update(self, n):
            updates.append(n)

    monkeypatch.setattr(batch_module, "tqdm", RecordingBar)
    BatchGenerator(seed=2, show_progress=True, chunk_size=4).generate_operations(3, 10)
    assert updates == [4, 3, 3]
