#!/usr/bin/env python3
"""
Corpus generation command line.

Generates random operation trees, writes them one per line and reports the
generation time together with a short corpus summary.
"""
import argparse
import sys
import time
from typing import List, Optional

from .batch import BatchGenerator
from .config import GeneratorConfig
from .corpus import write_corpus
from .errors import GenerationError
from .logging_system import LogLevel, configure_logging, get_logger
from .symbol_tree import corpus_statistics


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="symbolic-generation",
        description="Generate a corpus of random symbolic expressions")
    parser.add_argument("--config", help="JSON configuration file")
    parser.add_argument("--depth", type=int, help="Maximum tree depth (default 10)")
    parser.add_argument("--amount", type=int, help="Number of expressions (default 10000)")
    parser.add_argument("--seed", type=int, help="Seed for reproducible output")
    parser.add_argument("--workers", type=int, dest="n_workers", help="Worker processes (default 1)")
    parser.add_argument("--chunk-size", type=int, dest="chunk_size",
                        help="Expressions per random stream (default 500)")
    parser.add_argument("--output", dest="output_path", help="Output file (default output_<id>.txt)")
    parser.add_argument("--output-dir", dest="output_dir", help="Directory for generated file names")
    parser.add_argument("--log-level", default="moderate",
                        choices=[level.name.lower() for level in LogLevel],
                        help="Logging verbosity")
    parser.add_argument("--log-file", help="Also write log lines to this file")
    parser.add_argument("--no-progress", dest="show_progress", action="store_false", default=None,
                        help="Disable the progress bar")
    return parser


def load_config(args: argparse.Namespace) -> GeneratorConfig:
    """File values first, then any flag given on the command line"""
    config = GeneratorConfig.from_json_file(args.config) if args.config else GeneratorConfig()
    overrides = {
        name: getattr(args, name)
        for name in ('depth', 'amount', 'seed', 'n_workers', 'chunk_size', 'output_path', 'output_dir', 'show_progress')
        if getattr(args, name) is not None
    }
    if not overrides:
        return config
    data = dict(vars(config))
    data.update(overrides)
    return GeneratorConfig.from_dict(data)


def run(config: GeneratorConfig) -> str:
    """Generate and write one corpus; returns the output path"""
    catalogue = config.to_catalogue()
    batch = BatchGenerator(catalogue, n_workers=config.n_workers, seed=config.seed,
                           show_progress=config.show_progress, chunk_size=config.chunk_size)

    start_time = time.perf_counter()
    operations = batch.generate_operations(config.depth, config.amount)
    elapsed = time.perf_counter() - start_time

    path = write_corpus(operations, path=config.output_path, directory=config.output_dir)

    logger = get_logger()
    logger.milestone(f"Time: {elapsed:.6f}s")
    stats = corpus_statistics(operations)
    summary = {
        'expressions': stats['count'],
        'mean_size': stats['mean_size'],
        'max_size': stats['max_size'],
        'mean_depth': stats['mean_depth'],
        'max_depth': stats['max_depth'],
        'output': path,
    }
    logger.result_summary(summary)
    for symbol, count in stats['operation_counts'].most_common():
        logger.info(f"  {symbol:<8} {count}", LogLevel.DETAILED)
    return path


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = configure_logging(LogLevel.from_name(args.log_level), log_file_path=args.log_file)

    try:
        config = load_config(args)
        run(config)
    except (GenerationError, ValueError, OSError) as e:
        logger.critical(str(e))
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
