"""
LINE Trainer Module.

This module implements the LINE training engine. It handles:
- Run configuration and validation
- Building the edge, negative and sigmoid tables from a loaded graph
- The asynchronous SGD loop run by a fixed pool of worker threads
- Linear learning-rate decay driven by a shared progress counter

Design Decisions:
- HOGWILD-style updates: workers read and write the shared embedding
  matrices with no lock. Each sample touches num_negative + 2 rows, so
  conflicting writes are rare; they are tolerated, not prevented.
- The progress counter and the learning rate are shared and updated
  without synchronisation. Workers may see slightly stale values.
- Each worker owns its random streams: a NumPy generator spawned from the
  run seed for edge sampling, and a 64-bit LCG seeded with the worker id
  for negative sampling. With one thread and a fixed seed a run is
  bit-for-bit reproducible.
- A worker that fails records its exception instead of dying silently;
  train() re-raises it as TrainingError after every worker is joined.
- Source-vector updates are accumulated and applied once per sampled
  edge; target-vector updates are applied immediately per pair.
"""

import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np
import torch

from ..data import Graph, GraphLoader
from ..data.graph_loader import EdgeTriple
from ..exceptions import ConfigurationError, TrainingError
from ..model import EmbeddingStore, SigmoidLookup
from ..sampling import AliasSampler, NegativeSampler
from ..utils.embeddings import Embeddings
from .callbacks import TrainingLogger


# Local samples between two learning-rate updates
LR_UPDATE_INTERVAL = 10_000

# Uniform draws fetched per refill of a worker's edge-sampling buffer
UNIFORM_BLOCK = 8192

# Floor of the learning rate, relative to its initial value
MIN_RHO_FRACTION = 1e-4

# Sample budgets are given in millions
SAMPLES_UNIT = 1_000_000

# Negative-sampling LCG (same constants as java.util.Random)
_LCG_MULTIPLIER = 25214903917
_LCG_INCREMENT = 11
_LCG_MASK = (1 << 64) - 1


@dataclass
class LINESettings:
    """
    Validated run settings.

    Attributes:
        dim: Embedding dimensionality
        order: Proximity order, 1 (vertex space) or 2 (context space)
        num_negative: Negative samples per positive pair
        total_samples: Training budget in millions of samples
        learning_rate: Initial learning rate
        num_threads: Number of worker threads
        neg_table_size: Slots of the negative sampling table
        neg_sampling_power: Degree exponent of negative sampling
        sigmoid_table_size: Buckets of the sigmoid table
        sigmoid_bound: Domain bound of the sigmoid table
        max_vertices: Vertex capacity ceiling (None for no limit)
        seed: Run seed (None for nondeterministic)
    """
    dim: int = 100
    order: int = 2
    num_negative: int = 5
    total_samples: float = 1
    learning_rate: float = 0.025
    num_threads: int = 1
    neg_table_size: int = 10_000_000
    neg_sampling_power: float = 0.75
    sigmoid_table_size: int = 1000
    sigmoid_bound: float = 6.0
    max_vertices: Optional[int] = None
    seed: Optional[int] = 314159265

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> 'LINESettings':
        """
        Extract settings from a configuration dictionary.

        Missing or empty sections and missing keys fall back to the
        defaults above.

        Args:
            config: Configuration dictionary (see config/default.yaml)

        Returns:
            Validated settings

        Raises:
            ConfigurationError: If any setting is out of range
        """
        config = config or {}
        model_config = config.get('model') or {}
        train_config = config.get('training') or {}
        sampling_config = config.get('sampling') or {}
        graph_config = config.get('graph') or {}

        settings = cls(
            dim=model_config.get('dim', cls.dim),
            order=model_config.get('order', cls.order),
            num_negative=train_config.get('num_negative', cls.num_negative),
            total_samples=train_config.get('total_samples', cls.total_samples),
            learning_rate=train_config.get('learning_rate', cls.learning_rate),
            num_threads=train_config.get('num_threads', cls.num_threads),
            seed=train_config.get('seed', cls.seed),
            neg_table_size=int(sampling_config.get('neg_table_size', cls.neg_table_size)),
            neg_sampling_power=sampling_config.get('neg_sampling_power', cls.neg_sampling_power),
            sigmoid_table_size=sampling_config.get('sigmoid_table_size', cls.sigmoid_table_size),
            sigmoid_bound=sampling_config.get('sigmoid_bound', cls.sigmoid_bound),
            max_vertices=graph_config.get('max_vertices', cls.max_vertices),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """Raise ConfigurationError on the first invalid setting."""
        if self.order not in (1, 2):
            raise ConfigurationError(f"Order should be either 1 or 2, got {self.order}")
        if self.dim < 1:
            raise ConfigurationError(f"dim must be a positive integer, got {self.dim}")
        if self.num_negative < 0:
            raise ConfigurationError(f"num_negative must be >= 0, got {self.num_negative}")
        if not self.total_samples > 0:
            raise ConfigurationError(f"total_samples must be positive, got {self.total_samples}")
        if not self.learning_rate > 0:
            raise ConfigurationError(f"learning_rate must be positive, got {self.learning_rate}")
        if self.num_threads < 1:
            raise ConfigurationError(f"num_threads must be >= 1, got {self.num_threads}")
        if self.neg_table_size < 1 or self.sigmoid_table_size < 1:
            raise ConfigurationError("Sampling table sizes must be positive")
        if not self.sigmoid_bound > 0:
            raise ConfigurationError(f"sigmoid_bound must be positive, got {self.sigmoid_bound}")


class LINETrainer:
    """
    Asynchronous multi-threaded LINE trainer.

    Construction builds every table and initialises the embeddings, so
    all allocation failures surface before any thread starts. train()
    then runs the worker pool to completion and returns the embeddings.

    Example:
        >>> from line_embedding.data import GraphLoader
        >>> from line_embedding.training import LINETrainer, LINESettings
        >>>
        >>> graph = GraphLoader().load([("A", "B", 1.0), ("B", "A", 1.0)])
        >>> settings = LINESettings(dim=8, order=2, total_samples=0.01,
        ...                         neg_table_size=10_000)
        >>> trainer = LINETrainer(graph, settings, verbose=False)
        >>> embeddings = trainer.train()
        >>> embeddings.names
        ['A', 'B']
    """

    def __init__(
        self,
        graph: Graph,
        settings: LINESettings,
        logger: Optional[TrainingLogger] = None,
        verbose: bool = True
    ):
        """
        Initialize trainer.

        Args:
            graph: Loaded graph
            settings: Validated run settings
            logger: Progress logger (a console-only one is created if None)
            verbose: Whether the default logger prints to console
        """
        settings.validate()

        self.graph = graph
        self.settings = settings
        self.logger = logger or TrainingLogger(log_dir=None, verbose=verbose)

        self.dim = settings.dim
        self.order = settings.order
        self.num_negative = settings.num_negative
        self.num_threads = settings.num_threads
        self.init_rho = float(settings.learning_rate)
        self.total_samples = int(settings.total_samples * SAMPLES_UNIT)

        # Shared, unsynchronised training state
        self.rho = self.init_rho
        self.current_sample_count = 0

        # (thread_id, exception) for every worker that failed
        self._worker_errors: List[Tuple[int, Exception]] = []

        self.edge_sampler = AliasSampler(graph.weights)
        self.neg_sampler = NegativeSampler(
            graph.degrees,
            table_size=settings.neg_table_size,
            power=settings.neg_sampling_power
        )
        self.sigmoid = SigmoidLookup(
            table_size=settings.sigmoid_table_size,
            bound=settings.sigmoid_bound
        )

        self.store = EmbeddingStore(graph.num_vertices, self.dim)
        self.store.init(seed=settings.seed)

    def _update_rho(self) -> float:
        """Recompute the learning rate from the shared progress counter."""
        rho = self.init_rho * (1 - self.current_sample_count / (self.total_samples + 1))
        self.rho = max(rho, self.init_rho * MIN_RHO_FRACTION)
        return self.rho

    def _spawn_generators(self) -> List[np.random.Generator]:
        """One independent uniform stream per worker, derived from the run seed."""
        seed_seq = np.random.SeedSequence(self.settings.seed)
        return [np.random.default_rng(child) for child in seed_seq.spawn(self.num_threads)]

    def _train_thread(self, thread_id: int, rng: np.random.Generator) -> None:
        """Thread target: run the worker loop and record any failure for train()."""
        try:
            self._run_worker(thread_id, rng)
        except Exception as err:
            self._worker_errors.append((thread_id, err))

    def _run_worker(self, thread_id: int, rng: np.random.Generator) -> None:
        """
        Worker loop.

        Runs until the local sample count exceeds this worker's share of
        the budget.
        """
        vertex = self.store.vertex_array
        targets = self.store.target_matrix(self.order)
        source_ids = self.graph.source_ids
        target_ids = self.graph.target_ids
        prob_table = self.edge_sampler.prob_table
        alias = self.edge_sampler.alias
        num_edges = self.edge_sampler.num_items
        neg_table = self.neg_sampler.table
        neg_table_size = self.neg_sampler.table_size
        sigmoid = self.sigmoid.eval
        num_pairs = self.num_negative + 1

        vec_error = np.zeros(self.dim, dtype=np.float32)
        seed = thread_id
        count = 0
        last_count = 0
        limit = self.total_samples / self.num_threads + 2

        draws: List[float] = []
        draw_pos = 0

        while True:
            if count > limit:
                break

            if count - last_count > LR_UPDATE_INTERVAL:
                self.current_sample_count += count - last_count
                last_count = count
                rho = self._update_rho()
                self.logger.log_progress(self.current_sample_count, self.total_samples, rho)

            if draw_pos == len(draws):
                draws = rng.random(2 * UNIFORM_BLOCK).tolist()
                draw_pos = 0
            k = int(num_edges * draws[draw_pos])
            edge = k if draws[draw_pos + 1] < prob_table[k] else alias[k]
            draw_pos += 2

            u = source_ids[edge]
            src = vertex[u]
            vec_error.fill(0.0)
            rho = self.rho

            for d in range(num_pairs):
                if d == 0:
                    target = target_ids[edge]
                    label = 1
                else:
                    seed = (seed * _LCG_MULTIPLIER + _LCG_INCREMENT) & _LCG_MASK
                    target = neg_table[(seed >> 16) % neg_table_size]
                    label = 0

                tgt = targets[target]
                g = (label - sigmoid(float(src.dot(tgt)))) * rho
                vec_error += g * tgt
                tgt += g * src

            src += vec_error
            count += 1

    def train(self) -> Embeddings:
        """
        Run the worker pool to completion.

        Returns:
            Vertex embeddings in first-occurrence order

        Raises:
            TrainingError: If a worker failed or the embeddings diverged
        """
        self.logger.print_setup({
            'Order': self.order,
            'Samples': f"{self.total_samples / SAMPLES_UNIT:g}M",
            'Negative': self.num_negative,
            'Dimension': self.dim,
            'Initial rho': self.init_rho,
            'Threads': self.num_threads,
            'Vertices': self.graph.num_vertices,
            'Edges': self.graph.num_edges,
        })

        self.rho = self.init_rho
        self.current_sample_count = 0
        self._worker_errors = []
        generators = self._spawn_generators()

        self.logger.start()
        threads = [
            threading.Thread(
                target=self._train_thread,
                args=(thread_id, generators[thread_id]),
                name=f"line-worker-{thread_id}",
                daemon=True
            )
            for thread_id in range(self.num_threads)
        ]
        for thread in threads:
            thread.start()
        # All parameter updates must be visible before the result is read
        for thread in threads:
            thread.join()
        self.logger.end()

        if self._worker_errors:
            thread_id, err = self._worker_errors[0]
            raise TrainingError(
                f"Worker {thread_id} failed: {type(err).__name__}: {err}"
            ) from err

        embeddings = self.get_embeddings()
        if not torch.isfinite(embeddings.vectors).all():
            raise TrainingError(
                f"Training diverged to non-finite embeddings (initial rho {self.init_rho}); "
                "lower the learning rate"
            )
        return embeddings

    def get_embeddings(self) -> Embeddings:
        """
        Current vertex embeddings.

        Returns:
            Embeddings in first-occurrence order
        """
        return Embeddings(self.graph.vertex_index.names, self.store.get_embeddings())


def train_line(
    edges: Iterable[EdgeTriple],
    config: Optional[Dict[str, Any]] = None,
    verbose: bool = False,
    log_dir: Optional[str] = None
) -> Embeddings:
    """
    High-level function to train LINE embeddings from an edge stream.

    This is the recommended entry point for training. The configuration
    is validated before the edge stream is consumed, so an invalid order
    fails without reading any input.

    Args:
        edges: Iterable of (source_name, target_name, weight)
        config: Configuration dictionary (see config/default.yaml)
        verbose: Print setup and progress to console
        log_dir: Directory for the JSON run summary (None to skip)

    Returns:
        Embeddings in first-occurrence order of the input

    Raises:
        ConfigurationError: On invalid settings or input
        ResourceError: If a table or matrix cannot be allocated
        TrainingError: If a worker failed or training diverged
    """
    settings = LINESettings.from_config(config)

    graph = GraphLoader(max_vertices=settings.max_vertices).load(edges)

    logger = TrainingLogger(log_dir=log_dir, verbose=verbose)
    trainer = LINETrainer(graph, settings, logger=logger)
    embeddings = trainer.train()

    logger.save_final({
        'num_vertices': graph.num_vertices,
        'num_edges': graph.num_edges,
        'order': settings.order,
        'dim': settings.dim,
        'num_threads': settings.num_threads,
    })

    return embeddings
