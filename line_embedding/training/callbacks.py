"""
Training Callbacks Module.

This module implements progress reporting for the LINE trainer:
- Setup summary printed before the worker threads start
- Learning-rate / progress line refreshed while workers run
- JSON summary of the run written after the workers are joined
"""

import json
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class TrainingLogger:
    """
    Log training progress.

    Provides:
    - Console logging
    - JSON progress history and run summary
    - Training time tracking

    Workers call log_progress() from their own threads without a lock.
    Appending to a list is atomic under the GIL, and an interleaved
    console line is harmless.

    Example:
        >>> logger = TrainingLogger(log_dir=None, verbose=False)
        >>> logger.start()
        >>> logger.log_progress(samples=10_000, total_samples=1_000_000, rho=0.0249)
        >>> logger.save_final({'num_vertices': 3})['total_samples']
        10000
    """

    def __init__(
        self,
        log_dir: Optional[Union[str, Path]] = 'logs',
        verbose: bool = True
    ):
        """
        Initialize logger.

        Args:
            log_dir: Directory for the JSON summary (None to skip writing files)
            verbose: Whether to print to console
        """
        self.log_dir = Path(log_dir) if log_dir is not None else None
        self.verbose = verbose

        self.history: List[Dict[str, float]] = []
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

    def print_setup(self, settings: Dict[str, Any]) -> None:
        """Print a run setup summary."""
        if not self.verbose:
            return
        print("=" * 60)
        print("LINE Training Setup")
        print("=" * 60)
        for key, value in settings.items():
            if isinstance(value, int) and not isinstance(value, bool):
                print(f"{key}: {value:,}")
            else:
                print(f"{key}: {value}")
        print("=" * 60)

    def start(self) -> None:
        """Mark the start of training."""
        self.start_time = time.time()
        self.end_time = None

    def end(self) -> None:
        """Mark the end of training."""
        self.end_time = time.time()
        if self.verbose:
            print()  # Newline after the progress line

    @property
    def elapsed(self) -> float:
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.time()
        return end - self.start_time

    def log_progress(self, samples: int, total_samples: int, rho: float) -> None:
        """
        Record a learning-rate update.

        Args:
            samples: Global number of samples processed so far
            total_samples: Sample budget of the run
            rho: Current learning rate
        """
        progress = samples / (total_samples + 1) * 100
        self.history.append({
            'samples': samples,
            'rho': rho,
            'progress': progress,
            'timestamp': self.elapsed,
        })

        if self.verbose:
            print(f"\rRho: {rho:f}  Progress: {progress:.3f}%", end='', flush=True)

    def save_final(self, extra_info: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Build and save the run summary.

        Args:
            extra_info: Additional info to include

        Returns:
            Summary dictionary
        """
        summary = {
            'total_time_seconds': self.elapsed,
            'total_samples': self.history[-1]['samples'] if self.history else 0,
            'final_rho': self.history[-1]['rho'] if self.history else None,
            'num_updates': len(self.history),
        }

        if extra_info:
            summary.update(extra_info)

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

            with open(self.log_dir / 'progress.json', 'w') as f:
                json.dump(self.history, f, indent=2)

            with open(self.log_dir / 'training_summary.json', 'w') as f:
                json.dump(summary, f, indent=2)

        if self.verbose:
            print(f"Total time: {summary['total_time_seconds']:.1f}s")
            if self.log_dir is not None:
                print(f"Logs saved to {self.log_dir}")

        return summary

    def get_history(self, key: str) -> List[float]:
        """Get history of a specific value."""
        return [record[key] for record in self.history]
