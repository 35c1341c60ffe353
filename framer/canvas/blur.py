from __future__ import annotations

import math
import os
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from framer.config import settings


def effective_workers(workers: int | None = None) -> int:
    if workers is None:
        workers = settings.blur_workers
    if workers <= 0:
        workers = os.cpu_count() or 1
    return workers


def gaussian_kernel(sigma: float) -> np.ndarray:
    half = int(math.ceil(3.0 * sigma))
    x = np.arange(-half, half + 1, dtype=np.float64)
    weights = np.exp(-(x * x) / (2.0 * sigma * sigma))
    weights /= weights.sum()
    return weights.astype(np.float32)


def chunk_ranges(n: int, workers: int) -> list[tuple[int, int]]:
    """Split ``range(n)`` into at most ``workers`` contiguous, disjoint ranges."""
    if n <= 0:
        return []
    workers = max(1, min(workers, n))
    step = int(math.ceil(n / workers))
    return [(start, min(start + step, n)) for start in range(0, n, step)]


def _convolve_rows(
    src: np.ndarray,
    dst: np.ndarray,
    kernel: np.ndarray,
    start: int,
    stop: int,
) -> None:
    # Reads src[start:stop], writes dst[start:stop] only.
    rows = src[start:stop]
    half = kernel.shape[0] // 2
    count, width = rows.shape

    padded = np.zeros((count, width + 2 * half), dtype=np.float32)
    padded[:, half : half + width] = rows

    acc = np.zeros((count, width), dtype=np.float32)
    for i, weight in enumerate(kernel):
        acc += weight * padded[:, i : i + width]
    dst[start:stop] = acc


def _run_pass(src: np.ndarray, dst: np.ndarray, kernel: np.ndarray, workers: int) -> None:
    ranges = chunk_ranges(src.shape[0], workers)
    if len(ranges) <= 1:
        for start, stop in ranges:
            _convolve_rows(src, dst, kernel, start, stop)
        return

    with ThreadPoolExecutor(max_workers=len(ranges)) as pool:
        futures = [
            pool.submit(_convolve_rows, src, dst, kernel, start, stop)
            for start, stop in ranges
        ]
        for fut in futures:
            fut.result()


def gaussian_blur(alpha: np.ndarray, sigma: float, *, workers: int | None = None) -> np.ndarray:
    """Separable Gaussian blur of a 2-D buffer, rows first, then columns.

    Each pass is split into disjoint row (or column) ranges that run on a
    thread pool; the output does not depend on the worker count.
    Values outside the buffer count as zero.
    """
    if alpha.ndim != 2:
        raise ValueError(f"blur expects a 2-D buffer, got shape {alpha.shape}")
    src = alpha.astype(np.float32, copy=True)
    if sigma <= 0.0 or src.size == 0:
        return src

    kernel = gaussian_kernel(sigma)
    n_workers = effective_workers(workers)

    horizontal = np.empty_like(src)
    _run_pass(src, horizontal, kernel, n_workers)

    out = np.empty_like(src)
    # Column pass reuses the row kernel through transposed views.
    _run_pass(horizontal.T, out.T, kernel, n_workers)
    return out
