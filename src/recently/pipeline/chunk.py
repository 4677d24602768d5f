"""Split file lists into chunks that keep command lines under the OS limit."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from pathlib import Path

from recently.utils.paths import normalize_path, resolve_path

logger = logging.getLogger(__name__)


def chunk_array(items: Sequence[str], chunk_count: int) -> list[list[str]]:
    """Partition `items` into `chunk_count` contiguous slices of near-equal length."""
    if chunk_count <= 1:
        return [list(items)]
    chunked: list[list[str]] = []
    position = 0
    for index in range(chunk_count):
        chunk_length = math.ceil((len(items) - position) / (chunk_count - index))
        chunked.append(list(items[position:position + chunk_length]))
        position += chunk_length
    return chunked


def chunk_files(
    files: Sequence[str],
    base_dir: Path | str | None = None,
    relative: bool = False,
    max_arg_length: int | None = None,
) -> list[list[str]]:
    """Normalize `files` and split them so each chunk's argument string fits `max_arg_length`.

    Chunk sizes are balanced by file count, so a chunk may still overshoot the
    limit by about one file's length.
    """
    if relative or not base_dir:
        normalized = [normalize_path(file) for file in files]
    else:
        normalized = [resolve_path(base_dir, file) for file in files]

    if not max_arg_length:
        logger.debug("Skip chunking files because of undefined max_arg_length")
        return [normalized]

    file_list_length = len(" ".join(normalized))
    logger.debug(
        "Resolved an argument string length of %d characters from %d files",
        file_list_length,
        len(normalized),
    )
    chunk_count = min(math.ceil(file_list_length / max_arg_length), len(normalized))
    logger.debug("Creating %d chunks for max_arg_length of %d", chunk_count, max_arg_length)
    return chunk_array(normalized, chunk_count)
