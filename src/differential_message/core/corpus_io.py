"""Async loading of commit message files (plain or gzip)."""

from __future__ import annotations

import gzip
from contextlib import asynccontextmanager
from pathlib import Path

import aiofiles
from aiofiles.threadpool import wrap


@asynccontextmanager
async def _open_text(path: Path, *, encoding: str, decode_errors: str):
    """Open a message file for async text reading."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors)
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=encoding, errors=decode_errors) as f:
            yield f


async def read_corpus(
    path: str | Path,
    *,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> str:
    """Read a whole commit message file."""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"File not found: {p}")
    async with _open_text(p, encoding=encoding, decode_errors=decode_errors) as f:
        return await f.read()
