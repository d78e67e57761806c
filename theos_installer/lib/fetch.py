from __future__ import annotations

import http.client
import logging
import lzma
import os
import tarfile
import urllib.request
import zlib
from pathlib import Path

logger = logging.getLogger(__name__)

_CHUNK = 64 * 1024

# Raised by the gzip/lzma layers under tarfile on truncated or corrupt data.
_DECOMPRESS_ERRORS = (EOFError, lzma.LZMAError, zlib.error)


def download(url: str, dest: Path) -> Path:
    """Stream url into dest, replacing any partial file on failure.

    Protocol-level failures (e.g. a connection dropped before Content-Length
    was reached) surface as OSError, like every other network error.
    """

    dest.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Downloading %s -> %s", url, dest)
    try:
        with urllib.request.urlopen(url) as resp, dest.open("wb") as out:
            chunk = resp.read(_CHUNK)
            while chunk:
                out.write(chunk)
                chunk = resp.read(_CHUNK)
    except http.client.HTTPException as e:
        dest.unlink(missing_ok=True)
        raise OSError(f"Download of {url} failed: {e!r}") from e
    except BaseException:
        dest.unlink(missing_ok=True)
        raise
    return dest


def _strip(member: tarfile.TarInfo, components: int) -> bool:
    parts = Path(member.name).parts[components:]
    if not parts:
        return False
    member.name = str(Path(*parts))
    if member.islnk():
        # Hard link targets are archive paths and need the same prefix dropped.
        link_parts = Path(member.linkname).parts[components:]
        if not link_parts:
            return False
        member.linkname = str(Path(*link_parts))
    return True


def _within(dest: str, path: str) -> bool:
    return os.path.commonpath([dest, os.path.normpath(path)]) == dest


def _is_safe(member: tarfile.TarInfo, dest: str) -> bool:
    if Path(member.name).is_absolute() or ".." in Path(member.name).parts:
        return False
    if member.issym():
        link_dir = os.path.join(dest, os.path.dirname(member.name))
        return _within(dest, os.path.join(link_dir, member.linkname))
    if member.islnk():
        return _within(dest, os.path.join(dest, member.linkname))
    return True


def extract_tar(archive: Path, dest: Path, *, strip_components: int = 0) -> None:
    """Extract a (possibly compressed) tarball into dest.

    strip_components drops leading path elements like `tar --strip-components`.
    Members that end up empty or absolute, and names or link targets that
    would land outside dest, are skipped. A truncated or corrupt archive
    raises tarfile.ReadError whatever the compression.
    """

    dest.mkdir(parents=True, exist_ok=True)
    root = os.path.realpath(dest)
    logger.info("Extracting %s -> %s", archive, dest)
    try:
        with tarfile.open(archive, "r:*") as tar:
            members = []
            for m in tar.getmembers():
                if strip_components and not _strip(m, strip_components):
                    continue
                if not _is_safe(m, root):
                    logger.warning("Skipping unsafe archive member %s", m.name)
                    continue
                members.append(m)
            if hasattr(tarfile, "data_filter"):
                tar.extractall(root, members=members, filter="data")
            else:
                tar.extractall(root, members=members)
    except _DECOMPRESS_ERRORS as e:
        raise tarfile.ReadError(f"{archive} is truncated or corrupt: {e}") from e
