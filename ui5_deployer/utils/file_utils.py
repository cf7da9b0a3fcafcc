"""File operation utilities"""

import zipfile
from pathlib import Path
from typing import Iterable, Tuple

# Bytes that occur in text files
_TEXT_CHARACTERS = bytearray({7, 8, 9, 10, 12, 13, 27} | set(range(0x20, 0x100)))


def is_binary_content(content: bytes, sample_size: int = 512) -> bool:
    """
    Check if content is binary

    Args:
        content: File content
        sample_size: Bytes to sample from the start

    Returns:
        True if content appears to be binary
    """
    sample = content[:sample_size]
    if not sample:
        return False

    # Check for null bytes
    if b'\0' in sample:
        return True

    # If more than 30% non-text, consider binary
    non_text = len([b for b in sample if b not in _TEXT_CHARACTERS])
    return non_text / len(sample) > 0.3


def create_zip_archive(archive_path: Path, entries: Iterable[Tuple[str, bytes]]) -> Path:
    """
    Write entries into an uncompressed zip archive

    Args:
        archive_path: Output archive path
        entries: (archive name, content) pairs; leading slashes are dropped

    Returns:
        Path to the created archive
    """
    archive_path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(archive_path, 'w', compression=zipfile.ZIP_STORED) as archive:
        for name, content in entries:
            archive.writestr(name.lstrip('/'), content)
    return archive_path
