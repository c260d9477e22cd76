import hashlib
from pathlib import Path
import logging

def sha1_file(path: Path, chunk_size: int = 65536) -> str:
    """Lowercase hex SHA-1 of a file, read in chunks. Empty string if it is gone."""
    digest = hashlib.sha1()
    try:
        with open(path, 'rb') as f:
            for block in iter(lambda: f.read(chunk_size), b""):
                digest.update(block)
    except FileNotFoundError:
        logging.error(f"File not found for checksum: {path}")
        return ""
    return digest.hexdigest()

def hashes_match(local_hash: str, remote_hash: str) -> bool:
    if not local_hash or not remote_hash:
        return False
    return local_hash.lower() == remote_hash.lower()

def validate_download(path: Path, expected_hash: str, expected_size: int) -> bool:
    """Post-download check. Size is advisory and only reported."""
    file_size = path.stat().st_size
    if expected_size and file_size != expected_size:
        logging.warning(f"Size mismatch for {path}: expected {expected_size}, got {file_size}")

    file_hash = sha1_file(path)
    if not hashes_match(file_hash, expected_hash):
        logging.warning(f"Hash mismatch for {path}: expected {expected_hash}, got {file_hash}")
        return False

    return True
