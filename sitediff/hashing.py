"""SHA-256 helpers for file contents and whole manifests."""

import hashlib
import os

CHUNK_SIZE = 64 * 1024


def hash_bytes(content):
    """Hex SHA-256 of raw bytes"""
    return hashlib.sha256(content).hexdigest()


def hash_text(text):
    """Hex SHA-256 of a string, UTF-8 encoded"""
    return hash_bytes(text.encode('utf-8'))


def hash_file(path):
    """Hex SHA-256 of a file's bytes, read in chunks"""
    digest = hashlib.sha256()
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b''):
            digest.update(chunk)
    return digest.hexdigest()


def hash_directory(path):
    """Hex SHA-256 over a directory's sorted entry names"""
    return hash_text('\n'.join(sorted(os.listdir(path))))


def root_digest(manifest):
    """Fingerprint of a whole capture.

    Hashes are sorted before being concatenated, so the result does not depend
    on the order the capture was walked in.
    """
    return hash_text(''.join(sorted(record.hash for record in manifest)))
