"""Shared helpers for sitediff tests."""
from sitediff.models import FileRecord


def make_record(compare_path, digest, root='/data/example.com.clone'):
    return FileRecord(
        full_path=f"{root}/{compare_path}",
        compare_path=compare_path,
        hash=digest,
    )
