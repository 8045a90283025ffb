"""Records describing one capture of a site and the comparison of two captures."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class FileKind(str, Enum):
    FILE = 'file'
    DIRECTORY = 'folder'


@dataclass(frozen=True)
class FileRecord:
    """One entry of a manifest.

    ``compare_path`` is the path below the capture root and is what two
    captures of the same site are joined on.
    """
    full_path: str
    compare_path: str
    hash: str
    kind: FileKind = FileKind.FILE

    def to_dict(self):
        return {
            'fullPath': self.full_path,
            'comparePath': self.compare_path,
            'hash': self.hash,
            'type': self.kind.value,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            full_path=data['fullPath'],
            compare_path=data['comparePath'],
            hash=data['hash'],
            kind=FileKind(data.get('type', FileKind.FILE.value)),
        )


@dataclass
class ChangeReport:
    """Outcome of comparing the cached capture against a fresh clone"""
    cached_manifest: List[FileRecord]
    cloned_manifest: List[FileRecord]
    cloned_root_hash: str
    new_files: List[FileRecord] = field(default_factory=list)
    deleted_files: List[FileRecord] = field(default_factory=list)
    changed_files: List[FileRecord] = field(default_factory=list)
    ignored_files: List[FileRecord] = field(default_factory=list)
    html_diffs: List[str] = field(default_factory=list)
    location: Optional[str] = None
    slack_message: Optional[str] = None

    def to_dict(self):
        data = {
            'cachedManifest': [r.to_dict() for r in self.cached_manifest],
            'clonedManifest': [r.to_dict() for r in self.cloned_manifest],
            'clonedRootHash': self.cloned_root_hash,
            'newFiles': [r.to_dict() for r in self.new_files],
            'deletedFiles': [r.to_dict() for r in self.deleted_files],
            'changedFiles': [r.to_dict() for r in self.changed_files],
            'ignoredFiles': [r.to_dict() for r in self.ignored_files],
            'htmlDiffs': list(self.html_diffs),
        }
        if self.location is not None:
            data['location'] = self.location
        if self.slack_message is not None:
            data['slackMessage'] = self.slack_message
        return data

    @classmethod
    def from_dict(cls, data):
        def records(key):
            return [FileRecord.from_dict(item) for item in data.get(key, [])]

        return cls(
            cached_manifest=records('cachedManifest'),
            cloned_manifest=records('clonedManifest'),
            cloned_root_hash=data['clonedRootHash'],
            new_files=records('newFiles'),
            deleted_files=records('deletedFiles'),
            changed_files=records('changedFiles'),
            ignored_files=records('ignoredFiles'),
            html_diffs=list(data.get('htmlDiffs', [])),
            location=data.get('location'),
            slack_message=data.get('slackMessage'),
        )
