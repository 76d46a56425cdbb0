import logging
import os
import re
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhysicalFile:
    """One stored part of a file identifier."""

    file_id: str
    name: str
    path: str


class FileService:
    """Resolve file identifiers to the files stored under a root directory.

    An identifier ``report.pdf`` maps either to the file ``report.pdf`` itself
    or, when it was stored in chunks, to ``report.pdf.part1``,
    ``report.pdf.part2`` and so on.
    """

    def __init__(self, storage_root: Optional[str] = None):
        self.storage_root = os.path.abspath(storage_root or os.getcwd())

    def get_files_per_file_id(self, file_id: str) -> list[PhysicalFile]:
        if not file_id or file_id in (".", "..") or "/" in file_id or os.sep in file_id:
            logger.debug("Rejecting file identifier %r", file_id)
            return []

        whole = os.path.join(self.storage_root, file_id)
        if os.path.isfile(whole):
            return [PhysicalFile(file_id, file_id, whole)]

        part_re = re.compile(rf"^{re.escape(file_id)}\.part(\d+)$")
        parts = []
        try:
            entries = os.listdir(self.storage_root)
        except FileNotFoundError:
            logger.debug("Storage root %s does not exist", self.storage_root)
            return []

        for entry in entries:
            match = part_re.match(entry)
            path = os.path.join(self.storage_root, entry)
            if match and os.path.isfile(path):
                parts.append((int(match.group(1)), PhysicalFile(file_id, entry, path)))

        logger.debug("File identifier %s resolves to %d part(s)", file_id, len(parts))
        return [part for _, part in sorted(parts, key=lambda p: p[0])]

    @staticmethod
    def get_absolute_path(physical_file: PhysicalFile) -> str:
        return os.path.abspath(physical_file.path)
