"""Filesystem implementations for infrastructure.

Usage example:
    from pathlib import Path

    from phira_client.infrastructure.filesystem import LocalFileSystem

    fs = LocalFileSystem()
    fs.write_json({"language": "en-US"}, Path("data/settings.json"))
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import override

from ..protocols import FileSystem
from .io.validation import IncomingDataError, validate_json_as


class LocalFileSystem(FileSystem):
    """Local filesystem implementation."""

    @override
    def read_json(self, path: Path) -> dict[str, object]:
        payload = path.read_text(encoding="utf-8")
        try:
            return validate_json_as(dict[str, object], payload)
        except IncomingDataError as exc:
            raise RuntimeError("JSON file must contain an object.") from exc

    @override
    def write_json(self, data: Mapping[str, object], path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        # Readers never observe a partially written file.
        tmp = path.with_name(f"{path.name}.tmp")
        tmp.write_text(json.dumps(dict(data), ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(path)

    @override
    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    @override
    def exists(self, path: Path) -> bool:
        return path.exists()
