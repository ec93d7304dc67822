"""
Typed views over the generated workspace documents.

Both documents hold one collection keyed by library registry name:

- workspace manifest (angular.json): ``projects`` -> object per project
- path map (tsconfig.json): ``compilerOptions.paths`` -> list of paths

The shape is checked once at load time; after that the raw JSON structure
is mutated in place so that keys the tool does not know about survive a
rewrite untouched.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from nglibs.core.errors import ConfigParseError

logger = logging.getLogger(__name__)


class ManifestProject(BaseModel):
    """Minimal shape of one ``projects`` entry in the workspace manifest."""

    model_config = ConfigDict(extra="allow")

    projectType: Optional[str] = None
    root: Optional[str] = None


_COLLECTION_SHAPES: dict[str, TypeAdapter] = {
    "manifest": TypeAdapter(dict[str, ManifestProject]),
    "path_map": TypeAdapter(dict[str, list[str]]),
}


class DocumentKind(Enum):
    """Which generated document, and where its collection lives."""

    MANIFEST = "manifest"
    PATH_MAP = "path_map"

    @property
    def selector(self) -> tuple[str, ...]:
        if self is DocumentKind.MANIFEST:
            return ("projects",)
        return ("compilerOptions", "paths")


class ConfigDocument:
    """A JSON document with one library-keyed collection."""

    def __init__(self, path: Path, kind: DocumentKind, data: dict[str, Any]):
        self.path = path
        self.kind = kind
        self.data = data

    @classmethod
    def load(cls, path: Union[str, Path], kind: DocumentKind) -> "ConfigDocument":
        """Read and validate a document.

        Raises:
            ConfigParseError: If the file is missing, unreadable, not JSON, or
                its collection does not have the expected shape.
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ConfigParseError(path, "file does not exist") from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigParseError(path, str(e)) from e
        except OSError as e:
            raise ConfigParseError(path, e.strerror or str(e)) from e

        if not isinstance(data, dict):
            raise ConfigParseError(path, "expected a JSON object at the top level")

        document = cls(path, kind, data)
        document._validate()
        logger.debug(f"Loaded {path} ({len(document.collection)} entries)")
        return document

    def _validate(self) -> None:
        node: Any = self.data
        for key in self.kind.selector:
            if not isinstance(node, dict) or key not in node:
                raise ConfigParseError(self.path, f"missing '{'.'.join(self.kind.selector)}'")
            node = node[key]
        try:
            _COLLECTION_SHAPES[self.kind.value].validate_python(node)
        except ValidationError as e:
            raise ConfigParseError(self.path, str(e)) from e

    @property
    def collection(self) -> dict[str, Any]:
        """The library-keyed collection, as a live reference into ``data``."""
        node = self.data
        for key in self.kind.selector:
            node = node[key]
        return node

    def keys(self) -> list[str]:
        return list(self.collection)

    def save(self) -> None:
        """Rewrite the whole file, pretty-printed with 2-space indentation."""
        self.path.write_text(json.dumps(self.data, indent=2) + "\n", encoding="utf-8")
        logger.debug(f"Wrote {self.path}")
