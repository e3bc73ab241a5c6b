"""Schema store: loads schema documents and fragment files from disk."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from biomodel.config import PACKAGE_SCHEMAS_DIR
from biomodel.kernel.document import (
    DocumentStructureError,
    MixinRef,
    ResolutionError,
    SchemaDocument,
)

logger = logging.getLogger(__name__)


class SchemaStore:
    """In-memory collection of schema files keyed by file name.

    A file that declares `$schema` is a schema document; anything else
    (e.g. `mixins.json`) is a fragment file that can only be referenced.
    """

    def __init__(self, raw: Mapping[str, Any], root: Optional[Path] = None):
        self.root = root
        self._raw: Dict[str, Any] = dict(raw)
        self._documents: Dict[str, SchemaDocument] = {}

    @classmethod
    def from_directory(cls, path: Union[str, Path]) -> "SchemaStore":
        """Load every `*.json` file in a directory."""
        root = Path(path)
        if not root.is_dir():
            raise FileNotFoundError(f"Schema directory not found: {root}")
        raw: Dict[str, Any] = {}
        for file_path in sorted(root.glob("*.json")):
            with open(file_path, "r", encoding="utf-8") as f:
                try:
                    raw[file_path.name] = json.load(f)
                except json.JSONDecodeError as e:
                    raise DocumentStructureError(file_path.name, f"invalid JSON: {e}") from e
        logger.debug("Loaded %d schema files from %s", len(raw), root)
        return cls(raw, root=root)

    @classmethod
    def default(cls) -> "SchemaStore":
        """Load the schema collection shipped with the package."""
        return cls.from_directory(PACKAGE_SCHEMAS_DIR)

    def file_names(self) -> List[str]:
        """All loaded file names, sorted."""
        return sorted(self._raw)

    def is_document(self, file_name: str) -> bool:
        data = self._raw.get(file_name)
        return isinstance(data, dict) and "$schema" in data

    def schema_names(self) -> List[str]:
        """Sorted file names of schema documents (fragment files excluded)."""
        return [name for name in self.file_names() if self.is_document(name)]

    def raw(self, file_name: str) -> Any:
        """Raw JSON content of a file."""
        if file_name not in self._raw:
            raise ResolutionError(file_name, "file is not in the schema collection")
        return self._raw[file_name]

    def document(self, file_name: str) -> SchemaDocument:
        """Typed view of a schema document (cached)."""
        if file_name not in self._documents:
            data = self.raw(file_name)
            if not self.is_document(file_name):
                raise DocumentStructureError(file_name, "not a schema document (no $schema)")
            self._documents[file_name] = SchemaDocument.from_dict(file_name, data)
        return self._documents[file_name]

    def titles(self) -> Dict[str, str]:
        """Map of schema title -> file name."""
        titles = {}
        for name in self.schema_names():
            title = self._raw[name].get("title")
            if isinstance(title, str):
                titles[title] = name
        return titles

    def by_title(self, title: str) -> str:
        titles = self.titles()
        if title not in titles:
            raise ResolutionError(title, "no schema has this title")
        return titles[title]

    def lookup(self, name: str) -> str:
        """Find a file name from a file name, a bare stem or a schema title."""
        if name in self._raw:
            return name
        if f"{name}.json" in self._raw:
            return f"{name}.json"
        return self.by_title(name)

    def fragment(self, ref: Union[str, MixinRef], document: Optional[str] = None) -> Any:
        """Resolve a `<file>#/<pointer>` ref to the JSON value it names."""
        if isinstance(ref, str):
            ref = MixinRef.parse(ref)
        if ref.file not in self._raw:
            raise ResolutionError(ref.ref, f"unknown file '{ref.file}'", document)
        node = self._raw[ref.file]
        for token in ref.tokens():
            if isinstance(node, dict) and token in node:
                node = node[token]
            elif isinstance(node, list) and _is_array_index(token) and int(token) < len(node):
                node = node[int(token)]
            else:
                raise ResolutionError(ref.ref, f"pointer segment '{token}' not found", document)
        return node


def _is_array_index(token: str) -> bool:
    """RFC 6901 array index: ASCII digits, no leading zero."""
    return token.isascii() and token.isdigit() and (token == "0" or not token.startswith("0"))
