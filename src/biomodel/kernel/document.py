"""Pydantic models for schema documents and mixin references."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class SchemaModelError(Exception):
    """Base exception for schema model errors."""
    pass


class DocumentStructureError(SchemaModelError):
    """Raised when a schema document does not have the expected shape."""
    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Schema document '{name}' is malformed: {reason}")


class ResolutionError(SchemaModelError):
    """Raised when a $ref cannot be resolved to a fragment."""
    def __init__(self, ref: str, reason: str, document: Optional[str] = None):
        self.ref = ref
        self.reason = reason
        self.document = document
        where = f" (in {document})" if document else ""
        super().__init__(f"Cannot resolve '{ref}'{where}: {reason}")


class MixinRef(BaseModel):
    """A parsed `<file>#/<pointer>` reference."""
    model_config = ConfigDict(frozen=True)

    ref: str
    file: str
    pointer: str  # JSON pointer, "" for the whole file

    @classmethod
    def parse(cls, ref: str) -> "MixinRef":
        """Split a ref into file name and JSON pointer.

        Only file-relative refs are accepted; the pointer part must be empty
        or start with '/'.
        """
        if "#" not in ref:
            raise ResolutionError(ref, "reference has no '#' fragment")
        file, pointer = ref.split("#", 1)
        if not file:
            raise ResolutionError(ref, "reference does not name a file")
        if pointer and not pointer.startswith("/"):
            raise ResolutionError(ref, f"'{pointer}' is not a JSON pointer")
        return cls(ref=ref, file=file, pointer=pointer)

    def tokens(self) -> List[str]:
        """Unescaped pointer tokens (RFC 6901)."""
        if not self.pointer:
            return []
        return [
            token.replace("~1", "/").replace("~0", "~")
            for token in self.pointer[1:].split("/")
        ]

    @property
    def targets_properties(self) -> bool:
        """True when the ref points at another document's `properties` object."""
        return self.pointer == "/properties"


class SchemaDocument(BaseModel):
    """Read-only view of one schema document.

    Only the keywords the tooling relies on are typed; everything else
    (including custom keywords like `accessionType`) stays in `raw`.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str  # file name, e.g. "Tissue.json"
    raw: Dict[str, Any]
    schema_uri: Optional[str] = Field(None, alias="$schema")
    title: Optional[str] = None
    schema_type: Any = Field(None, alias="type")
    properties: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    required: List[str] = Field(default_factory=list)
    mixin_properties: List[Dict[str, Any]] = Field(default_factory=list, alias="mixinProperties")
    dependent_schemas: Dict[str, Dict[str, Any]] = Field(default_factory=dict, alias="dependentSchemas")

    @field_validator("mixin_properties")
    @classmethod
    def validate_mixin_properties(cls, v: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        for index, entry in enumerate(v):
            if not isinstance(entry.get("$ref"), str):
                raise ValueError(f"mixinProperties[{index}] has no string $ref")
        return v

    @classmethod
    def from_dict(cls, name: str, data: Any) -> "SchemaDocument":
        """Parse a raw JSON mapping into a document view."""
        if not isinstance(data, dict):
            raise DocumentStructureError(name, "document root must be a JSON object")
        try:
            return cls.model_validate({**data, "name": name, "raw": data})
        except ValidationError as e:
            reasons = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise DocumentStructureError(name, reasons) from e

    def mixin_refs(self) -> List[MixinRef]:
        """Mixin references in declaration order."""
        return [MixinRef.parse(entry["$ref"]) for entry in self.mixin_properties]

    def link_targets(self) -> Dict[str, List[str]]:
        """Map of property name -> schema titles named by `linkTo`."""
        return collect_link_targets(self.properties)


def collect_link_targets(properties: Dict[str, Dict[str, Any]]) -> Dict[str, List[str]]:
    """Collect `linkTo` targets from a property map, looking through array items."""
    targets: Dict[str, List[str]] = {}
    for name, prop in properties.items():
        link = prop.get("linkTo")
        items = prop.get("items")
        if link is None and isinstance(items, dict):
            link = items.get("linkTo")
        if link is None:
            continue
        targets[name] = [link] if isinstance(link, str) else list(link)
    return targets
