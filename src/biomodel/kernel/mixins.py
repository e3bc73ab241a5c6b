"""Resolve `mixinProperties` inheritance into flattened schemas."""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .document import ResolutionError, SchemaModelError

logger = logging.getLogger(__name__)

LOCAL = "#"  # provenance marker for a document's own properties


class CycleError(SchemaModelError):
    """Raised when mixin references form a cycle."""
    def __init__(self, cycle: list[str]):
        self.cycle = cycle
        # Format cycle for message (remove duplicate final node)
        if len(cycle) > 1 and cycle[0] == cycle[-1]:
            cycle_ids = cycle[:-1]
        else:
            cycle_ids = cycle
        cycle_str = " -> ".join(cycle_ids) + f" -> {cycle_ids[0]}"
        super().__init__(f"Cycle detected in mixin references:\n  Cycle: {cycle_str}")


@dataclass
class ResolvedSchema:
    """Effective property set of one schema document."""
    name: str
    properties: Dict[str, Dict[str, Any]]
    provenance: Dict[str, str]  # property -> "#" (local) or the contributing $ref
    parents: List[str] = field(default_factory=list)  # documents inherited via <File>#/properties
    shadowed: Dict[str, str] = field(default_factory=dict)  # local property -> inherited $ref it hides

    def inherited(self) -> Dict[str, str]:
        """Properties contributed by mixins, with their source ref."""
        return {name: src for name, src in self.provenance.items() if src != LOCAL}


class MixinResolver:
    """Resolves schema documents of a store, caching the results.

    Precedence on name collision: local properties > later mixins > earlier
    mixins. A ref to `<File>.json#/properties` of another schema document
    inherits that document's effective properties, so chains resolve
    transitively.
    """

    def __init__(self, store):
        self.store = store
        self._cache: Dict[str, ResolvedSchema] = {}

    def resolve(self, name: str) -> ResolvedSchema:
        """Resolve one document. The result is a copy; the cache is never exposed."""
        return copy.deepcopy(self._resolve(self.store.lookup(name), []))

    def _resolve(self, file_name: str, stack: List[str]) -> ResolvedSchema:
        if file_name in self._cache:
            return self._cache[file_name]
        if file_name in stack:
            cycle_start = stack.index(file_name)
            raise CycleError(stack[cycle_start:] + [file_name])

        document = self.store.document(file_name)
        stack.append(file_name)
        try:
            contributions: List[Tuple[str, Dict[str, Any]]] = []
            parents: List[str] = []
            for ref in document.mixin_refs():
                if ref.targets_properties and self.store.is_document(ref.file):
                    parent = self._resolve(ref.file, stack)
                    fragment = parent.properties
                    parents.append(ref.file)
                else:
                    fragment = self.store.fragment(ref, document=file_name)
                if not isinstance(fragment, dict):
                    raise ResolutionError(ref.ref, "fragment is not an object", file_name)
                for prop_name, definition in fragment.items():
                    if not isinstance(definition, dict):
                        raise ResolutionError(
                            ref.ref, f"property '{prop_name}' is not a schema object", file_name
                        )
                contributions.append((ref.ref, fragment))
        finally:
            stack.pop()

        resolved = _merge(file_name, document.properties, contributions, parents)
        self._cache[file_name] = resolved
        logger.debug(
            "Resolved %s: %d properties (%d inherited)",
            file_name, len(resolved.properties), len(resolved.inherited()),
        )
        return resolved

    def resolve_schema(self, name: str) -> Dict[str, Any]:
        """Flattened schema: mixins merged into `properties`, `mixinProperties` dropped."""
        file_name = self.store.lookup(name)
        resolved = self._resolve(file_name, [])
        schema = {
            key: copy.deepcopy(value)
            for key, value in self.store.raw(file_name).items()
            if key != "mixinProperties"
        }
        schema["properties"] = copy.deepcopy(resolved.properties)
        return schema


def _merge(
    file_name: str,
    local: Dict[str, Dict[str, Any]],
    contributions: List[Tuple[str, Dict[str, Any]]],
    parents: List[str],
) -> ResolvedSchema:
    """Merge property maps by precedence, keeping mixin declaration order for output."""
    provenance: Dict[str, str] = {name: LOCAL for name in local}
    shadowed: Dict[str, str] = {}
    # Walk from highest to lowest priority; first writer wins
    for source, fragment in reversed(contributions):
        for name in fragment:
            if name not in provenance:
                provenance[name] = source
            elif provenance[name] == LOCAL and name not in shadowed:
                shadowed[name] = source

    sources = contributions + [(LOCAL, local)]
    properties: Dict[str, Dict[str, Any]] = {}
    for source, fragment in sources:
        for name, definition in fragment.items():
            if provenance[name] == source and name not in properties:
                properties[name] = copy.deepcopy(definition)

    return ResolvedSchema(
        name=file_name,
        properties=properties,
        provenance=provenance,
        parents=parents,
        shadowed=shadowed,
    )


def resolve_properties(store, name: str) -> ResolvedSchema:
    """Resolve the effective properties of one document."""
    return MixinResolver(store).resolve(name)


def resolve_schema(store, name: str) -> Dict[str, Any]:
    """Resolve one document into a flattened JSON Schema."""
    return MixinResolver(store).resolve_schema(name)
