"""
Cross-platform merging of extracted entities
"""

from dataclasses import dataclass

from .models import Callable, LogicalEntity, Origin


@dataclass(frozen=True)
class MergeConflict:
    """Both sides declared the same callable with different signatures"""
    entity: str
    callable_name: str
    kept: Callable
    dropped: Callable


class EntityMerger:
    """Unifies same-named entities from the Android and iOS extractions.

    On a callable name collision the entity being merged in (the newcomer)
    wins and the incumbent's version is dropped. Collisions whose
    signatures differ are recorded in ``conflicts`` instead of passing
    silently.

    Any entity of the second list that meets an existing name becomes
    ``Origin.UNIFIED``, even when both came from the same platform. Repeats
    within the first list are unioned the same way but keep their origin.
    """

    def __init__(self):
        self.conflicts = []

    def merge(self, entities_a: list[LogicalEntity], entities_b: list[LogicalEntity]) -> list[LogicalEntity]:
        """Merge two platform-scoped entity lists into one, preserving first-seen order"""
        merged = {}
        for entity in entities_a:
            existing = merged.get(entity.name)
            if existing is None:
                merged[entity.name] = entity
            else:
                merged[entity.name] = self._unify(existing, entity, existing.origin)
        for entity in entities_b:
            existing = merged.get(entity.name)
            if existing is None:
                merged[entity.name] = entity
            else:
                merged[entity.name] = self._unify(existing, entity, Origin.UNIFIED)
        return list(merged.values())

    def _unify(self, incumbent: LogicalEntity, newcomer: LogicalEntity, origin: Origin) -> LogicalEntity:
        incoming = {member.name: member for member in newcomer.callables}
        existing = {member.name: member for member in incumbent.callables}

        # Union of names: incumbent order first, then names only the newcomer has
        names = list(existing)
        names.extend(name for name in incoming if name not in existing)

        callables = []
        for name in names:
            if name in incoming:
                chosen = incoming[name]
                if name in existing and existing[name] != chosen:
                    self.conflicts.append(MergeConflict(incumbent.name, name, chosen, existing[name]))
            else:
                chosen = existing[name]
            callables.append(chosen)

        return LogicalEntity(incumbent.name, callables, origin)


def merge(entities_a: list[LogicalEntity], entities_b: list[LogicalEntity]) -> list[LogicalEntity]:
    """Merge without keeping conflict reports"""
    return EntityMerger().merge(entities_a, entities_b)
