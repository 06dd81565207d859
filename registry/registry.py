from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable


@dataclass
class RegistryItem:
    type: str
    description: str
    tags: FrozenSet[str] = frozenset()


@dataclass
class Registry:
    name: str
    items: Dict[str, RegistryItem] = field(default_factory=dict)

    def register(self, type_name: str, description: str, tags: Iterable[str] = ()) -> None:
        self.items[type_name] = RegistryItem(type=type_name, description=description, tags=frozenset(tags))

    def get(self, type_name: str) -> RegistryItem | None:
        return self.items.get(type_name)

    def tagged(self, tag: str) -> list[str]:
        return [item.type for item in self.items.values() if tag in item.tags]

    def __contains__(self, type_name: str) -> bool:
        return type_name in self.items

    def all(self) -> Iterable[RegistryItem]:
        return self.items.values()
