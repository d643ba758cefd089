from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from parley.narrative.ids import check_id

@dataclass(frozen=True)
class ChoiceOption:
    label: str
    destination: int            # NodeId visited when this label is picked


class OptionTable:
    """
    Ordered (label -> destination) table backing one ChoiceNode.

    Rules:
      - Display order is first-insertion order.
      - Inserting a label that already exists replaces its destination but
        keeps its original position (upsert, count does not grow).
    """

    def __init__(self) -> None:
        self._by_label: Dict[str, ChoiceOption] = {}

    def insert(self, label: str, destination: int) -> ChoiceOption:
        opt = ChoiceOption(label=str(label), destination=check_id(destination))
        # dict assignment on an existing key keeps its slot
        self._by_label[opt.label] = opt
        return opt

    def lookup(self, label: str) -> Optional[ChoiceOption]:
        return self._by_label.get(label)

    def labels(self) -> List[str]:
        return list(self._by_label)

    def __iter__(self) -> Iterator[ChoiceOption]:
        return iter(list(self._by_label.values()))

    def __len__(self) -> int:
        return len(self._by_label)

    def __contains__(self, label: object) -> bool:
        return label in self._by_label
