#------------------------------------------------------------
#                     ranking_service.py
#        Keeps a bounded, descending top-K list built in
#                     a single linear scan.

from typing import Generic, List, Tuple, TypeVar

K = TypeVar("K")


class TopRanking(Generic[K]):
    """Fixed-capacity list of (key, value) pairs, highest value first.

    ``offer`` walks the slots from the top and inserts the entry above the
    first slot it strictly beats, shifting the rest down and dropping
    whatever falls off the end. Equal values never displace an earlier
    entry, so ties keep their first-seen order.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._slots: List[Tuple[K, int]] = []

    def offer(self, key: K, value: int) -> bool:
        for index, (_, ranked_value) in enumerate(self._slots):
            if value > ranked_value:
                self._slots.insert(index, (key, value))
                del self._slots[self.capacity:]
                return True
        if len(self._slots) < self.capacity:
            self._slots.append((key, value))
            return True
        return False

    def entries(self) -> List[Tuple[K, int]]:
        return list(self._slots)

    def top(self):
        return self._slots[0] if self._slots else None

    def __len__(self) -> int:
        return len(self._slots)


# This function does rank a mapping in its iteration order.
# It returns at most top_n pairs in descending order.
def rank_top(totals: dict, top_n: int) -> List[Tuple[str, int]]:
    ranking: TopRanking[str] = TopRanking(top_n)
    for key, value in totals.items():
        ranking.offer(key, value)
    return ranking.entries()


# This function does turn ranked pairs into exactly `slots` display names.
# Empty slots are filled with the placeholder.
def padded_names(entries, slots: int, placeholder: str) -> List[str]:
    names = [str(key) for key, _ in list(entries)[:slots]]
    return names + [placeholder] * (slots - len(names))
