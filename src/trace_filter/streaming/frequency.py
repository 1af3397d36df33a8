"""
Key frequency accumulation with ranked reporting
"""

from typing import Dict, List, Optional, TextIO, Tuple

from rich.cells import cell_len
from rich.console import Console
from rich.table import Table
from rich.text import Text


class FrequencyTable:
    """
    Count occurrences per key

    Reports rank keys by descending count. Keys with equal counts keep the
    order in which they were first seen.
    """

    def __init__(self):
        self.counts: Dict[str, int] = {}

    def add(self, key: str, amount: int = 1) -> None:
        self.counts[key] = self.counts.get(key, 0) + amount

    def __getitem__(self, key: str) -> int:
        return self.counts[key]

    def __len__(self) -> int:
        return len(self.counts)

    def ranked(self) -> List[Tuple[str, int]]:
        """Items by descending count, ties in first-seen order"""
        # sorted() is stable and dicts keep insertion order
        return sorted(self.counts.items(), key=lambda item: item[1], reverse=True)

    def print(self, header: str, key_label: str, stream: Optional[TextIO] = None) -> None:
        """Write a caption and a two-column key/count table"""
        # Wide enough that no key is cropped: two padded cells and three borders
        key_width = max([cell_len(key_label)] + [cell_len(key) for key in self.counts])
        count_width = max([len("Count")] + [len(str(c)) for c in self.counts.values()])
        width = max(key_width + count_width + 7, 80)

        console = Console(file=stream, highlight=False, width=width)
        table = Table()
        table.add_column(key_label, no_wrap=True)
        table.add_column("Count", justify="right", no_wrap=True)
        for key, count in self.ranked():
            table.add_row(Text(key), str(count))

        console.print(header, markup=False)
        console.print(table)
        console.print()
