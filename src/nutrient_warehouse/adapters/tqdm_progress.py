"""Terminal progress bars built on tqdm."""

from dataclasses import dataclass, field

from tqdm import tqdm

from nutrient_warehouse.services.progress import ProgressReporter


@dataclass
class TqdmProgressReporter(ProgressReporter):
    """Renders a row counter per table and a percentage bar for the snapshot."""

    bars: dict[str, tqdm] = field(default_factory=dict)
    snapshot_bar: tqdm | None = None

    def rows_loaded(self, table: str, count: int) -> None:
        bar = self._row_bar(table)
        bar.update(count - bar.n)

    def load_finished(self, table: str, count: int) -> None:
        bar = self._row_bar(table)
        bar.update(count - bar.n)
        bar.close()
        self.bars.pop(table, None)

    def pages_copied(self, fraction: float) -> None:
        if self.snapshot_bar is None:
            self.snapshot_bar = tqdm(
                total=100, desc="snapshot", unit="%", bar_format="{l_bar}{bar}"
            )
        percent = round(fraction * 100, 1)
        self.snapshot_bar.update(percent - self.snapshot_bar.n)
        if fraction >= 1:
            self.snapshot_bar.close()
            self.snapshot_bar = None

    def close(self) -> None:
        for bar in self.bars.values():
            bar.close()
        self.bars.clear()
        if self.snapshot_bar is not None:
            self.snapshot_bar.close()
            self.snapshot_bar = None

    def _row_bar(self, table: str) -> tqdm:
        bar = self.bars.get(table)
        if bar is None:
            bar = tqdm(desc=table, unit=" rows", unit_scale=True)
            self.bars[table] = bar
        return bar
