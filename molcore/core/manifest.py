from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from molcore.parsers.base import ParseResult

COLUMNS = [
    "path",
    "format",
    "ok",
    "error",
    "molecule_id",
    "name",
    "formula",
    "molecular_weight",
    "atom_count",
    "bond_count",
]


@dataclass(frozen=True)
class Manifest:
    """Summary table of parsed files.

    Convention:
      - one row per input file, failures included (`ok` False, `error` set)
      - molecule columns are empty for failed rows
    """

    df: pd.DataFrame

    @staticmethod
    def from_results(results: Iterable[tuple[str, ParseResult]]) -> "Manifest":
        rows = []
        for path, result in results:
            row = {"path": str(path), "format": result.format.value, "ok": result.ok, "error": None}
            if result.ok:
                row.update(result.molecule.to_dict())
            else:
                row["error"] = result.error
            rows.append(row)
        return Manifest(pd.DataFrame(rows, columns=COLUMNS))

    def save_parquet(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.df.to_parquet(path, index=False)

    @staticmethod
    def load_parquet(path: Path) -> "Manifest":
        return Manifest(pd.read_parquet(path))

    def save_csv(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.df.to_csv(path, index=False)

    def save(self, path: Path) -> None:
        """Write parquet or CSV depending on the suffix."""
        if path.suffix.lower() == ".csv":
            self.save_csv(path)
        else:
            self.save_parquet(path)

    def count(self) -> int:
        return int(len(self.df))

    def failed_count(self) -> int:
        if "ok" not in self.df.columns:
            return 0
        return int((~self.df["ok"].astype(bool)).sum())

    def total_atoms(self) -> Optional[int]:
        if "atom_count" not in self.df.columns:
            return None
        return int(self.df["atom_count"].fillna(0).sum())
