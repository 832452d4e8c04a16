from __future__ import annotations

import json
from pathlib import Path
from typing import List

import typer
from tqdm import tqdm

from molcore.config import load_settings
from molcore.core.bonding import BondInferenceEngine
from molcore.core.geometry import angle, bounding_box, center_of_mass, dihedral, distance
from molcore.core.logging_utils import get_logger
from molcore.core.manifest import Manifest
from molcore.core.validation import ValidationLimits, check_molecule
from molcore.parsers.base import ParseResult
from molcore.parsers.detect import detect_format
from molcore.parsers.dispatch import parse_path

logger = get_logger(__name__)
app = typer.Typer(no_args_is_help=True)


def _engine_and_limits() -> tuple[BondInferenceEngine, ValidationLimits]:
    settings = load_settings()
    return BondInferenceEngine.from_settings(settings), ValidationLimits.from_settings(settings)


def _load(path: Path) -> ParseResult:
    if not path.is_file():
        raise typer.BadParameter(f"No such file: {path}")
    engine, limits = _engine_and_limits()
    return parse_path(path, engine=engine, limits=limits)


@app.command("detect")
def detect_cmd(path: Path = typer.Argument(..., help="Molecule file.")):
    """Print the format a file would be parsed as."""
    if not path.is_file():
        raise typer.BadParameter(f"No such file: {path}")
    content = path.read_text(encoding="utf-8", errors="ignore")
    typer.echo(detect_format(content, path.name).value)


@app.command("parse")
def parse_cmd(
    path: Path = typer.Argument(..., help="Molecule file (.xyz, .mol, .pdb, .sdf, optionally .gz)."),
    as_json: bool = typer.Option(False, "--json", help="Print the summary as JSON."),
):
    """Parse a file and print a summary of the molecule."""
    result = _load(path)
    if not result.ok:
        typer.echo(f"error ({result.format.value}): {result.error}", err=True)
        raise typer.Exit(code=1)

    mol = result.molecule
    box = bounding_box(mol.atoms)
    summary = {
        "format": result.format.value,
        **mol.to_dict(),
        "center_of_mass": [round(c, 4) for c in center_of_mass(mol.atoms)],
        "box_size": [round(s, 4) for s in box.size],
        "properties": dict(mol.properties),
    }
    _, limits = _engine_and_limits()
    for issue in check_molecule(mol, limits):
        logger.warning("%s: %s", path, issue)

    if as_json:
        typer.echo(json.dumps(summary, ensure_ascii=False, indent=2))
        return
    for key, value in summary.items():
        if key != "properties":
            typer.echo(f"{key}: {value}")
    for key, value in summary["properties"].items():
        typer.echo(f"property {key}: {value}")


@app.command("measure")
def measure_cmd(
    path: Path = typer.Argument(..., help="Molecule file."),
    indices: List[int] = typer.Argument(..., help="2, 3 or 4 zero-based atom indices."),
):
    """Distance (2 atoms), angle (3) or dihedral (4) between atoms."""
    if len(indices) not in (2, 3, 4):
        raise typer.BadParameter("Give 2, 3 or 4 atom indices.")
    result = _load(path)
    if not result.ok:
        typer.echo(f"error ({result.format.value}): {result.error}", err=True)
        raise typer.Exit(code=1)

    atoms = result.molecule.atoms
    bad = [i for i in indices if not 0 <= i < len(atoms)]
    if bad:
        raise typer.BadParameter(f"Atom index out of range (0..{len(atoms) - 1}): {bad}")
    points = [atoms[i].position for i in indices]
    ids = "-".join(atoms[i].id for i in indices)

    if len(points) == 2:
        typer.echo(f"distance {ids}: {distance(*points):.4f} A")
    elif len(points) == 3:
        typer.echo(f"angle {ids}: {angle(*points):.2f} deg")
    else:
        typer.echo(f"dihedral {ids}: {dihedral(*points):.2f} deg")


@app.command("summarize")
def summarize_cmd(
    paths: List[Path] = typer.Argument(..., help="Molecule files."),
    manifest: Path = typer.Option(..., help="Output manifest path (.parquet or .csv)."),
):
    """Parse many files and write one summary row per file."""
    engine, limits = _engine_and_limits()
    results = []
    for p in tqdm(paths, unit="file", desc="parse"):
        if not p.is_file():
            logger.error("Skipping missing file %s", p)
            continue
        results.append((str(p), parse_path(p, engine=engine, limits=limits)))

    m = Manifest.from_results(results)
    m.save(manifest)
    logger.info("Wrote manifest to %s (count=%d failed=%d)", manifest, m.count(), m.failed_count())
    if m.failed_count():
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
