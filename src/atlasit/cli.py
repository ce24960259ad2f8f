from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Optional

import typer

from atlasit.core.catalog.sources import SOURCE_CATALOG, get_source_spec
from atlasit.core.catalog.whitelists import get_whitelists
from atlasit.core.logic.colors import province_library_ramp, state_library_ramp
from atlasit.core.logic.extractor import DelimitedRecordExtractor
from atlasit.settings import configure_logging

app = typer.Typer(add_completion=False, no_args_is_help=True)

_RAMPS = {"state": state_library_ramp, "province": province_library_ramp}


@app.command()
def sources() -> None:
    """List the catalog sources."""
    for spec in SOURCE_CATALOG:
        typer.echo(f"{spec.name:<32} {spec.kind:<13} {spec.description}")


@app.command()
def parse(
    target: str,
    delimiter: str = typer.Option(",", help="Field separator: ',' or ';'."),
    decimal: str = typer.Option("dot", help="Decimal convention: 'dot' or 'comma'."),
    value_index: int = typer.Option(1, help="Value field on unquoted lines."),
    canonicalize: bool = typer.Option(False, help="Fold typographic apostrophes."),
    data_root: Optional[str] = typer.Option(None, help="Overrides ATLASIT_DATA_ROOT."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Parse a local file, or a catalog source by name, and print it as JSON."""
    if verbose:
        configure_logging(logging.DEBUG)
    whitelists = get_whitelists(canonicalize=canonicalize)

    path = Path(target)
    try:
        if path.is_file():
            text = path.read_text(encoding="utf-8-sig")
            extractor = DelimitedRecordExtractor(
                whitelists, delimiter=delimiter, decimal=decimal, value_index=value_index
            )
            dataset = extractor.parse(text)
        else:
            spec = get_source_spec(target)
            from atlasit.app.loans import load_loans
            dataset = load_loans(spec.name, whitelists=whitelists, data_root=data_root)
    except (KeyError, ValueError, FileNotFoundError) as e:
        raise typer.BadParameter(str(e)) from e

    typer.echo(json.dumps(dataset.model_dump(), ensure_ascii=False, indent=2))


@app.command()
def color(value: float, ramp: str = typer.Option("state", help="'state' or 'province'.")) -> None:
    """Print the choropleth color for a value."""
    if ramp not in _RAMPS:
        raise typer.BadParameter(f"Unknown ramp: {ramp}. Use one of {sorted(_RAMPS)}.")
    typer.echo(_RAMPS[ramp]()(value))


if __name__ == "__main__":
    app()
