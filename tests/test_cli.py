import json

from typer.testing import CliRunner

from atlasit.cli import app

runner = CliRunner()


def test_sources_lists_catalog():
    result = runner.invoke(app, ["sources"])
    assert result.exit_code == 0
    assert "prestiti_regioni_2022" in result.output


def test_parse_local_file(tmp_path):
    path = tmp_path / "loans.csv"
    path.write_text('Piemonte,"1,500"\nNord-ovest,"800"\nAltro,"1"\n', encoding="utf-8")

    result = runner.invoke(app, ["parse", str(path)])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["regions"] == {"Piemonte": 1500}
    assert payload["geographical"] == {"Nord-ovest": 800}
    assert payload["dropped"] == ["Altro"]


def test_parse_catalog_source(data_root):
    result = runner.invoke(app, ["parse", "prestiti_regioni_2022", "--data-root", data_root])
    assert result.exit_code == 0
    assert json.loads(result.output)["population"] == {"Fino a 2.000 abitanti": 700}


def test_parse_unknown_target():
    result = runner.invoke(app, ["parse", "does-not-exist"])
    assert result.exit_code != 0


def test_color_lookup():
    result = runner.invoke(app, ["color", "1500", "--ramp", "state"])
    assert result.exit_code == 0
    assert result.output.strip() == "#FED976"
