"""Test the search CLI."""

import json

from turbopt.cli import run_search_main
from turbopt.core.config import default_config, merge_config, save_config


def test_cli_smallest_space(capsys):
    code = run_search_main(["--max-height", "4", "--max-width", "5"])

    out = json.loads(capsys.readouterr().out)
    assert code == 0
    assert out["found"] is True
    assert out["material"] == "Iron"
    assert out["stats"]["height"] == 4
    assert out["stats"]["width"] == 5
    assert out["build_cost"]["coil_blocks"] == 8
    assert out["counts"]["geometries"] == 1


def test_cli_no_solution_exit_code(capsys):
    code = run_search_main(
        [
            "--max-height", "4",
            "--max-width", "5",
            "--flow-mode", "step_until_max",
            "--flow-value", "40001",
        ]
    )

    out = json.loads(capsys.readouterr().out)
    assert code == 1
    assert out["found"] is False
    assert out["fitness"] is None
    assert "stats" not in out


def test_cli_config_file(tmp_path, capsys):
    config = merge_config(
        default_config(),
        {
            "search": {
                "max_height": 6,
                "max_width": 7,
                "material": "Gold",
                "fitness": "energy_per_mb",
                "flow": {"mode": "fixed", "value": 5000},
            }
        },
    )
    path = tmp_path / "search.yaml"
    save_config(config, path)

    code = run_search_main(["--config", str(path), "--exact-power"])

    out = json.loads(capsys.readouterr().out)
    assert code == 0
    assert out["material"] == "Gold"
    assert out["stats"]["flow_rate"] == 5000
    assert out["counts"]["geometries"] == 12


def test_cli_logs_to_stderr(capsys):
    run_search_main(["--max-height", "4", "--max-width", "5", "--log-level", "DEBUG"])

    captured = capsys.readouterr()
    json.loads(captured.out)
    messages = [json.loads(line)["message"] for line in captured.err.splitlines()]
    assert "Search finished" in messages
    assert "search completed" in messages
