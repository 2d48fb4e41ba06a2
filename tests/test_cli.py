import json

from credit_model.__main__ import main


def test_seed_deal_prints_statements(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    for section in ("Income Statement", "Cash Flow", "Debt Schedule", "Covenants"):
        assert section in out
    assert "Entry leverage 3.20x" in out


def test_json_output(tmp_path, capsys, seed_payload):
    path = tmp_path / "model.json"
    path.write_text(json.dumps({"dealId": "d-1", "name": "Base", "assumptions": seed_payload,
                                "isPublished": False}))
    assert main([str(path), "--json"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["projections"][1]["endingDebt"] == 366_406_250


def test_invalid_assumptions_exit_code(tmp_path, capsys, seed_payload):
    del seed_payload["ltmRevenue"]
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(seed_payload))
    assert main([str(path)]) == 2
    assert "ltmRevenue is required" in capsys.readouterr().err


def test_strict_rejects_short_arrays(tmp_path, capsys, seed_payload):
    seed_payload["capexPercent"] = [3, 3]
    path = tmp_path / "short.json"
    path.write_text(json.dumps(seed_payload))
    assert main([str(path), "--strict"]) == 2
    assert main([str(path)]) == 0


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.json")]) == 2


def test_oversized_number_is_rejected_not_raised(tmp_path, capsys, seed_payload):
    path = tmp_path / "huge.json"
    path.write_text(json.dumps(seed_payload).replace("500000000", "1" + "0" * 400, 1))
    assert main([str(path)]) == 2
    assert "invalid assumptions: ltmRevenue" in capsys.readouterr().err


def test_scenarios_follow_strict_flag(tmp_path, capsys, seed_payload):
    path = tmp_path / "model.json"
    path.write_text(json.dumps(seed_payload))
    assert main([str(path), "--strict", "--scenarios"]) == 0
    assert "Scenarios" in capsys.readouterr().out

    seed_payload["ebitdaMarginPercent"] = [25, 26]
    path.write_text(json.dumps(seed_payload))
    assert main([str(path), "--strict", "--scenarios"]) == 2
    assert "ebitda_margin_pct" in capsys.readouterr().err
