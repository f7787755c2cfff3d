"""Tests for the CLI (app/cli.py)."""

import json

import pytest
from cli import (__version__, build_parser, cmd_measure, cmd_validate, load_circuit, main,
                 try_load_circuit)
from models.circuit import CircuitModel


def write_circuit(path, elements, black, red):
    data = {
        "elements": elements,
        "leads": {"black": {"x": black[0], "y": black[1]}, "red": {"x": red[0], "y": red[1]}},
    }
    path.write_text(json.dumps(data))
    return str(path)


@pytest.fixture
def loop_file(tmp_path):
    """5 V source closed through a 10 Ω resistor, red lead on the positive side."""
    return write_circuit(
        tmp_path / "loop.json",
        [
            {"type": "VoltageSource", "id": "V1", "value": "5V", "terminals": [[0, 0], [0, 60]]},
            {"type": "Wire", "id": "W1", "terminals": [[0, 60], [60, 60]]},
            {"type": "Resistor", "id": "R1", "value": "10", "terminals": [[60, 60], [0, 0]]},
        ],
        (0, 0),
        (0, 60),
    )


@pytest.fixture
def short_file(tmp_path):
    return write_circuit(
        tmp_path / "short.json",
        [
            {"type": "VoltageSource", "value": 5, "terminals": [[0, 0], [0, 60]]},
            {"type": "VoltageSource", "value": 3, "terminals": [[0, 0], [0, 60]]},
        ],
        (0, 0),
        (0, 60),
    )


@pytest.fixture
def empty_file(tmp_path):
    return write_circuit(tmp_path / "empty.json", [], (0, 0), (10, 10))


class TestLoadCircuit:
    def test_load_valid(self, loop_file):
        model = load_circuit(loop_file)
        assert isinstance(model, CircuitModel)
        assert len(model.elements) == 3

    def test_load_nonexistent(self):
        with pytest.raises(SystemExit):
            load_circuit("/nonexistent/file.json")

    def test_load_invalid_json(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("not json")
        with pytest.raises(SystemExit):
            load_circuit(str(bad))

    def test_try_load_reports_structure_error(self, tmp_path):
        bad = tmp_path / "bad_struct.json"
        bad.write_text('{"foo": "bar"}')
        model, error = try_load_circuit(str(bad))
        assert model is None
        assert "invalid circuit file" in error

    def test_try_load_accepts_pos_list(self, tmp_path):
        path = tmp_path / "pos_list.json"
        path.write_text(json.dumps({"elements": [{"type": "Resistor", "value": 10, "pos": [0, 0]}]}))
        model, error = try_load_circuit(str(path))
        assert error == ""
        assert model.elements[0].terminals == ((30.0, 0.0), (30.0, 60.0))


class TestMeasure:
    def test_text_output(self, loop_file, capsys):
        assert main(["measure", loop_file]) == 0
        assert capsys.readouterr().out.strip() == "v+ = 5.00000 V"

    def test_json_output(self, loop_file, capsys):
        assert main(["measure", loop_file, "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["status"] == "voltage"
        assert data["value"] == pytest.approx(5.0)

    def test_short_circuit(self, short_file, capsys):
        assert main(["measure", short_file]) == 0
        assert "short circuit" in capsys.readouterr().out

    def test_floating(self, empty_file, capsys):
        assert main(["measure", empty_file]) == 0
        assert "floating" in capsys.readouterr().out

    def test_debug_prints_equations(self, loop_file, capsys):
        main(["measure", loop_file, "--debug"])
        out = capsys.readouterr().out
        assert "v[0.0,0.0]" in out

    def test_output_file(self, loop_file, tmp_path):
        out = tmp_path / "reading.txt"
        args = build_parser().parse_args(["measure", loop_file, "-o", str(out)])
        assert cmd_measure(args) == 0
        assert out.read_text().strip() == "v+ = 5.00000 V"


class TestValidate:
    def test_valid(self, loop_file, capsys):
        args = build_parser().parse_args(["validate", loop_file])
        assert cmd_validate(args) == 0
        assert "valid" in capsys.readouterr().out

    def test_invalid(self, empty_file, capsys):
        assert main(["validate", empty_file]) == 1
        assert "no elements" in capsys.readouterr().err.lower()


class TestEquations:
    def test_lists_system(self, loop_file, capsys):
        assert main(["equations", loop_file]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 7
        assert all(line.endswith(" = 0") for line in lines)

    def test_matrix(self, loop_file, capsys):
        assert main(["equations", loop_file, "--matrix"]) == 0
        out = capsys.readouterr().out
        assert "| rhs" in out
        assert "rank 6 of 7 equations" in out

    def test_floating_leads(self, tmp_path, capsys):
        path = write_circuit(
            tmp_path / "open.json",
            [{"type": "Wire", "terminals": [[0, 0], [1, 0]]}],
            (0, 0),
            (50, 50),
        )
        assert main(["equations", path]) == 1


class TestBatch:
    def test_directory(self, loop_file, short_file, capsys, tmp_path):
        assert main(["batch", str(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert "loop.json" in out
        assert "short.json" in out
        assert "2/2 measured" in out

    def test_load_error_fails(self, loop_file, tmp_path, capsys):
        (tmp_path / "broken.json").write_text("{")
        assert main(["batch", str(tmp_path)]) == 1
        assert "LOAD_ERROR" in capsys.readouterr().out

    def test_no_files(self, tmp_path, capsys):
        assert main(["batch", str(tmp_path)]) == 1

    def test_not_a_pattern(self, tmp_path):
        assert main(["batch", str(tmp_path / "missing.json")]) == 1


class TestVersion:
    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--version"])
        assert __version__ in capsys.readouterr().out

    def test_version_string(self):
        parts = __version__.split(".")
        assert len(parts) == 3
