import re

import click.testing

import rabi
import rabi.cli
from rabi import distance
from rabi import common_types as ct

CODE_LINE_RE = re.compile(r"^\d+( \d+)*$")

ENV = {'RABI_PROGRESS_BAR': "0"}


def _invoke(*args, **kwargs):
    runner = click.testing.CliRunner()
    return runner.invoke(rabi.cli.cli, list(args), env=ENV, **kwargs)


def _parse_codes(output):
    return [
        tuple(int(symbol) for symbol in line.split())
        for line in output.splitlines()
        if CODE_LINE_RE.match(line)
    ]


def test_version():
    result = _invoke("version")
    assert result.exit_code == 0
    assert rabi.__version__ in result.output


def test_help():
    result = _invoke("--help")
    assert result.exit_code == 0
    for command in ["exact", "greedy", "tweaked", "checksum", "how-many"]:
        assert command in result.output


def test_exact():
    result = _invoke("exact", "-n", "4", "-r", "1", "-a", "5", "--check")
    assert result.exit_code == 0, result.output

    code_set = _parse_codes(result.output)
    assert len(code_set) == 125
    assert code_set == rabi.generate_exact_code(4, 1, 5)
    assert "125 codes robust to 1 erasure(s)" in result.output
    assert "Minimum distance: 2" in result.output
    assert "Warning" not in result.output


def test_exact_adjusted():
    result = _invoke("exact", "-n", "4", "-r", "1", "-a", "6")
    assert result.exit_code == 0, result.output
    assert "Warning: Reed-Solomon codes require the alphabet size to be a prime" in result.output
    assert len(_parse_codes(result.output)) == 125


def test_exact_invalid():
    result = _invoke("exact", "-n", "4", "-r", "4", "-a", "5")
    assert result.exit_code == 1
    assert "Error: Invalid redundancy=4" in result.output
    assert _parse_codes(result.output) == []


def test_exact_labels():
    result = _invoke("exact", "-n", "3", "-r", "1", "-a", "3", "-l", "blue,red,green")
    assert result.exit_code == 0, result.output

    lines = [line for line in result.output.splitlines() if line.count("-") == 2]
    assert len(lines) == 9
    assert lines[0] == "blue-blue-blue"
    assert all(set(line.split("-")) <= {"blue", "red", "green"} for line in lines)


def test_exact_labels_invalid():
    result = _invoke("exact", "-n", "3", "-r", "1", "-a", "3", "-l", "blue,red")
    assert result.exit_code == 1
    assert "Error: Invalid labels" in result.output


def test_greedy():
    result = _invoke("greedy", "-n", "4", "-r", "2", "-a", "4", "-t", "3", "--seed", "11")
    assert result.exit_code == 0, result.output

    code_set = _parse_codes(result.output)
    assert len(code_set) > 0
    assert distance.is_separated(code_set, redundancy=2)
    assert code_set == rabi.generate_greedy_code(4, 2, 4, num_trials=3, seed=11)


def test_greedy_seed_envvar():
    runner = click.testing.CliRunner()
    args   = ["greedy", "-n", "3", "-r", "1", "-a", "3", "-t", "2"]
    env    = dict(ENV, RABI_SEED="5")
    result_a = runner.invoke(rabi.cli.cli, args, env=env)
    result_b = runner.invoke(rabi.cli.cli, args, env=env)
    assert result_a.exit_code == 0, result_a.output
    assert _parse_codes(result_a.output) == _parse_codes(result_b.output)


def test_greedy_timeout():
    result = _invoke("greedy", "-n", "4", "-r", "1", "-a", "4", "--timeout", "0")
    assert result.exit_code == 0, result.output
    assert "Warning: Search interrupted" in result.output
    assert "Warning: No codes generated" in result.output


def test_tweaked_stdin():
    candidates = "\n".join([
        "# odd colours first",
        "1 0 0",
        "1,1,1",
        "3 2 2",
        "",
        "3;0;1  # trailing comment",
    ])
    result = _invoke("tweaked", "-", "-r", "1", "-a", "4", "--seed", "1", input=candidates)
    assert result.exit_code == 0, result.output

    code_set = _parse_codes(result.output)
    assert len(code_set) > 0
    assert set(code_set) <= {(1, 0, 0), (1, 1, 1), (3, 2, 2), (3, 0, 1)}
    assert distance.is_separated(code_set, redundancy=1)


def test_tweaked_invalid_candidates():
    result = _invoke("tweaked", "-", "-r", "1", input="0 1 2\n0 x 2\n")
    assert result.exit_code == 1
    assert "Error: Invalid candidate on line 2" in result.output

    result = _invoke("tweaked", "-", "-r", "1", input="0 1 2\n0 1\n")
    assert result.exit_code == 1
    assert "Error: Invalid candidates" in result.output


def test_tweaked_empty():
    result = _invoke("tweaked", "-", "-r", "1", input="# nothing\n")
    assert result.exit_code == 0, result.output
    assert "Warning: Empty candidate pool" in result.output
    assert "0 codes" in result.output


def test_checksum():
    result = _invoke("checksum", "-n", "4", "-a", "5")
    assert result.exit_code == 0, result.output

    code_set = _parse_codes(result.output)
    assert len(code_set) == 125
    assert all(sum(code) % 5 == 0 for code in code_set)


def test_how_many():
    result = _invoke("how-many", "-n", "4", "-r", "1", "-a", "5")
    assert result.exit_code == 0, result.output
    assert "redundancy: 1" in result.output
    assert "125" in result.output
    assert "*:" in result.output


def test_parse_candidates():
    lines = ["0 1 2\n", "  # comment\n", "2,1,0\n", "1; 1; 1 # x\n"]
    assert rabi.cli.parse_candidates(lines) == [[0, 1, 2], [2, 1, 0], [1, 1, 1]]

    try:
        rabi.cli.parse_candidates(["0 1\n", "a b\n"])
        assert False, "expected InvalidInput"
    except ct.InvalidInput as ex:
        assert "line 2" in str(ex)
