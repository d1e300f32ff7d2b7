"""
CLI Tests

Commands are driven through main(argv) with files on disk.
"""

import json

import pytest

from interpretation_graph.cli import create_parser, main


SEMANTICS = {
    "nodes": [
        {"name": "family::alice", "simpleName": "alice", "kind": "INDIVIDUAL"},
        {"name": "family::bob", "simpleName": "bob", "kind": "INDIVIDUAL"},
    ],
    "relations": [
        {"name": "family::knows", "simpleName": "knows", "arity": 2,
         "detail": {"type": "reference", "containment": False}},
        {"name": "family::broken", "simpleName": "broken", "arity": 1,
         "detail": {"type": "predicate", "error": True}},
    ],
    "partialInterpretation": {
        "family::knows": [[0, 1, "TRUE"]],
        "family::broken": [],
        "builtin::exists": [[0, "TRUE"], [1, "TRUE"]],
    },
}


@pytest.fixture
def semantics_file(tmp_path):
    path = tmp_path / "semantics.json"
    path.write_text(json.dumps(SEMANTICS))
    return str(path)


class TestRender:

    def test_prints_dot(self, semantics_file, capsys):
        assert main(["render", semantics_file]) == 0
        out = capsys.readouterr().out
        assert out.startswith("digraph {")
        assert "n0 -> n1 [" in out
        assert out.rstrip().endswith("}")

    def test_visibility_override(self, semantics_file, capsys):
        assert main(["render", semantics_file, "--visibility", "family::knows=none"]) == 0
        assert " -> " not in capsys.readouterr().out

    def test_line_count_on_stderr(self, semantics_file, capsys):
        assert main(["render", semantics_file, "--line-count"]) == 0
        captured = capsys.readouterr()
        # header, two nodes, one edge, closing brace
        assert captured.err.strip() == "// 10 lines"

    def test_font_from_environment(self, semantics_file, capsys, monkeypatch):
        monkeypatch.setenv("INTERPRETATION_GRAPH_FONT_NAME", "Inter")
        assert main(["render", semantics_file]) == 0
        assert 'fontname="Inter"' in capsys.readouterr().out

    def test_stdin(self, capsys, monkeypatch):
        import io
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(SEMANTICS)))
        assert main(["render", "-"]) == 0
        assert capsys.readouterr().out.startswith("digraph {")


class TestRelations:

    def test_lists_visibility_and_allowed_levels(self, semantics_file, capsys):
        assert main(["relations", semantics_file]) == 0
        lines = capsys.readouterr().out.strip().split("\n")
        assert lines == [
            "family::knows\t2\tall\tnone/must/all",
            "family::broken\t1\tmust\tnone/must",
        ]


class TestFailures:

    def test_missing_file(self, tmp_path):
        assert main(["render", str(tmp_path / "absent.json")]) == 1

    def test_malformed_payload(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"nodes": [{"name": "x"}]}))
        assert main(["render", str(path)]) == 1

    def test_unknown_relation_override(self, semantics_file):
        assert main(["render", semantics_file, "--visibility", "family::nope=all"]) == 1

    def test_disallowed_override(self, semantics_file):
        assert main(["render", semantics_file, "--visibility", "family::broken=all"]) == 1

    def test_no_command(self, capsys):
        assert main([]) == 2
        assert "usage" in capsys.readouterr().out

    def test_parser_defaults(self):
        args = create_parser().parse_args(["render", "model.json"])
        assert args.visibility == []
        assert args.show_non_existent is False
        assert args.no_abbreviate is False
