"""
Name Escaping Tests
"""

import re

import pytest
from hypothesis import given, strategies as st

from interpretation_graph.visualization.escaping import (
    encode_name, escape_html, obfuscate_color,
)


class TestEncodeName:

    @pytest.mark.parametrize("name,expected", [
        ("alice", "alice"),
        ("family::alice", "family::alice"),
        ("has_child", "has___child"),
        ("o'brien", "o__brien"),
        ("a b", "a_20b"),
        ("50%", "50_25"),
        ("a\"b", "a_22b"),
        ("é", "_C3_A9"),
        ("a.b-c~d*(e)!", "a.b-c~d*(e)!"),
    ])
    def test_examples(self, name, expected):
        assert encode_name(name) == expected

    @given(st.text())
    def test_output_is_id_safe(self, name):
        encoded = encode_name(name)
        assert '%' not in encoded
        assert "'" not in encoded
        assert '"' not in encoded
        assert ' ' not in encoded

    @given(st.text())
    def test_deterministic(self, name):
        assert encode_name(name) == encode_name(name)


class TestLabelText:

    def test_escape_html(self):
        assert escape_html('<b> & "x"') == "&lt;b&gt; &amp; &quot;x&quot;"

    def test_obfuscate_color_is_stable(self):
        assert obfuscate_color("Person") == obfuscate_color("Person")
        assert obfuscate_color("Person") != obfuscate_color("Dog")

    def test_obfuscate_color_hides_the_hash(self):
        color = obfuscate_color("Person")
        assert re.fullmatch(r"[0-9a-f]{6}", color)
        assert "Person" not in color
