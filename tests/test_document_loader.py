import unittest

from ci_analysis.config.loader import load, to_node
from ci_analysis.domain.node import ABSENT, MappingNode, ScalarNode, SequenceNode, to_python
from ci_analysis.errors import ParseError


class TestDocumentLoader(unittest.TestCase):
    def test_loads_mapping_root_in_document_order(self) -> None:
        doc = load("zeta:\n  script: [a]\nstages: [build]\nalpha:\n  script: [b]\n")

        self.assertIsInstance(doc, MappingNode)
        self.assertEqual(("zeta", "stages", "alpha"), doc.keys())
        self.assertIsInstance(doc.get("stages"), SequenceNode)
        self.assertIs(ABSENT, doc.get("missing"))

    def test_malformed_yaml_raises_parse_error_with_diagnostic(self) -> None:
        with self.assertRaises(ParseError) as cm:
            load("build: {stage: build\n")

        self.assertTrue(cm.exception.message.strip())
        self.assertIsNotNone(cm.exception.cause)

    def test_non_mapping_roots_are_rejected(self) -> None:
        for raw in ["- a\n- b\n", "just a string\n", "", "# only a comment\n"]:
            with self.subTest(raw=raw):
                with self.assertRaises(ParseError) as cm:
                    load(raw)
                self.assertIn("mapping", str(cm.exception))

    def test_duplicate_keys_are_rejected(self) -> None:
        raw = "build:\n  script: [a]\nbuild:\n  script: [b]\n"
        with self.assertRaises(ParseError) as cm:
            load(raw)
        self.assertIn("duplicate key", str(cm.exception))

    def test_keys_colliding_after_stringification_are_rejected(self) -> None:
        for raw in ["1: {}\n'1': {}\n", "true: {}\n'true': {}\n", "2024-01-31: {}\n'2024-01-31': {}\n"]:
            with self.subTest(raw=raw):
                with self.assertRaises(ParseError) as cm:
                    load(raw)
                self.assertIn("duplicate key", str(cm.exception))

    def test_merged_keys_colliding_after_stringification_are_rejected(self) -> None:
        raw = (
            ".base: &base\n"
            "  1: {stage: a}\n"
            "jobs:\n"
            "  <<: *base\n"
            "  '1': {stage: b}\n"
        )
        with self.assertRaises(ParseError) as cm:
            load(raw)
        self.assertIn("duplicate key", str(cm.exception))

    def test_to_node_rejects_keys_equal_once_stringified(self) -> None:
        with self.assertRaises(ParseError):
            to_node({1: {}, "1": {}})

    def test_only_true_and_false_resolve_to_booleans(self) -> None:
        doc = load("flags: [on, off, yes, no, true, False, 'on']\n")

        self.assertEqual(["on", "off", "yes", "no", True, False, "on"], to_python(doc.get("flags")))

    def test_on_as_key_stays_a_string(self) -> None:
        doc = load("on:\n  script: [x]\n")

        self.assertEqual(("on",), doc.keys())

    def test_merge_keys_can_be_overridden(self) -> None:
        raw = (
            ".defaults: &defaults\n"
            "  stage: build\n"
            "  tags: [docker]\n"
            "job:\n"
            "  <<: *defaults\n"
            "  stage: deploy\n"
        )
        doc = load(raw)
        job = doc.get("job")

        self.assertEqual("deploy", job.get("stage").text)
        self.assertEqual(["docker"], to_python(job.get("tags")))

    def test_recursive_alias_is_a_parse_error(self) -> None:
        with self.assertRaises(ParseError):
            load("job: &x [*x]\n")

    def test_non_string_keys_and_scalars_are_stringified(self) -> None:
        doc = load("1:\n  stage: 2\nnull_job:\n  when: ~\n  allow_failure: true\n")

        self.assertEqual(("1", "null_job"), doc.keys())
        self.assertEqual("2", doc.get("1").get("stage").text)
        self.assertTrue(doc.get("null_job").get("when").is_null)
        self.assertEqual("true", doc.get("null_job").get("allow_failure").text)

    def test_to_node_round_trips_plain_values(self) -> None:
        data = {"a": [1, {"b": None}], "c": "x"}
        node = to_node(data)

        self.assertEqual(data, to_python(node))
        self.assertEqual(ScalarNode("x"), node.get("c"))


if __name__ == "__main__":
    unittest.main()
