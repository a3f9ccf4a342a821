import json
import unittest

from analyzer.engine import PARSE_ERROR_PREFIX, analyze, analyze_safe
from ci_analysis.domain.node import to_python
from ci_analysis.domain.result import OnlyJobEntry
from ci_analysis.errors import ParseError

REALISTIC_CI = """\
stages:
  - build
  - test
  - deploy

variables:
  VAULT_ADDR: https://vault.example.com

default:
  image: alpine:3.19

compile:
  stage: build
  script:
    - make

unit:
  script:
    - make test
  only:
    - main
    - merge_requests

sign_jar:
  stage: deploy
  id_tokens:
    VAULT_ID_TOKEN:
      aud: https://vault.example.com
  script:
    - ./sign.sh
  only: [main, tags]

release:
  stage: deploy
  rules:
    - if: $CI_COMMIT_TAG
      when: always
  script: [./release.sh]

broken_job: "not a mapping"
"""


class TestAnalyzeEngine(unittest.TestCase):
    def test_build_job_with_declared_stages(self) -> None:
        result = analyze("build:\n  stage: build\n  script: [x]\nstages: [build, test]\n")

        self.assertEqual(("build",), result.jobs)
        self.assertEqual(("stages",), result.reserved_keywords)
        self.assertEqual(("build", "test"), result.stages)
        self.assertEqual({"build": ("build",)}, dict(result.jobs_by_stage))
        self.assertEqual({}, dict(result.jobs_with_rules))
        self.assertFalse(result.vault_present)
        self.assertFalse(result.signing_present)
        self.assertFalse(result.gara_signing_present)

    def test_deploy_job_with_only_list(self) -> None:
        result = analyze("deploy:\n  only: [main, develop]\n")

        self.assertEqual({"test": ("deploy",)}, dict(result.jobs_by_stage))
        self.assertEqual({"main": 1, "develop": 1}, dict(result.unique_only_conditions))
        self.assertEqual(
            {"test": (OnlyJobEntry(name="deploy", only=("main", "develop")),)},
            dict(result.stages_with_only),
        )
        self.assertEqual(
            {"test": [{"name": "deploy", "only": ["main", "develop"]}]},
            result.to_dict()["stagesWithOnly"],
        )

    def test_numeric_and_quoted_job_names_cannot_collide(self) -> None:
        with self.assertRaises(ParseError):
            analyze("1:\n  stage: a\n'1':\n  stage: b\n")

    def test_malformed_yaml_produces_no_result(self) -> None:
        with self.assertRaises(ParseError):
            analyze("build: {stage: build\n")

        outcome = analyze_safe("build: {stage: build\n")
        self.assertFalse(outcome.ok)
        self.assertIsNone(outcome.result)
        self.assertTrue(outcome.error_message.startswith(PARSE_ERROR_PREFIX))

    def test_sign_jar_sets_signing_and_vault(self) -> None:
        result = analyze("sign_jar:\n  signing_key:\n    from: vault\n")

        self.assertTrue(result.signing_present)
        self.assertTrue(result.vault_present)
        self.assertFalse(result.gara_signing_present)

    def test_nested_vault_token_sets_flag_for_whole_run(self) -> None:
        result = analyze(
            "plain:\n  script: [x]\n"
            "deep:\n  a:\n    b:\n      - c:\n          d:\n            VAULT_TOKEN: t\n"
        )

        self.assertTrue(result.vault_present)

    def test_realistic_document_properties(self) -> None:
        result = analyze(REALISTIC_CI, source="realistic.yml")

        top_level = ["stages", "variables", "default", "compile", "unit", "sign_jar", "release", "broken_job"]
        self.assertEqual(len(top_level), result.job_count + result.reserved_keyword_count)
        self.assertEqual(set(top_level), set(result.jobs) | set(result.reserved_keywords))
        self.assertEqual(set(), set(result.jobs) & set(result.reserved_keywords))

        self.assertEqual(("compile", "unit", "sign_jar", "release", "broken_job"), result.jobs)
        self.assertEqual(("stages", "variables", "default"), result.reserved_keywords)
        self.assertEqual(("broken_job",), result.malformed_jobs)

        grouped = [job for jobs in result.jobs_by_stage.values() for job in jobs]
        self.assertEqual(result.job_count - len(result.malformed_jobs), len(grouped))
        self.assertEqual(len(grouped), len(set(grouped)))
        self.assertEqual(
            {"build": ("compile",), "test": ("unit",), "deploy": ("sign_jar", "release")},
            dict(result.jobs_by_stage),
        )

        self.assertEqual({"main": 2, "merge_requests": 1, "tags": 1}, dict(result.unique_only_conditions))
        self.assertEqual(["release"], list(result.jobs_with_rules))
        self.assertEqual(
            [{"if": "$CI_COMMIT_TAG", "when": "always"}],
            to_python(result.jobs_with_rules["release"]),
        )

        # VAULT_ADDR sits under top-level variables (not a job); the job's
        # VAULT_ID_TOKEN is what sets the flag.
        self.assertTrue(result.vault_present)
        self.assertFalse(result.signing_present)

    def test_reserved_sections_are_not_scanned(self) -> None:
        result = analyze("variables:\n  VAULT_ADDR: x\njob:\n  script: [a]\n")

        self.assertFalse(result.vault_present)

    def test_missing_stages_and_zero_jobs_are_valid(self) -> None:
        result = analyze("variables:\n  A: b\n")

        self.assertEqual(0, result.job_count)
        self.assertEqual((), result.stages)
        self.assertEqual({}, dict(result.jobs_by_stage))
        self.assertEqual({}, dict(result.unique_only_conditions))

    def test_repeated_runs_are_identical_and_unshared(self) -> None:
        first = analyze(REALISTIC_CI)
        second = analyze(REALISTIC_CI)

        self.assertEqual(first.to_dict(), second.to_dict())
        self.assertIsNot(first.jobs_by_stage, second.jobs_by_stage)
        self.assertIsNot(first.unique_only_conditions, second.unique_only_conditions)

    def test_result_is_read_only(self) -> None:
        result = analyze("job:\n  only: [main]\n")

        with self.assertRaises(TypeError):
            result.jobs_by_stage["other"] = ("x",)  # type: ignore[index]
        with self.assertRaises(TypeError):
            result.unique_only_conditions["main"] = 5  # type: ignore[index]
        with self.assertRaises(AttributeError):
            result.jobs = ()  # type: ignore[misc]

    def test_to_dict_is_json_serializable_and_fresh(self) -> None:
        result = analyze(REALISTIC_CI)
        d1 = result.to_dict()
        d1["jobs"].append("mutated")
        d2 = result.to_dict()

        self.assertNotIn("mutated", d2["jobs"])
        encoded = json.loads(json.dumps(d2))
        self.assertEqual(5, encoded["jobCount"])
        self.assertEqual(3, encoded["reservedKeywordCount"])
        self.assertTrue(encoded["vaultPresent"])
        self.assertEqual(["build", "test", "deploy"], encoded["stages"])

    def test_date_scalars_serialize_as_iso_text(self) -> None:
        result = analyze(
            "freeze:\n"
            "  only:\n"
            "    - {until: 2024-01-31}\n"
            "  rules:\n"
            "    - if: $CI\n"
            "      start_in: 2024-02-01\n"
        )

        self.assertEqual({'{"until":"2024-01-31"}': 1}, dict(result.unique_only_conditions))
        payload = json.loads(json.dumps(result.to_dict()))
        self.assertEqual([{"if": "$CI", "start_in": "2024-02-01"}], payload["jobsWithRules"]["freeze"])

    def test_analyze_safe_success(self) -> None:
        outcome = analyze_safe("job:\n  script: [x]\n")

        self.assertTrue(outcome.ok)
        self.assertIsNone(outcome.error)
        self.assertIsNone(outcome.error_message)
        self.assertEqual(("job",), outcome.result.jobs)

    def test_custom_keyword_tables(self) -> None:
        result = analyze(
            "job:\n  script: [x]\nstages: [a]\n",
            reserved_keywords=("job",),
            default_stage="verify",
        )

        self.assertEqual(("stages",), result.jobs)
        self.assertEqual(("job",), result.reserved_keywords)
        self.assertEqual(("stages",), result.malformed_jobs)

    def test_unknown_marker_flag_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            analyze("job: {}\n", sensitive_markers={"secrets_present": ("secret",)})


if __name__ == "__main__":
    unittest.main()
