import unittest

from analyzer.stages.keyword_scan import scan, text_flags
from ci_analysis.config.loader import load
from ci_analysis.domain.result import KeywordFlags


def _scan_job(raw: str, job: str = "job") -> KeywordFlags:
    return scan(load(raw).get(job))


class TestKeywordScan(unittest.TestCase):
    def test_deeply_nested_vault_key(self) -> None:
        flags = _scan_job(
            "job:\n"
            "  variables:\n"
            "    nested:\n"
            "      deeper:\n"
            "        VAULT_TOKEN: abc\n"
        )

        self.assertEqual(KeywordFlags(vault_present=True), flags)

    def test_signing_key_with_vault_value_sets_both(self) -> None:
        flags = _scan_job("sign_jar:\n  signing_key:\n    from: vault\n", job="sign_jar")

        self.assertTrue(flags.signing_present)
        self.assertTrue(flags.vault_present)
        self.assertFalse(flags.gara_signing_present)

    def test_mappings_inside_sequences_are_scanned(self) -> None:
        flags = _scan_job("job:\n  steps:\n    - name: x\n      garasign_cert: y\n")

        self.assertEqual(KeywordFlags(gara_signing_present=True), flags)

    def test_scalar_sequence_items_are_not_matched(self) -> None:
        flags = _scan_job("job:\n  script:\n    - vault read secret/x\n    - jarsigner --signing gara\n")

        self.assertEqual(KeywordFlags(), flags)

    def test_scalar_value_under_a_key_is_matched(self) -> None:
        flags = _scan_job(
            "job:\n"
            "  image: hashicorp/vault:1.15\n"
            "  stage: signing\n"
            "  script: garasign --file app.jar\n"
        )

        self.assertEqual(
            KeywordFlags(vault_present=True, signing_present=True, gara_signing_present=True),
            flags,
        )

    def test_single_string_script_matches_but_list_form_does_not(self) -> None:
        self.assertTrue(_scan_job("job:\n  script: vault read x\n").vault_present)
        self.assertFalse(_scan_job("job:\n  script:\n    - vault read x\n").vault_present)

    def test_null_value_is_not_matched_as_text(self) -> None:
        self.assertEqual(KeywordFlags(), _scan_job("job:\n  when: ~\n  script: [x]\n"))

    def test_one_key_can_raise_several_flags(self) -> None:
        self.assertEqual(
            KeywordFlags(vault_present=True, signing_present=True, gara_signing_present=True),
            text_flags("Vault_GaraSigning_Key"),
        )

    def test_scalar_job_scans_to_nothing(self) -> None:
        self.assertEqual(KeywordFlags(), _scan_job("job: vault\n"))

    def test_flags_combine_monotonically(self) -> None:
        a = KeywordFlags(vault_present=True)
        b = KeywordFlags(signing_present=True)

        self.assertEqual(KeywordFlags(vault_present=True, signing_present=True), a | b)
        self.assertEqual(a, a | KeywordFlags())
        self.assertEqual(KeywordFlags(), KeywordFlags.combine([]))

    def test_custom_markers(self) -> None:
        doc = load("job:\n  secrets:\n    db: x\n")
        flags = scan(doc.get("job"), markers={"vault_present": ("secrets",)})

        self.assertEqual(KeywordFlags(vault_present=True), flags)


if __name__ == "__main__":
    unittest.main()
