import io
import json
import logging
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from prof_dedupe.cli import main


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.config = self.tmp / "config.yaml"
        self.config.write_text("output:\n  format: sql\n", encoding="utf-8")
        self.records = self.tmp / "profs.json"
        self.records.write_text(
            json.dumps(
                [
                    {"id": "1", "name": "Aitbayeva Asel"},
                    {"id": "2", "name": "Aitbayeva Asel - CHIN"},
                    {"id": "3", "name": "Vacancy"},
                    {"id": "4", "name": "Jon Smith"},
                ]
            ),
            encoding="utf-8",
        )
        self.roster = self.tmp / "teachers.json"
        self.roster.write_text(
            json.dumps([{"teacherName": "John Smith"}, {"teacherName": "Aitbayeva Asel"}]),
            encoding="utf-8",
        )

    def tearDown(self) -> None:
        logging.getLogger().handlers.clear()
        self._tmp.cleanup()

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(["--config", str(self.config), "--log-level", "WARNING", *argv])
        return code, out.getvalue(), err.getvalue()

    def test_dedupe_writes_sql_file(self) -> None:
        target = self.tmp / "out" / "clean_duplicates.sql"
        code, stdout, _ = self._run("dedupe", str(self.records), "--out", str(target))
        self.assertEqual(code, 0)
        sql = target.read_text(encoding="utf-8")
        self.assertIn("PERFORM merge_professors('1', '2');", sql)
        self.assertIn("DELETE FROM public.professors WHERE id = '3';", sql)
        self.assertIn("=> Merge operations: 1", stdout)
        self.assertIn("=> Delete operations: 1", stdout)

    def test_dedupe_json_to_stdout(self) -> None:
        code, stdout, stderr = self._run("dedupe", str(self.records), "--format", "json")
        self.assertEqual(code, 0)
        data = json.loads(stdout)
        self.assertEqual(data["mode"], "self_merge")
        self.assertEqual(data["summary"]["merges"], 1)
        self.assertIn("=> Analyzed records: 4", stderr)

    def test_normalize(self) -> None:
        target = self.tmp / "normalize.json"
        code, stdout, _ = self._run(
            "normalize", str(self.records), str(self.roster), "--out", str(target), "--format", "json"
        )
        self.assertEqual(code, 0)
        data = json.loads(target.read_text(encoding="utf-8"))
        by_source = {action["source_id"]: action for action in data["actions"]}
        self.assertEqual(by_source["4"]["action"], "rename")
        self.assertEqual(by_source["4"]["target_name"], "John Smith")
        self.assertEqual(by_source["2"]["action"], "merge")
        self.assertEqual(by_source["2"]["target_id"], "1")
        self.assertIn("=> Ignored records: 2", stdout)

    def test_compare(self) -> None:
        code, stdout, _ = self._run("compare", "Jon Smith", "John Smith")
        self.assertEqual(code, 0)
        self.assertIn("Match: typo (distance 1)", stdout)
        self.assertIn("Rule: typo", stdout)

    def test_invalid_input_exits_with_error(self) -> None:
        bad = self.tmp / "bad.json"
        bad.write_text(json.dumps([{"id": "1", "name": None}]), encoding="utf-8")
        code, _, stderr = self._run("dedupe", str(bad))
        self.assertEqual(code, 1)
        self.assertIn("non-string name", stderr)

    def test_missing_config(self) -> None:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(["--config", str(self.tmp / "missing.yaml"), "compare", "a", "b"])
        self.assertEqual(code, 1)

    def test_invalid_config_value(self) -> None:
        self.config.write_text("matching:\n  max_typo_distance: -1\n", encoding="utf-8")
        code, _, stderr = self._run("compare", "Jon Smith", "John Smith")
        self.assertEqual(code, 1)
        self.assertIn("max_typo_distance", stderr)

    def test_malformed_config_yaml(self) -> None:
        self.config.write_text("matching: [\n", encoding="utf-8")
        code, stdout, _ = self._run("compare", "Jon Smith", "John Smith")
        self.assertEqual(code, 1)
        self.assertEqual(stdout, "")


if __name__ == "__main__":
    unittest.main()
