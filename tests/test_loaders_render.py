import json
import tempfile
import unittest
from pathlib import Path

from prof_dedupe.config import OutputSettings
from prof_dedupe.core.identity import (
    Action,
    ActionKind,
    ActionPlan,
    InvalidInputError,
    plan_roster,
    plan_self_merge,
)
from prof_dedupe.loaders import load_records, load_roster
from prof_dedupe.render import render, render_json, render_sql, sql_literal


class TestLoaders(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, name: str, data) -> Path:
        path = self.tmp / name
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path

    def test_load_records(self) -> None:
        path = self._write(
            "profs.json",
            [
                {"id": "a1", "name": "John Smith", "department": "Math"},
                {"id": "b2", "name": "Сейтқали Әлия"},
            ],
        )
        records = load_records(path)
        self.assertEqual([r.id for r in records], ["a1", "b2"])
        self.assertEqual(records[1].raw_name, "Сейтқали Әлия")

    def test_records_must_be_an_array(self) -> None:
        path = self._write("profs.json", {"id": 1, "name": "John Smith"})
        with self.assertRaises(InvalidInputError):
            load_records(path)

    def test_records_invalid_json(self) -> None:
        path = self.tmp / "broken.json"
        path.write_text("[{", encoding="utf-8")
        with self.assertRaises(InvalidInputError):
            load_records(path)

    def test_records_missing_name(self) -> None:
        path = self._write("profs.json", [{"id": 1}])
        with self.assertRaises(InvalidInputError):
            load_records(path)

    def test_load_roster_objects_and_strings(self) -> None:
        path = self._write(
            "teachers.json",
            [{"teacherName": "John Smith", "groups": ["SE-2301"]}, "Ivanova Anna"],
        )
        self.assertEqual(load_roster(path), ["John Smith", "Ivanova Anna"])

    def test_load_roster_custom_key(self) -> None:
        path = self._write("teachers.json", [{"fullName": "John Smith"}])
        self.assertEqual(load_roster(path, name_key="fullName"), ["John Smith"])
        with self.assertRaises(InvalidInputError):
            load_roster(path)

    def test_load_roster_rejects_non_strings(self) -> None:
        path = self._write("teachers.json", ["John Smith", 7])
        with self.assertRaises(InvalidInputError):
            load_roster(path)


class TestRenderSql(unittest.TestCase):
    def test_self_merge_script(self) -> None:
        plan = plan_self_merge(
            [
                {"id": "1", "name": "Aitbayeva Asel"},
                {"id": "2", "name": "Aitbayeva Asel - CHIN"},
                {"id": "3", "name": "Vacancy"},
            ]
        )
        sql = render_sql(plan)
        self.assertIn("AUTO-GENERATED CLEANUP AND MERGE SCRIPT", sql)
        self.assertIn("DO $$", sql)
        self.assertTrue(sql.rstrip().endswith("END $$;"))
        self.assertIn("DELETE FROM public.professors WHERE id = '3';", sql)
        self.assertIn("PERFORM merge_professors('1', '2');", sql)
        self.assertIn("-- Reason: exact normalized match", sql)
        self.assertLess(sql.index("DELETE FROM"), sql.index("PERFORM"))

    def test_roster_script(self) -> None:
        plan = plan_roster([{"id": "7", "name": "Jon O'Brien"}], ["John O'Brien"])
        sql = render_sql(plan)
        self.assertIn("AUTO-GENERATED NORMALIZATION SCRIPT", sql)
        self.assertIn("UPDATE public.professors SET name = 'John O''Brien' WHERE id = '7';", sql)
        self.assertIn("'Jon O''Brien', 'John O''Brien'", sql)

    def test_custom_output_names(self) -> None:
        plan = ActionPlan(
            mode="self_merge",
            actions=[
                Action(ActionKind.MERGE, source_id=2, source_name="B", target_id=1, target_name="A", reason="r")
            ],
        )
        sql = render_sql(plan, OutputSettings(table="staff.people", merge_function="fold_people"))
        self.assertIn("PERFORM fold_people('1', '2');", sql)

    def test_empty_plan_is_valid_block(self) -> None:
        sql = render_sql(ActionPlan(mode="roster"))
        self.assertIn("NULL;", sql)

    def test_newlines_do_not_escape_comments(self) -> None:
        plan = ActionPlan(
            mode="self_merge",
            actions=[Action(ActionKind.DELETE, source_id=1, source_name="Vacancy\nDROP", reason="placeholder name")],
        )
        sql = render_sql(plan)
        self.assertIn("-- Deleting placeholder: Vacancy DROP", sql)

    def test_sql_literal(self) -> None:
        self.assertEqual(sql_literal("O'Brien"), "'O''Brien'")
        self.assertEqual(sql_literal(12), "'12'")


class TestRenderJson(unittest.TestCase):
    def test_json_document(self) -> None:
        plan = plan_roster(
            [{"id": 1, "name": "Jon Smith"}, {"id": 2, "name": "Li"}], ["John Smith", "Lu"]
        )
        data = json.loads(render_json(plan))
        self.assertEqual(data["mode"], "roster")
        self.assertEqual(data["summary"]["renames"], 1)
        self.assertEqual(data["summary"]["ignored"], 1)
        self.assertEqual(data["actions"][0]["action"], "rename")
        self.assertEqual(data["actions"][0]["target_name"], "John Smith")
        self.assertEqual(data["skipped"][0], {"id": 2, "name": "Li", "reason": "no confident match"})

    def test_render_dispatch(self) -> None:
        plan = ActionPlan(mode="roster")
        self.assertTrue(render(plan, fmt="json").startswith("{"))
        self.assertIn("DO $$", render(plan))
        with self.assertRaises(ValueError):
            render(plan, fmt="xml")


if __name__ == "__main__":
    unittest.main()
