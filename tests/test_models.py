import unittest

from student_dashboard.backend.models import Assignment, FilterCriteria, parse_assignments, unique_categories


class TestAssignmentCoercionContract(unittest.TestCase):
    def test_days_until_due_accepts_integers_only(self):
        cases = [(4, 4), (-2, -2), (3.0, 3), (2.5, None), ("3", None), (True, None), (None, None)]
        for raw, expected in cases:
            with self.subTest(raw=raw):
                a = Assignment.model_validate({"uid": "x", "daysUntilDue": raw})
                self.assertEqual(a.days_until_due, expected)

    def test_wire_names_and_blank_fields(self):
        a = Assignment.model_validate({
            "uid": "x",
            "title": None,
            "priority": 2,
            "dueDate": "",
            "description": "",
            "type": "",
        })
        self.assertEqual(a.title, "")
        self.assertEqual(a.priority, "2")
        self.assertIsNone(a.due_date)
        self.assertIsNone(a.description)
        self.assertIsNone(a.type)
        self.assertFalse(a.is_completed)

    def test_records_without_uid_are_dropped(self):
        with self.assertLogs("student_dashboard.backend.models", level="WARNING") as logs:
            out = parse_assignments([{"uid": ""}, {"title": "x"}, None, {"uid": "ok"}])
        self.assertEqual([a.uid for a in out], ["ok"])
        self.assertEqual(len(logs.output), 3)


class TestFilterCriteriaContract(unittest.TestCase):
    def test_blank_values_mean_all(self):
        c = FilterCriteria(category="", type=None, status="Completed")
        self.assertEqual((c.category, c.type, c.status), ("all", "all", "Completed"))

    def test_unique_categories(self):
        self.assertEqual(unique_categories(["B", "A", "B", 3, None, "C"]), ["B", "A", "C"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
