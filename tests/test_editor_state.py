import unittest

from controllers.editor_state import CollectionEditor, ObjectEditor, new_record_id
from models.contact_model import CONTACT
from models.result_model import MATCH_RESULT
from models.schedule_model import SCHEDULED_MATCH


def _schedule():
    return [
        {"id": "A", "sport": "Chess", "teamA": "Red", "teamB": "Blue"},
        {"id": "B", "sport": "Football", "teamA": "Red", "teamB": "Blue"},
        {"id": "C", "sport": "Chess", "teamA": "Red", "teamB": "Blue"},
    ]


class CollectionEditorTests(unittest.TestCase):
    def setUp(self):
        self.editor = CollectionEditor(SCHEDULED_MATCH, filter_field="sport")
        self.editor.load(_schedule())

    def test_load_backfills_and_selects_first(self):
        self.assertEqual(self.editor.selected_id, "A")
        self.assertEqual(self.editor.get("B")["category"], "Men")
        self.assertEqual(self.editor.get("B")["venue"], "")

    def test_load_assigns_missing_ids(self):
        editor = CollectionEditor(MATCH_RESULT)
        editor.load([{"teamA": "Red"}, {"teamA": "Blue"}])
        ids = editor.ids()
        self.assertTrue(all(ids))
        self.assertEqual(len(set(ids)), 2)

    def test_add_record_prepends_and_selects(self):
        record = self.editor.add_record({"sport": "Squash"})
        self.assertEqual(self.editor.records[0], record)
        self.assertEqual(self.editor.selected_id, record["id"])
        self.assertNotIn(record["id"], ["A", "B", "C"])
        self.assertEqual(len(self.editor), 4)

    def test_update_field_is_copy_on_write(self):
        before_list = self.editor.records
        before = self.editor.get("B")
        self.editor.update_field("B", "venue", "Main Ground")
        self.assertEqual(before["venue"], "")
        self.assertEqual(before_list[1]["venue"], "")
        self.assertEqual(self.editor.get("B")["venue"], "Main Ground")
        self.assertIs(self.editor.get("A"), before_list[0])

    def test_update_field_by_index(self):
        self.editor.update_field(2, "time", "09:30")
        self.assertEqual(self.editor.get("C")["time"], "09:30")
        with self.assertRaises(IndexError):
            self.editor.update_field(5, "time", "x")
        with self.assertRaises(KeyError):
            self.editor.update_field("missing", "time", "x")

    def test_remove_record_returns_candidate_only(self):
        index, candidate = self.editor.remove_record("B")
        self.assertEqual(index, 1)
        self.assertEqual([r["id"] for r in candidate], ["A", "C"])
        self.assertEqual(self.editor.ids(), ["A", "B", "C"])

    def test_removal_selects_previous_matching_filter(self):
        self.editor.set_filter("Chess")
        self.editor.select("C")
        index, candidate = self.editor.remove_record("C")
        self.editor.apply_removal(candidate, index)
        # B now sits before the removed slot but is filtered out; A is the only Chess match left
        self.assertEqual(self.editor.selected_id, "A")
        self.assertEqual(self.editor.ids(), ["A", "B"])

    def test_removal_empties_selection_when_filter_has_nothing_left(self):
        self.editor.load([{"id": "A", "sport": "Chess"}, {"id": "B", "sport": "Football"}])
        self.editor.set_filter("Chess")
        index, candidate = self.editor.remove_record("A")
        self.editor.apply_removal(candidate, index)
        self.assertEqual(self.editor.selected_id, "")
        self.assertIsNone(self.editor.selected)

    def test_removal_prefers_record_at_same_index(self):
        index, candidate = self.editor.remove_record("A")
        self.editor.apply_removal(candidate, index)
        self.assertEqual(self.editor.selected_id, "B")

    def test_removal_of_last_record(self):
        self.editor.load([{"id": "A", "sport": "Chess"}])
        index, candidate = self.editor.remove_record(0)
        self.editor.apply_removal(candidate, index)
        self.assertEqual(self.editor.records, [])
        self.assertEqual(self.editor.selected_id, "")

    def test_set_filter_selects_first_visible(self):
        self.editor.set_filter("Football")
        self.assertEqual(self.editor.selected_id, "B")
        self.assertEqual([r["id"] for r in self.editor.visible()], ["B"])
        self.editor.set_filter("Squash")
        self.assertEqual(self.editor.selected_id, "")
        self.editor.set_filter("All")
        self.assertEqual(len(self.editor.visible()), 3)

    def test_numeric_ids_become_strings(self):
        self.editor.load([{"id": 2, "sport": "Chess"}, {"id": 0, "sport": "Chess"}, {"id": 1, "sport": "Chess"}])
        self.assertEqual(self.editor.ids(), ["2", "0", "1"])
        self.editor.update_field("1", "venue", "Chess Room")
        self.assertEqual(self.editor.records[2]["venue"], "Chess Room")
        self.editor.update_field(1, "venue", "Main Ground")
        self.assertEqual(self.editor.get("0")["venue"], "Main Ground")

    def test_snapshot_is_detached(self):
        snap = self.editor.snapshot()
        snap[0]["sport"] = "Changed"
        self.assertEqual(self.editor.get("A")["sport"], "Chess")

    def test_revision_bumps_on_wholesale_changes(self):
        rev = self.editor.revision
        self.editor.update_field("A", "venue", "x")
        self.assertEqual(self.editor.revision, rev)
        self.editor.replace(self.editor.records)
        self.assertEqual(self.editor.revision, rev + 1)


class NewRecordIdTests(unittest.TestCase):
    def test_unique_within_existing(self):
        first = new_record_id()
        second = new_record_id([first, str(int(first) + 1)])
        self.assertNotIn(second, (first, str(int(first) + 1)))
        self.assertTrue(second.isdigit())


class ObjectEditorTests(unittest.TestCase):
    def setUp(self):
        self.editor = ObjectEditor(CONTACT)
        self.editor.load({"email": "a@b.c", "phone": "1",
                          "coordinators": [{"name": "Ann", "role": "Lead"}, {"name": "Bo", "role": "Ops"}]})

    def test_update_nested_keeps_siblings(self):
        self.editor.update_nested("socialMedia", "youtube", "yt")
        self.assertEqual(self.editor.data["socialMedia"], {"instagram": "", "youtube": "yt"})

    def test_update_item_copy_on_write(self):
        before = self.editor.data
        self.editor.update_item("coordinators", 1, "phone", "555")
        self.assertEqual(before["coordinators"][1]["phone"], "")
        self.assertEqual(self.editor.data["coordinators"][1]["phone"], "555")
        self.assertEqual(self.editor.data["coordinators"][0]["phone"], "")

    def test_without_item_leaves_live_data(self):
        candidate = self.editor.without_item("coordinators", 0)
        self.assertEqual([c["name"] for c in candidate["coordinators"]], ["Bo"])
        self.assertEqual(len(self.editor.data["coordinators"]), 2)

    def test_prepend_item(self):
        self.editor.prepend_item("coordinators", {"name": "Cy", "role": "Media"})
        self.assertEqual(self.editor.data["coordinators"][0]["name"], "Cy")

    def test_edit_before_load_fails(self):
        with self.assertRaises(RuntimeError):
            ObjectEditor(CONTACT).update_field("email", "x")


if __name__ == "__main__":
    unittest.main()
