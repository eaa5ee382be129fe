import unittest

from common.errors import ValidationError
from models.contact_model import CONTACT, new_coordinator, validate_contact
from models.gallery_model import split_complete
from models.result_model import MATCH_RESULT, new_result, validate_result, winner_options
from models.schedule_model import duplicate_match, new_match, validate_match
from models.schema import coerce_list


def _result(**overrides):
    base = MATCH_RESULT.normalize({"id": "1", "teamA": "Red", "teamB": "Blue", "winner": "Red"})
    base.update(overrides)
    return base


class NormalizationTests(unittest.TestCase):
    def test_result_defaults_backfilled(self):
        record = MATCH_RESULT.normalize({"id": "7", "teamA": "Red", "category": "", "scoreB": None})
        self.assertEqual(record["scoreA"], 0)
        self.assertEqual(record["scoreB"], 0)
        self.assertEqual(record["category"], "Men")
        self.assertEqual(record["streamStatus"], "Ended")
        self.assertEqual(record["scoreSheetType"], "url")
        self.assertEqual(record["teamA"], "Red")

    def test_existing_values_and_unknown_keys_kept(self):
        raw = {"id": "1", "scoreA": 3, "category": "Women", "extra": {"x": 1}}
        record = MATCH_RESULT.normalize(raw)
        self.assertEqual(record["scoreA"], 3)
        self.assertEqual(record["category"], "Women")
        self.assertEqual(record["extra"], {"x": 1})
        self.assertNotIn("scoreB", raw)     # input untouched

    def test_contact_nested_defaults(self):
        contact = CONTACT.normalize({
            "email": "a@b.c",
            "socialMedia": {"instagram": "@event"},
            "coordinators": [{"name": "Ann", "role": "Lead"}],
        })
        self.assertEqual(contact["socialMedia"], {"instagram": "@event", "youtube": ""})
        self.assertEqual(contact["coordinators"][0]["imageType"], "url")
        self.assertEqual(contact["phone"], "")
        self.assertEqual(CONTACT.normalize(None)["coordinators"], [])

    def test_coerce_list(self):
        self.assertEqual(coerce_list([{"a": 1}]), [{"a": 1}])
        self.assertEqual(coerce_list({"a": 1}), [{"a": 1}])
        self.assertEqual(coerce_list(None), [])
        self.assertEqual(coerce_list([{"a": 1}, "stray", None, 3]), [{"a": 1}])

    def test_non_object_input_normalizes_to_defaults(self):
        self.assertEqual(MATCH_RESULT.normalize("stray")["scoreA"], 0)
        contact = CONTACT.normalize({"coordinators": ["Ann", {"name": "Bo", "role": "Ops"}]})
        self.assertEqual([c["name"] for c in contact["coordinators"]], ["Bo"])


class ContactValidationTests(unittest.TestCase):
    def test_email_and_phone_required(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_contact(CONTACT.normalize({"email": "", "phone": "123"}))
        self.assertEqual(ctx.exception.message, "Email and Phone are required.")

    def test_coordinators_need_name_and_role(self):
        contact = CONTACT.normalize({"email": "a@b.c", "phone": "1", "coordinators": [{"name": "Ann"}]})
        with self.assertRaises(ValidationError) as ctx:
            validate_contact(contact)
        self.assertEqual(ctx.exception.message, "All coordinators must have a Name and Role.")

    def test_valid_contact(self):
        contact = CONTACT.normalize({"email": "a@b.c", "phone": "1", "coordinators": [new_coordinator("Ann", "Lead")]})
        validate_contact(contact)


class ResultValidationTests(unittest.TestCase):
    def test_same_team_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_result(_result(teamA="Red", teamB="Red"))
        self.assertIn("Team A and Team B cannot be the same", ctx.exception.message)

    def test_missing_team(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_result(_result(teamB=""))
        self.assertEqual(ctx.exception.message, "Match between Red and Unknown must have both teams selected.")

    def test_negative_score(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_result(_result(scoreB=-1))
        self.assertIn("cannot be negative", ctx.exception.message)

    def test_winner_required_and_must_be_a_side(self):
        with self.assertRaises(ValidationError):
            validate_result(_result(winner=""))
        with self.assertRaises(ValidationError):
            validate_result(_result(winner="Green"))
        validate_result(_result(winner="Draw"))
        validate_result(_result(winner="Blue"))

    def test_new_result_uses_first_two_teams(self):
        record = new_result(["Red", "Blue", "Green"])
        self.assertEqual((record["teamA"], record["teamB"]), ("Red", "Blue"))
        self.assertEqual(record["winner"], "")
        self.assertEqual(new_result([])["teamA"], "")

    def test_winner_options(self):
        self.assertEqual(winner_options(_result()), ["Draw", "Red", "Blue"])


class ScheduleTests(unittest.TestCase):
    def _match(self, **overrides):
        base = {"id": "1", "sport": "Chess", "category": "Women", "teamA": "Red", "teamB": "Blue",
                "date": "2025-03-01", "time": "10:00", "venue": "Chess Room"}
        base.update(overrides)
        return base

    def test_new_match_inherits_from_previous(self):
        record = new_match(self._match(), ["Green", "Yellow"])
        self.assertEqual(record["sport"], "Chess")
        self.assertEqual(record["category"], "Women")
        self.assertEqual(record["date"], "2025-03-01")
        self.assertEqual(record["time"], "10:00")
        self.assertEqual(record["venue"], "Chess Room")
        self.assertEqual((record["teamA"], record["teamB"]), ("Green", "Yellow"))

    def test_new_match_without_previous(self):
        record = new_match(None, [])
        self.assertEqual(record["sport"], "Football")
        self.assertEqual(record["date"], "")

    def test_duplicate_drops_id(self):
        record = duplicate_match(self._match(), ["Green", "Yellow"])
        self.assertEqual(record["id"], "")
        self.assertEqual(record["venue"], "Chess Room")
        self.assertEqual(record["teamA"], "Green")

    def test_validation(self):
        validate_match(self._match())
        with self.assertRaises(ValidationError):
            validate_match(self._match(teamB="Red"))
        with self.assertRaises(ValidationError) as ctx:
            validate_match(self._match(venue=""))
        self.assertEqual(
            ctx.exception.message,
            "Date, Time, and Venue are required for match between Red and Blue (Chess).",
        )


class GalleryTests(unittest.TestCase):
    def test_split_complete(self):
        items = [{"title": "a", "url": "u"}, {"title": "", "url": "u"}, {"title": "b", "url": ""}]
        complete, incomplete = split_complete(items)
        self.assertEqual(complete, [items[0]])
        self.assertEqual(incomplete, items[1:])


if __name__ == "__main__":
    unittest.main()
