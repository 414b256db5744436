from datetime import timedelta

from django.test import SimpleTestCase, TestCase

from games.datetime_utils import get_game_status
from games.models import Registration
from games.state_machine import can_transition, is_editable_by_registrant
from games.tests.helpers import make_game


class GameStatusTestCase(TestCase):
    def setUp(self):
        self.game = make_game()

    def test_signup_window_edges_count_as_registration(self):
        self.assertEqual(get_game_status(self.game, self.game.signup_start), "registration")
        self.assertEqual(get_game_status(self.game, self.game.signup_end), "registration")
        self.assertEqual(get_game_status(self.game, self.game.signup_end + timedelta(seconds=1)), "closed")
        self.assertEqual(get_game_status(self.game, self.game.game_end), "ongoing")
        self.assertEqual(get_game_status(self.game, self.game.game_end + timedelta(seconds=1)), "ended")


class RegistrationRulesTestCase(SimpleTestCase):
    def test_registrant_can_edit_until_confirmed(self):
        editable = {
            status: is_editable_by_registrant(Registration(status=status))
            for status, _ in Registration.STATUS_CHOICES
        }
        self.assertEqual(
            editable,
            {"pending": True, "rejected": True, "approved": False, "confirmed": False},
        )

    def test_transitions(self):
        self.assertEqual(can_transition(Registration(status="rejected"), "pending"), (True, ""))
        allowed, _ = can_transition(Registration(status="approved"), "pending")
        self.assertFalse(allowed)
