import unittest

from gpacalc.config.settings import Settings
from gpacalc.state.app_state import (
    AppState,
    calculate,
    is_level_open,
    is_semester_open,
    toggle_level,
    toggle_semester,
    update_field,
)


class AppStateTests(unittest.TestCase):
    def setUp(self):
        self.state = AppState.initial(Settings())

    def test_initial_state(self):
        self.assertEqual(self.state.entries.levels, (100, 200, 300, 400))
        self.assertEqual(self.state.entries.semesters, (1, 2))
        self.assertIsNone(self.state.results.cumulative_gpa)
        self.assertEqual(len(self.state.results.semester_results), 8)
        self.assertFalse(self.state.open_levels)

    def test_edit_does_not_recalculate(self):
        state = update_field(self.state, 100, 1, "gpa", "9.5")
        state = update_field(state, 100, 1, "credits", "20")
        self.assertIsNone(state.results.cumulative_gpa)

        state = calculate(state)
        self.assertAlmostEqual(state.results.cumulative_gpa, 9.5)
        self.assertEqual(state.results.total_credits, 20)

    def test_calculate_replaces_previous_results(self):
        state = update_field(self.state, 100, 1, "gpa", "9.5")
        state = update_field(state, 100, 1, "credits", "20")
        state = calculate(state)
        state = update_field(state, 100, 1, "credits", "")
        state = calculate(state)
        self.assertIsNone(state.results.semester_gpa(100, 1))
        self.assertIsNone(state.results.cumulative_gpa)
        self.assertEqual(state.results.total_credits, 0)

    def test_calculate_twice_is_stable(self):
        state = update_field(self.state, 300, 2, "gpa", "7.75")
        state = update_field(state, 300, 2, "credits", "16")
        self.assertEqual(calculate(state).results, calculate(calculate(state)).results)

    def test_commands_do_not_mutate_input(self):
        update_field(self.state, 100, 1, "gpa", "9")
        toggle_level(self.state, 100)
        self.assertEqual(self.state.entries.get(100, 1).gpa_text, "")
        self.assertFalse(is_level_open(self.state, 100))

    def test_toggle_level(self):
        state = toggle_level(self.state, 200)
        self.assertTrue(is_level_open(state, 200))
        state = toggle_level(state, 200)
        self.assertFalse(is_level_open(state, 200))

    def test_toggle_semester(self):
        state = toggle_semester(self.state, 300, 2)
        self.assertTrue(is_semester_open(state, 300, 2))
        self.assertFalse(is_semester_open(state, 300, 1))
        state = toggle_semester(state, 300, 2)
        self.assertFalse(is_semester_open(state, 300, 2))

    def test_closing_level_collapses_its_semesters(self):
        state = toggle_level(self.state, 100)
        state = toggle_semester(state, 100, 1)
        state = toggle_semester(state, 200, 2)
        state = toggle_level(state, 100)
        state = toggle_level(state, 100)
        self.assertTrue(is_level_open(state, 100))
        self.assertFalse(is_semester_open(state, 100, 1))
        self.assertTrue(is_semester_open(state, 200, 2))

    def test_toggles_keep_field_values(self):
        state = toggle_level(self.state, 100)
        state = update_field(state, 100, 1, "gpa", "8.2")
        state = toggle_level(state, 100)
        self.assertEqual(state.entries.get(100, 1).gpa_text, "8.2")

    def test_unknown_level_or_semester(self):
        with self.assertRaises(KeyError):
            toggle_level(self.state, 700)
        with self.assertRaises(KeyError):
            toggle_semester(self.state, 100, 5)

    def test_initial_from_custom_settings(self):
        state = AppState.initial(Settings(levels=(100, 200), semesters_per_level=3))
        self.assertEqual(state.entries.semesters, (1, 2, 3))
        self.assertEqual(len(state.results.semester_results), 6)


if __name__ == "__main__":
    unittest.main()
