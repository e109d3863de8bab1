import unittest

from chart_fixtures import aries_facts, facts_for

from astro_facts.domain.dasha.expander import DashaExpander, describe_period, house_themes
from astro_facts.domain.kundali.errors import DiagnosticCode


class TestDashaExpander(unittest.TestCase):
    def setUp(self):
        self.expanded = DashaExpander().expand(aries_facts())

    def test_current_is_flagged_entry(self):
        current = self.expanded.current
        self.assertEqual(current.maha.planet, "Saturn")
        self.assertEqual(current.antar.planet, "Mercury")
        self.assertEqual(current.pratyantar.planet, "Ketu")
        self.assertIsNone(current.sookshma)

    def test_maha_annotations(self):
        maha = self.expanded.current.maha
        self.assertEqual(maha.house, 10)
        self.assertEqual(maha.lord_of, (10, 11))
        self.assertEqual(maha.strength_band, "weak")
        self.assertEqual(maha.level, "maha")
        self.assertEqual(maha.start, "2020-03-01")
        self.assertEqual(maha.end, "2039-03-01")
        self.assertEqual(maha.themes[:4], ("career", "reputation", "authority", "public image"))
        self.assertIn("lordship: gains", maha.themes)

    def test_sub_periods_carry_no_dates(self):
        antar = self.expanded.current.antar
        self.assertEqual(antar.house, 5)
        self.assertEqual(antar.lord_of, (3, 6))
        self.assertIsNone(antar.start)
        self.assertEqual(antar.level, "antar")

    def test_node_period_has_no_lordship(self):
        ketu = self.expanded.current.pratyantar
        self.assertEqual(ketu.house, 9)
        self.assertEqual(ketu.lord_of, ())
        self.assertFalse(any(t.startswith("lordship:") for t in ketu.themes))

    def test_timeline(self):
        self.assertEqual([p.planet for p in self.expanded.timeline], ["Jupiter", "Saturn"])
        self.assertEqual(self.expanded.timeline[0].start, "2004-03-01")
        self.assertEqual(self.expanded.diagnostics, ())

    def test_first_entry_when_none_flagged(self):
        facts = facts_for(
            "Aries",
            {"Saturn": "Capricorn", "Jupiter": "Pisces"},
            dashas={"vimshottari": [{"maha": "Jupiter"}, {"maha": "Saturn"}]},
        )
        expanded = DashaExpander().expand(facts)
        self.assertEqual(expanded.current.maha.planet, "Jupiter")

    def test_no_dasha_data(self):
        facts = facts_for("Aries", {"Saturn": "Capricorn"})
        expanded = DashaExpander().expand(facts)
        self.assertIsNone(expanded.current)
        self.assertEqual(expanded.timeline, ())

    def test_missing_lord_is_diagnosed(self):
        facts = facts_for(
            "Aries",
            {"Saturn": "Capricorn"},
            dashas={"vimshottari": [{"maha": "Saturn", "antar": "Rahu", "isCurrent": True}]},
        )
        expanded = DashaExpander().expand(facts)
        self.assertEqual(expanded.current.maha.planet, "Saturn")
        self.assertIsNone(expanded.current.antar)
        self.assertEqual(len(expanded.diagnostics), 1)
        self.assertEqual(expanded.diagnostics[0].code, DiagnosticCode.MISSING_DASHA_PLANET)
        self.assertEqual(expanded.diagnostics[0].planet, "Rahu")

    def test_missing_maha_lord(self):
        facts = facts_for(
            "Aries",
            {"Saturn": "Capricorn"},
            dashas={"vimshottari": [{"maha": "Venus"}]},
        )
        expanded = DashaExpander().expand(facts)
        self.assertIsNone(expanded.current)
        self.assertEqual(expanded.timeline, ())
        self.assertEqual(len(expanded.diagnostics), 1)


class TestThemes(unittest.TestCase):
    def test_placement_then_lordship(self):
        themes = house_themes(6, (1, 8))
        self.assertEqual(themes[:4], ["health", "service", "enemies", "daily work"])
        self.assertEqual(themes[4], "lordship: personality")
        self.assertEqual(len(themes), len(set(themes)))

    def test_duplicates_removed(self):
        themes = house_themes(4, (4, 4))
        self.assertEqual(len(themes), 8)

    def test_describe_period(self):
        maha = DashaExpander().expand(aries_facts()).current.maha
        self.assertTrue(
            describe_period(maha).startswith(
                "Saturn in house 10 (owns houses: 10, 11) - weak strength, themes: career"
            )
        )


if __name__ == "__main__":
    unittest.main()
