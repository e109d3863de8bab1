import unittest

from chart_fixtures import aries_facts, facts_for

from astro_facts.domain.rules.catalog import YOGA_ALIASES
from astro_facts.domain.rules.evaluator import (
    RuleEvaluator,
    compact_label,
    dedup_by_key,
    provider_key,
    slugify,
)
from astro_facts.domain.rules.schemas import Detection


class TestDedup(unittest.TestCase):
    def test_first_occurrence_wins_and_order_kept(self):
        detections = [
            Detection(key="b", label="first b"),
            Detection(key="a", label="first a"),
            Detection(key="b", label="second b"),
            Detection(key="c", label="c"),
            Detection(key="a", label="second a"),
        ]
        unique = dedup_by_key(detections)
        self.assertEqual([d.key for d in unique], ["b", "a", "c"])
        self.assertEqual(unique[0].label, "first b")
        self.assertEqual(unique[1].label, "first a")

    def test_empty(self):
        self.assertEqual(dedup_by_key([]), [])


class TestProviderLabels(unittest.TestCase):
    def test_compact_label(self):
        self.assertEqual(compact_label("Gaja Kesari Yoga"), "gajakesari")
        self.assertEqual(compact_label("PMP_Shasha"), "shasha")
        self.assertEqual(compact_label("Mangal Dosha"), "mangal")
        self.assertEqual(compact_label("Vish Yoga"), "vish")

    def test_slugify(self):
        self.assertEqual(slugify("Chamara Yoga"), "chamara-yoga")
        self.assertEqual(slugify("!!!"), "unnamed")

    def test_provider_key(self):
        self.assertEqual(provider_key("PMP_Shasha", "yoga", YOGA_ALIASES), "yoga.shasha")
        self.assertEqual(provider_key("VRY", "yoga", YOGA_ALIASES), "yoga.vipareeta")
        self.assertEqual(
            provider_key("Chamara Yoga", "yoga", YOGA_ALIASES),
            "yoga.provider.chamara-yoga",
        )


class TestRuleEvaluator(unittest.TestCase):
    def setUp(self):
        self.rules = RuleEvaluator().evaluate(aries_facts())

    def test_engine_then_provider(self):
        self.assertEqual(self.rules.yoga_keys(), [
            "yoga.shasha",
            "yoga.vipareeta.8-6",
            "yoga.budha-aditya",
            "yoga.dhana-yoga",
            "yoga.karma-yoga",
            "yoga.moksha-yoga",
            "yoga.gajakesari",
            "yoga.provider.chamara-yoga",
        ])

    def test_keys_are_unique(self):
        keys = self.rules.yoga_keys()
        self.assertEqual(len(keys), len(set(keys)))

    def test_engine_detection_beats_provider(self):
        shasha = self.rules.find_yoga("yoga.shasha")
        self.assertEqual(shasha.source, "engine")
        self.assertEqual(shasha.planet, "Saturn")

    def test_provider_detection(self):
        gajakesari = self.rules.find_yoga("yoga.gajakesari")
        self.assertEqual(gajakesari.source, "provider")
        self.assertEqual(gajakesari.label, "Gaja Kesari Yoga")

    def test_generic_provider_key_covered_by_engine_family(self):
        self.assertIsNone(self.rules.find_yoga("yoga.vipareeta"))

    def test_no_doshas(self):
        self.assertEqual(self.rules.dosha_keys(), [])
        self.assertIsNone(self.rules.find_dosha("dosha.mangal"))

    def test_provider_doshas_merged(self):
        facts = facts_for(
            "Aries",
            {"Mars": "Cancer", "Moon": "Aries", "Sun": "Taurus"},
            doshas=["Manglik Dosha", "Kuja Dosha", "Pitra Dosha"],
        )
        rules = RuleEvaluator().evaluate(facts)
        self.assertEqual(rules.dosha_keys(), ["dosha.mangal", "dosha.pitri"])
        self.assertEqual(rules.find_dosha("dosha.mangal").source, "engine")
        self.assertEqual(rules.find_dosha("dosha.pitri").source, "provider")


if __name__ == "__main__":
    unittest.main()
