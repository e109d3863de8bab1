import unittest

from chart_fixtures import aries_facts

from astro_facts.config import Settings
from astro_facts.domain.dasha.expander import DashaExpander
from astro_facts.domain.kundali.derived.derived_builder import DerivedBuilder
from astro_facts.domain.kundali.errors import InvalidOutlineError
from astro_facts.domain.rules.evaluator import RuleEvaluator
from astro_facts.domain.validation.outline_validator import (
    canonical_yoga_key,
    validate_outline,
)
from astro_facts.domain.validation.schemas import Outline, OutlineYoga


def base_outline(**extra):
    outline = {
        "summary": {"lagna": "Aries", "lagnaLord": "Mars"},
        "positions": [
            {"planet": "Saturn", "sign": "Capricorn", "house": 10, "lordOf": [11, 10], "dignity": "Own"},
            {"planet": "Mars", "sign": "Virgo", "house": 6, "lordOf": [1, 8]},
        ],
    }
    outline.update(extra)
    return outline


class TestOutlineValidator(unittest.TestCase):
    def setUp(self):
        self.facts = aries_facts()
        self.rules = RuleEvaluator().evaluate(self.facts)
        self.dasha = DashaExpander().expand(self.facts)
        self.strengths = DerivedBuilder().build(self.facts).strengths

    def validate(self, outline, **kwargs):
        kwargs.setdefault("rules", self.rules)
        return validate_outline(self.facts, outline, **kwargs)

    def test_matching_outline_is_valid(self):
        result = self.validate(base_outline())
        self.assertTrue(result.valid)
        self.assertEqual(result.errors, ())

    def test_numeric_lagna(self):
        outline = base_outline(summary={"lagna": 1, "lagna_lord": "Mangal"})
        self.assertTrue(self.validate(outline).valid)

    def test_lagna_mismatch(self):
        outline = base_outline(summary={"lagna": "Taurus", "lagnaLord": "Venus"})
        result = self.validate(outline)
        self.assertFalse(result.valid)
        self.assertEqual(result.errors, (
            "Lagna mismatch: outline says Taurus, facts say Aries",
            "Lagna lord mismatch: outline says Venus, facts say Mars",
        ))

    def test_position_mismatches_are_all_collected(self):
        outline = base_outline(positions=[
            {"planet": "Saturn", "sign": "Aquarius", "house": 11, "lordOf": [10], "dignity": "Exalted"},
            {"planet": "Pluto", "sign": "Leo", "house": 5, "lordOf": []},
        ])
        errors = self.validate(outline).errors
        self.assertEqual(len(errors), 5)
        self.assertIn("House mismatch for Saturn: outline says 11, facts say 10", errors)
        self.assertIn("Sign mismatch for Saturn: outline says Aquarius, facts say Capricorn", errors)
        self.assertIn("Lordship mismatch for Saturn: outline says [10], facts say [10,11]", errors)
        self.assertIn("Dignity mismatch for Saturn: outline says Exalted, facts say Own", errors)
        self.assertIn("Planet Pluto not found in facts", errors)

    def test_unknown_sign_in_outline_is_a_mismatch(self):
        outline = base_outline(positions=[
            {"planet": "Saturn", "sign": "Ophiuchus", "house": 10, "lordOf": [10, 11]},
        ])
        errors = self.validate(outline).errors
        self.assertEqual(errors, ("Sign mismatch for Saturn: outline says Ophiuchus, facts say Capricorn",))

    def test_shasha_attributed_to_moon_fails(self):
        outline = base_outline(yogas=[{"key": "yoga.shasha", "planet": "Moon"}])
        result = self.validate(outline)
        self.assertFalse(result.valid)
        self.assertEqual(result.errors, ("Shasha Yoga can only be by Saturn, not Moon",))

    def test_legacy_shasha_key(self):
        outline = base_outline(yogas=[{"name": "PMP_Shasha", "planet": "Moon"}])
        self.assertIn(
            "Shasha Yoga can only be by Saturn, not Moon",
            self.validate(outline).errors,
        )

        outline = base_outline(yogas=[{"name": "PMP_Shasha", "planet": "Saturn", "kendra": 10, "dignity": "Own"}])
        self.assertTrue(self.validate(outline).valid)

    def test_shasha_kendra_claim(self):
        outline = base_outline(yogas=[{"key": "yoga.shasha", "planet": "Saturn", "kendra": 7}])
        self.assertEqual(
            self.validate(outline).errors,
            ("Shasha Yoga kendra mismatch: outline says 7, facts say 10",),
        )

    def test_valid_vipareeta_claim(self):
        outline = base_outline(yogas=[{"key": "VRY", "planet": "Mars", "lordOf": 8, "placedIn": 6}])
        self.assertTrue(self.validate(outline).valid)

    def test_vipareeta_needs_two_dusthanas(self):
        outline = base_outline(yogas=[{"key": "VRY", "planet": "Jupiter", "lordOf": 12, "placedIn": 12}])
        result = self.validate(outline)
        self.assertFalse(result.valid)
        self.assertTrue(any("two different dusthana houses" in e for e in result.errors))

    def test_vipareeta_inconsistent_with_chart(self):
        outline = base_outline(yogas=[{"key": "VRY", "planet": "Jupiter", "lordOf": 8, "placedIn": 6}])
        errors = self.validate(outline).errors
        self.assertIn("Vipareeta claim for Jupiter: it does not rule house 8", errors)
        self.assertIn("Vipareeta claim for Jupiter: placed in house 12, not 6", errors)

    def test_generic_vipareeta_claim_matches_family(self):
        outline = base_outline(yogas=[{"key": "Vipareeta Raja Yoga"}])
        self.assertTrue(self.validate(outline).valid)

    def test_undetected_yoga_in_strict_mode(self):
        outline = base_outline(yogas=[{"key": "yoga.hamsa"}])
        self.assertEqual(
            self.validate(outline).errors,
            ("Yoga yoga.hamsa claimed but not detected in chart",),
        )

    def test_undetected_yoga_tolerated_when_not_strict(self):
        outline = base_outline(yogas=[{"key": "yoga.hamsa"}])
        result = self.validate(outline, settings=Settings(STRICT_VALIDATION=False))
        self.assertTrue(result.valid)

    def test_catalog_yogas_checked_without_rules(self):
        outline = base_outline(yogas=[
            {"key": "yoga.hamsa", "planet": "Jupiter"},
            {"key": "yoga.vipareeta.6-8"},
        ])
        result = validate_outline(self.facts, outline)
        self.assertFalse(result.valid)
        self.assertEqual(result.errors, (
            "Yoga yoga.hamsa claimed but not detected in chart",
            "Vipareeta claim: lord of house 6 (Mercury) placed in house 5, not 8",
        ))

    def test_detected_catalog_yogas_pass_without_rules(self):
        outline = base_outline(yogas=[
            {"key": "yoga.shasha"},
            {"key": "yoga.vipareeta.8-6"},
            {"key": "Vipareeta Raja Yoga"},
        ])
        self.assertTrue(validate_outline(self.facts, outline).valid)

    def test_provider_only_yoga_needs_rules(self):
        outline = base_outline(yogas=[{"key": "Chamara Yoga"}])
        self.assertTrue(validate_outline(self.facts, outline).valid)

        outline = base_outline(yogas=[{"key": "Sunapha Yoga"}])
        self.assertEqual(
            self.validate(outline).errors,
            ("Yoga Sunapha Yoga claimed but not detected in chart",),
        )

    def test_provider_confirmed_yoga_accepted_with_rules(self):
        outline = base_outline(yogas=[{"key": "Gaja Kesari Yoga"}])
        self.assertTrue(self.validate(outline).valid)
        self.assertFalse(validate_outline(self.facts, outline).valid)

    def test_vipareeta_key_disagrees_with_fields(self):
        outline = base_outline(yogas=[
            {"key": "yoga.vipareeta.6-8", "planet": "Mars", "lordOf": 8, "placedIn": 6},
        ])
        self.assertEqual(
            self.validate(outline).errors,
            ("Vipareeta key yoga.vipareeta.6-8 disagrees with lord of 8 placed in 6",),
        )

    def test_unreadable_vipareeta_key(self):
        outline = base_outline(yogas=[{"key": "yoga.vipareeta.sixth"}])
        self.assertEqual(
            self.validate(outline).errors,
            ("Unreadable vipareeta key yoga.vipareeta.sixth",),
        )

    def test_dignity_claims_ignore_case(self):
        outline = base_outline(
            positions=[
                {"planet": "Saturn", "sign": "Capricorn", "house": 10, "lordOf": [10, 11], "dignity": "own"},
            ],
            yogas=[{"key": "yoga.shasha", "planet": "Saturn", "dignity": "OWN"}],
        )
        self.assertTrue(self.validate(outline).valid)

        outline = base_outline(positions=[
            {"planet": "Saturn", "sign": "Capricorn", "house": 10, "lordOf": [10, 11], "dignity": "exalted"},
        ])
        self.assertEqual(
            self.validate(outline).errors,
            ("Dignity mismatch for Saturn: outline says exalted, facts say Own",),
        )

    def test_grouped_yogas(self):
        outline = base_outline(yogas={
            "panchMahapurush": [{"key": "yoga.shasha", "planet": "Saturn"}],
            "vipareetaRajyoga": [{"key": "VRY", "planet": "Mars", "lordOf": 8, "placedIn": 6}],
            "other": [{"key": "Gaja Kesari Yoga"}],
        })
        self.assertTrue(self.validate(outline).valid)

    def test_dasha_claims(self):
        outline = base_outline(dashas={"current": {"maha": "Saturn", "antar": "Budh"}})
        self.assertTrue(self.validate(outline, dasha=self.dasha).valid)

        outline = base_outline(dashas={"current": {"maha": "Saturn", "antar": "Venus"}})
        self.assertEqual(
            self.validate(outline, dasha=self.dasha).errors,
            ("Current antar dasha mismatch: outline says Venus, facts say Mercury",),
        )

    def test_strength_claims(self):
        outline = base_outline(shadbala=[
            {"planet": "Sun", "band": "Strong"},
            {"planet": "Saturn", "band": "strong"},
        ])
        self.assertEqual(
            self.validate(outline, strengths=self.strengths).errors,
            ("Strength band mismatch for Saturn: outline says strong, facts say weak",),
        )

    def test_malformed_outline_raises(self):
        with self.assertRaises(InvalidOutlineError):
            self.validate({"positions": []})

        with self.assertRaises(InvalidOutlineError):
            self.validate(base_outline(positions=[{"planet": "Saturn", "sign": "Capricorn", "house": 10}]))

    def test_accepts_parsed_outline(self):
        outline = Outline.model_validate(base_outline())
        self.assertTrue(self.validate(outline).valid)


class TestCanonicalYogaKey(unittest.TestCase):
    def test_keys(self):
        self.assertEqual(canonical_yoga_key(OutlineYoga(key="yoga.shasha")), "yoga.shasha")
        self.assertEqual(canonical_yoga_key(OutlineYoga(key="PMP_Shasha")), "yoga.shasha")
        self.assertEqual(canonical_yoga_key(OutlineYoga(key="VRY")), "yoga.vipareeta")
        self.assertEqual(
            canonical_yoga_key(OutlineYoga(key="VRY", lord_of=8, placed_in=6)),
            "yoga.vipareeta.8-6",
        )
        self.assertEqual(
            canonical_yoga_key(OutlineYoga(key="Chamara Yoga")),
            "yoga.provider.chamara-yoga",
        )


if __name__ == "__main__":
    unittest.main()
