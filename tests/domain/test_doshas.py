import unittest

from chart_fixtures import aries_facts, facts_for

from astro_facts.domain.rules.catalog import DOSHA_CATALOG
from astro_facts.domain.rules.doshas import (
    detect_alpa_shakti,
    detect_ashtama_shani,
    detect_daridra,
    detect_grahan_chandra,
    detect_grahan_surya,
    detect_guru_chandala,
    detect_kaalsarpa,
    detect_kemadruma,
    detect_mangal,
    detect_papakartari_10,
    detect_pitri,
    detect_shrapit,
    detect_vish,
)


def keys(detections):
    return [d.key for d in detections]


class TestMangalDosha(unittest.TestCase):
    def test_from_lagna_and_moon(self):
        facts = facts_for("Aries", {"Mars": "Cancer", "Moon": "Aries"})
        mangal = detect_mangal(facts)[0]
        self.assertEqual(mangal.key, "dosha.mangal")
        self.assertEqual(mangal.severity, "medium")
        self.assertEqual(
            mangal.factors,
            ("Mars in sensitive house (H4)", "Mars 4 from Moon"),
        )

    def test_from_moon_only(self):
        facts = facts_for("Aries", {"Mars": "Gemini", "Moon": "Taurus"})
        mangal = detect_mangal(facts)[0]
        self.assertEqual(mangal.factors, ("Mars 2 from Moon",))

    def test_absent(self):
        facts = facts_for("Aries", {"Mars": "Gemini", "Moon": "Aries"})
        self.assertEqual(detect_mangal(facts), [])


class TestKaalSarpa(unittest.TestCase):
    def placements(self, **overrides):
        placements = {
            "Rahu": "Aries", "Ketu": "Libra",
            "Sun": "Taurus", "Moon": "Gemini", "Mars": "Cancer",
            "Mercury": "Taurus", "Jupiter": "Leo", "Venus": "Virgo",
            "Saturn": "Gemini",
        }
        placements.update(overrides)
        return placements

    def test_all_planets_hemmed(self):
        detections = detect_kaalsarpa(facts_for("Aries", self.placements()))
        self.assertEqual(keys(detections), ["dosha.kaalsarpa"])
        self.assertEqual(detections[0].severity, "high")

    def test_one_planet_outside(self):
        facts = facts_for("Aries", self.placements(Saturn="Scorpio"))
        self.assertEqual(detect_kaalsarpa(facts), [])

    def test_planet_on_axis_breaks_it(self):
        facts = facts_for("Aries", self.placements(Sun="Aries"))
        self.assertEqual(detect_kaalsarpa(facts), [])

    def outside_placements(self, **overrides):
        # Rahu in 3, Ketu in 9; the seven spread over 10, 11, 12, 1 and 2.
        placements = {
            "Rahu": "Gemini", "Ketu": "Sagittarius",
            "Sun": "Capricorn", "Moon": "Aquarius", "Mars": "Pisces",
            "Mercury": "Capricorn", "Jupiter": "Aries", "Venus": "Taurus",
            "Saturn": "Aquarius",
        }
        placements.update(overrides)
        return placements

    def test_all_planets_outside_the_arc(self):
        facts = facts_for("Aries", self.outside_placements())
        self.assertEqual(
            sorted({p.house for p in facts.planets if p.planet not in ("Rahu", "Ketu")}),
            [1, 2, 10, 11, 12],
        )
        self.assertEqual(keys(detect_kaalsarpa(facts)), ["dosha.kaalsarpa"])

    def test_one_planet_inside_breaks_outside_arc(self):
        facts = facts_for("Aries", self.outside_placements(Venus="Leo"))
        self.assertEqual(facts.get_planet("Venus").house, 5)
        self.assertEqual(detect_kaalsarpa(facts), [])

    def test_nodes_in_same_house(self):
        facts = facts_for("Aries", self.placements(Ketu="Aries"))
        self.assertEqual(detect_kaalsarpa(facts), [])


class TestConjunctionDoshas(unittest.TestCase):
    def test_sun_with_node(self):
        facts = facts_for("Aries", {"Sun": "Leo", "Rahu": "Leo"})
        self.assertEqual(keys(detect_grahan_surya(facts)), ["dosha.grahan.surya"])
        self.assertEqual(keys(detect_pitri(facts)), ["dosha.pitri"])
        self.assertEqual(detect_grahan_surya(facts)[0].planets, ("Sun", "Rahu"))

    def test_moon_with_ketu(self):
        facts = facts_for("Aries", {"Moon": "Leo", "Ketu": "Leo"})
        self.assertEqual(keys(detect_grahan_chandra(facts)), ["dosha.grahan.chandra"])

    def test_shrapit_and_vish(self):
        facts = facts_for("Aries", {"Saturn": "Leo", "Rahu": "Leo", "Moon": "Leo"})
        self.assertEqual(keys(detect_shrapit(facts)), ["dosha.shrapit"])
        self.assertEqual(keys(detect_vish(facts)), ["dosha.vish-yoga"])

    def test_guru_chandala(self):
        facts = facts_for("Aries", {"Jupiter": "Pisces", "Rahu": "Pisces"})
        self.assertEqual(keys(detect_guru_chandala(facts)), ["dosha.guru-chandala"])


class TestMoonDoshas(unittest.TestCase):
    def test_kemadruma(self):
        facts = facts_for("Aries", {"Moon": "Cancer", "Rahu": "Gemini", "Sun": "Aries"})
        self.assertEqual(keys(detect_kemadruma(facts)), ["dosha.kemadruma"])

    def test_kemadruma_cancelled_by_neighbour(self):
        facts = facts_for("Aries", {"Moon": "Cancer", "Venus": "Leo"})
        self.assertEqual(detect_kemadruma(facts), [])

    def test_ashtama_shani(self):
        facts = facts_for("Aries", {"Moon": "Aries", "Saturn": "Scorpio"})
        self.assertEqual(keys(detect_ashtama_shani(facts)), ["dosha.ashtama-shani"])

        facts = facts_for("Aries", {"Moon": "Aries", "Saturn": "Libra"})
        self.assertEqual(detect_ashtama_shani(facts), [])

    def test_ashtama_shani_wraps(self):
        facts = facts_for("Aries", {"Moon": "Capricorn", "Saturn": "Leo"})
        self.assertEqual(keys(detect_ashtama_shani(facts)), ["dosha.ashtama-shani"])


class TestHousePatternDoshas(unittest.TestCase):
    def test_daridra(self):
        facts = facts_for("Aries", {"Mars": "Taurus", "Rahu": "Aquarius"})
        self.assertEqual(keys(detect_daridra(facts)), ["dosha.daridra"])

        facts = facts_for("Aries", {"Mars": "Taurus"})
        self.assertEqual(detect_daridra(facts), [])

    def test_papakartari(self):
        facts = facts_for("Aries", {"Mars": "Sagittarius", "Saturn": "Aquarius"})
        detections = detect_papakartari_10(facts)
        self.assertEqual(keys(detections), ["dosha.papakartari.10"])
        self.assertEqual(detections[0].planets, ("Mars", "Saturn"))

    def test_alpa_shakti(self):
        facts = facts_for("Aries", {
            "Sun": "Virgo", "Moon": "Scorpio", "Mars": "Pisces", "Venus": "Virgo",
        })
        self.assertEqual(keys(detect_alpa_shakti(facts)), ["dosha.alpa-shakti"])

    def test_nodes_do_not_count_for_alpa_shakti(self):
        facts = facts_for("Aries", {
            "Sun": "Virgo", "Moon": "Scorpio", "Rahu": "Pisces", "Ketu": "Virgo",
        })
        self.assertEqual(detect_alpa_shakti(facts), [])


class TestDoshaCatalog(unittest.TestCase):
    def test_clean_chart(self):
        facts = aries_facts()
        found = []
        for detector in DOSHA_CATALOG.values():
            found.extend(detector(facts))
        self.assertEqual(found, [])


if __name__ == "__main__":
    unittest.main()
