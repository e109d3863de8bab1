from astro_facts.domain.kundali.divisional.base import BaseDivisionalCalculator


class D9Calculator(BaseDivisionalCalculator):
    """
    Navamsha (D9): nine divisions of 3°20', counted continuously from
    Aries so that each sign starts where the previous one ended.
    """

    chart_type = "D9"
    divisions = 9

    def _division_sign(self, sign_index: int, division_index: int) -> int:
        return (sign_index * 9 + division_index) % 12
