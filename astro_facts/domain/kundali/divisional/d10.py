from astro_facts.domain.kundali.divisional.base import BaseDivisionalCalculator


class D10Calculator(BaseDivisionalCalculator):
    """
    Dashamsha (D10): ten divisions of 3°.
    Used primarily for career and professional analysis.
    """

    chart_type = "D10"
    divisions = 10

    def _division_sign(self, sign_index: int, division_index: int) -> int:
        is_odd_sign = sign_index % 2 == 0  # Aries=0 → odd sign

        if is_odd_sign:
            return (sign_index + division_index) % 12
        return (sign_index - division_index) % 12
