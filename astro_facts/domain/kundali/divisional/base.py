from abc import ABC, abstractmethod
from typing import Tuple

from astro_facts.domain.kundali.calculator import (
    degree_in_sign,
    sign_from_longitude,
    sign_label,
)
from astro_facts.domain.kundali.dignity import calculate_dignity
from astro_facts.domain.kundali.schemas import DivisionalPosition


class BaseDivisionalCalculator(ABC):
    """
    Abstract base class for all divisional chart calculators.

    Each divisional chart (D9, D10, etc.) must:
    - Implement `chart_type`
    - Implement `_division_sign`
    """

    chart_type: str
    divisions: int

    @property
    def span(self) -> float:
        return 30 / self.divisions

    def calculate(
        self,
        planet: str,
        longitude: float,
    ) -> DivisionalPosition:
        """
        Divisional sign of a planet from its absolute longitude.
        """
        sign = sign_from_longitude(longitude)
        d_sign, _ = self.position(sign, degree_in_sign(longitude))

        return DivisionalPosition(
            sign=d_sign,
            sign_label=sign_label(d_sign),
            dignity=calculate_dignity(planet, d_sign),
            source="derived",
        )

    def position(
        self,
        sign: int,
        degree: float,
    ) -> Tuple[int, float]:
        """
        Divisional sign id and degree within the division.
        """
        index = min(int(degree // self.span), self.divisions - 1)
        d_sign = self._division_sign(sign - 1, index) + 1
        degree_in_division = (degree % self.span) * (30 / self.span)
        return d_sign, round(degree_in_division, 2)

    @abstractmethod
    def _division_sign(self, sign_index: int, division_index: int) -> int:
        """
        Zero-based divisional sign index for a zero-based D1 sign index.
        """
        raise NotImplementedError
