"""
Basic COCOMO Calculations

Constructive Cost Model (Boehm, 1981), basic form:

    effort           = a * KLOC ** b      (person-months)
    development_time = c * effort ** d    (months)

Coefficients depend on the project class.
"""

import enum
from dataclasses import dataclass
from typing import Dict

from finsuite.calculations.utils import power


class ProjectType(str, enum.Enum):
    """COCOMO project class."""
    organic = "Organic"
    semidetached = "Semidetached"
    embedded = "Embedded"


@dataclass(frozen=True)
class CocomoCoefficients:
    """Basic COCOMO coefficients for one project class."""

    a: float
    b: float
    c: float
    d: float


COCOMO_COEFFICIENTS: Dict[ProjectType, CocomoCoefficients] = {
    ProjectType.organic: CocomoCoefficients(a=2.4, b=1.05, c=2.5, d=0.38),
    ProjectType.semidetached: CocomoCoefficients(a=3.0, b=1.12, c=2.5, d=0.35),
    ProjectType.embedded: CocomoCoefficients(a=3.6, b=1.20, c=2.5, d=0.32),
}


@dataclass(frozen=True)
class CocomoEstimate:
    """Effort and schedule estimate."""

    effort: float  # person-months
    development_time: float  # months

    @property
    def average_staffing(self) -> float:
        """Average team size over the schedule (effort / time)."""
        if self.development_time == 0:
            return 0.0
        return self.effort / self.development_time


def calculate_cocomo(kloc: float, project_type: ProjectType) -> CocomoEstimate:
    """
    Estimate effort and development time with the basic COCOMO model.

    Args:
        kloc: Thousands of lines of code
        project_type: Project class (accepts the enum or its string value)

    Returns:
        CocomoEstimate; both figures are 0 when kloc is not positive
    """
    if kloc <= 0:
        return CocomoEstimate(effort=0.0, development_time=0.0)

    coefficients = COCOMO_COEFFICIENTS[ProjectType(project_type)]
    effort = coefficients.a * power(kloc, coefficients.b)
    development_time = coefficients.c * power(effort, coefficients.d)

    return CocomoEstimate(effort=effort, development_time=development_time)
