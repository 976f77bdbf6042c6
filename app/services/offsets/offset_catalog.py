"""
Curated carbon offset projects and offset sizing.
"""

import math

from app.pydantic_models.offset import OffsetProject, OffsetRecommendation

CURATED_SOURCE = "Curated India Projects"

CURATED_PROJECTS: tuple[OffsetProject, ...] = (
    OffsetProject(
        id="gs-001-in",
        title="Solar Power Project - Rajasthan",
        description=(
            "Large-scale solar photovoltaic power generation in Rajasthan, "
            "displacing grid electricity from fossil fuel sources."
        ),
        location="Rajasthan, India",
        project_type="Renewable Energy",
        url="https://registry.goldstandard.org/projects/details/2156",
        credit_price=12.50,
        available_credits=50000,
    ),
    OffsetProject(
        id="gs-002-in",
        title="Wind Power Project - Tamil Nadu",
        description=(
            "Wind energy generation in Tamil Nadu contributing to India's "
            "renewable energy targets."
        ),
        location="Tamil Nadu, India",
        project_type="Renewable Energy",
        url="https://registry.goldstandard.org/projects/details/1847",
        credit_price=11.75,
        available_credits=75000,
    ),
    OffsetProject(
        id="gs-003-in",
        title="Improved Cookstoves - Rural India",
        description=(
            "Efficient cookstoves for rural households, reducing fuel "
            "consumption and indoor air pollution."
        ),
        location="Multiple States, India",
        project_type="Energy Efficiency",
        url="https://registry.goldstandard.org/projects/details/1923",
        credit_price=15.00,
        available_credits=25000,
    ),
    OffsetProject(
        id="gs-004-in",
        title="Biogas Plant - Maharashtra",
        description=(
            "Community biogas converting agricultural waste into clean energy, "
            "reducing methane emissions."
        ),
        location="Maharashtra, India",
        project_type="Waste Management",
        url="https://registry.goldstandard.org/projects/details/2089",
        credit_price=13.25,
        available_credits=30000,
    ),
    OffsetProject(
        id="gs-005-in",
        title="Afforestation Project - Himachal Pradesh",
        description=(
            "Tree plantation and forest restoration sequestering carbon while "
            "providing livelihood opportunities."
        ),
        location="Himachal Pradesh, India",
        project_type="Forestry",
        url="https://registry.goldstandard.org/projects/details/1756",
        credit_price=18.00,
        available_credits=40000,
    ),
)


def list_projects() -> list[OffsetProject]:
    return list(CURATED_PROJECTS)


def recommended_offset_tonnes(total_emissions_kg: float) -> float:
    """
    Convert kilograms to tonnes, rounded up to the nearest 0.5 tonne.

    >>> recommended_offset_tonnes(1200)
    1.5
    """
    if not total_emissions_kg or total_emissions_kg <= 0:
        return 0.0
    return math.ceil(total_emissions_kg / 1000 * 2) / 2


def recommend(
    total_emissions_kg: float, projects: list[OffsetProject]
) -> OffsetRecommendation:
    """Size an offset purchase and price it at the average project credit price."""
    tonnes = recommended_offset_tonnes(total_emissions_kg)
    prices = [p.credit_price for p in projects if p.credit_price is not None]

    estimated_cost = None
    if tonnes > 0 and prices:
        estimated_cost = round(tonnes * sum(prices) / len(prices), 2)

    return OffsetRecommendation(
        total_emissions_kg=total_emissions_kg,
        recommended_offset_tonnes=tonnes,
        estimated_cost=estimated_cost,
    )
