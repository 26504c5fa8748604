"""
Allocation concentration calculation utilities.
Pure functions for Herfindahl-Hirschman concentration over allocation weights.
"""

from typing import Sequence, Dict


def herfindahl_index(allocations: Sequence[float]) -> float:
    """
    Calculate the Herfindahl-Hirschman Index over normalized weights.

    HHI = Σ(allocation_i / total)²

    Args:
        allocations: Allocation percentages (need not sum to 100)

    Returns:
        HHI as decimal (1.0 = single holding), 0.0 when total allocation is 0
    """
    total = sum(allocations)
    if not allocations or total == 0:
        return 0.0

    hhi = 0.0
    for allocation in allocations:
        weight = allocation / total
        hhi += weight ** 2

    return hhi


def concentration_risk(allocations: Sequence[float]) -> float:
    """
    Calculate concentration risk as HHI scaled to 0-100.

    Examples:
        [100] -> 100.0 (single full allocation)
        [25, 25, 25, 25] -> 25.0

    Returns:
        Concentration risk rounded to 2 decimals
    """
    return round(herfindahl_index(allocations) * 100, 2)


def concentration_ratios(allocations: Sequence[float]) -> Dict[str, float]:
    """
    Calculate concentration ratios (CR1, CR3) of allocations.

    CRn = sum of the n largest allocations / total allocation

    Returns:
        Dictionary with cr1 and cr3 as percentages rounded to 2 decimals,
        both 0.0 when total allocation is 0
    """
    total = sum(allocations)
    if not allocations or total == 0:
        return {'cr1': 0.0, 'cr3': 0.0}

    ordered = sorted(allocations, reverse=True)

    def cr_n(n: int) -> float:
        return round(sum(ordered[:n]) / total * 100, 2)

    return {
        'cr1': cr_n(1),
        'cr3': cr_n(3)
    }


def concentration_interpretation(concentration: float) -> str:
    """
    Provide interpretation of a 0-100 concentration risk value.

    Uses the antitrust HHI bands (1500 / 2500 on the 0-10000 scale).
    """
    if concentration < 15:
        return "Low concentration (diversified)"
    elif concentration < 25:
        return "Moderate concentration"
    else:
        return "High concentration"
