"""
Rent calculation.
"""


def rent_due(base_rent: int, improvement_count: int, multiplier: int) -> int:
    """
    Calculate the rent owed for a property.

    An unimproved property charges its base rent. Each improvement level adds
    one full ``base_rent * multiplier`` on top of the base.

    Args:
        base_rent: Rent of the unimproved property
        improvement_count: Number of upgrades the owner has bought
        multiplier: Rent increment factor per improvement

    Returns:
        Rent amount
    """
    if base_rent < 0 or improvement_count < 0 or multiplier < 0:
        raise ValueError("Rent inputs must be non-negative")

    rent = base_rent
    for _ in range(improvement_count):
        rent += base_rent * multiplier
    return rent
