def stamp_duty(property_value: float) -> float:
    """
    Irish residential stamp duty (cumulative bands, Budget 2025 rates):
      - 1%  on up to €1,000,000
      - 2%  on €1,000,001–€1,500,000
      - 6%  above €1,500,000

    Caveats:
      - Does NOT model non-residential rates or the bulk-purchase surcharge.
      - The consideration is taken as given; VAT-inclusive prices should be
        passed VAT-inclusive.

    Returns: duty as float, unrounded.
    """
    p = max(0.0, float(property_value))
    bands = [
        (1_000_000, 0.01),
        (1_500_000, 0.02),
        (float("inf"), 0.06),
    ]
    duty = 0.0
    prev = 0.0
    for cap, rate in bands:
        portion = max(0.0, min(p, cap) - prev)
        if portion <= 0:
            break
        duty += portion * rate
        prev = cap
    return duty
