def compact_number(value):
    """Format large counts the way the roster shows them: 1.2K, 3.4M, 5.6B."""
    try:
        n = int(value or 0)
    except (TypeError, ValueError):
        return '0'
    if n >= 1_000_000_000:
        return f'{n / 1_000_000_000:.1f}B'
    if n >= 1_000_000:
        return f'{n / 1_000_000:.1f}M'
    if n >= 1_000:
        return f'{n / 1_000:.1f}K'
    return str(n)
