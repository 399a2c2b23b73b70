"""
drawodds: exact and simulated draw odds for card libraries.
"""
