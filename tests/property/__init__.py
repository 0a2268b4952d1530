"""Property-based tests using Hypothesis.

These tests use generative testing to explore edge cases:
- Icon data URI round-trips for arbitrary labels
- Glyph selection for arbitrary first characters
- Gradient hue offsets for arbitrary random seeds

To run property tests:
    pytest tests/property/ -v --hypothesis-show-statistics

Requires:
    hypothesis>=6.90
"""
