"""relnotes command-line interface."""
